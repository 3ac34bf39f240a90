import logging
import httpx
from typing import Optional, Dict, Any, List
from urllib.parse import quote
from app.config import Settings, get_settings
from app.services.henrik_api import ValorantAPIError, fetch_json

logger = logging.getLogger(__name__)

class ValorantContentService:
    """Game content (agents, maps, weapons) from valorant-api.com"""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.valorant_api_base_url
        self.transport = transport

    async def _get_data(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        logger.info("Fetching from Valorant-API.com: %s", url)
        payload = await fetch_json(url, params=params,
                                   timeout=self.settings.request_timeout, transport=self.transport)
        if not isinstance(payload, dict):
            raise ValorantAPIError(f"Unexpected payload from {url}")
        return payload.get("data")

    async def get_agents(self, language: Optional[str] = None) -> List[Dict[str, Any]]:
        data = await self._get_data("agents", {
            "isPlayableCharacter": "true",
            "language": language or self.settings.default_language,
        })
        return data or []

    async def get_agent(self, uuid: str, language: Optional[str] = None) -> Optional[Dict[str, Any]]:
        data = await self._get_data(f"agents/{quote(uuid, safe='')}", {
            "language": language or self.settings.default_language,
        })
        return data or None

    async def get_maps(self, language: Optional[str] = None) -> List[Dict[str, Any]]:
        data = await self._get_data("maps", {"language": language or self.settings.default_language})
        return data or []

    async def get_weapons(self, language: Optional[str] = None) -> List[Dict[str, Any]]:
        data = await self._get_data("weapons", {"language": language or self.settings.default_language})
        return data or []
