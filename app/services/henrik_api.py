import logging
import httpx
from typing import Optional, Dict, Any, List
from urllib.parse import quote
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

SEARCH_TAGS = ["000", "NA1", "EUW", "KR"]

REGION_TAGS = {
    "eu": ["EUW", "EU"],
    "na": ["NA", "NA1"],
    "ap": ["AP", "OCE"],
    "kr": ["KR"],
}

class ValorantAPIError(Exception):
    """HenrikDev or valorant-api.com request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

def _segment(value: str) -> str:
    return quote(value, safe="")

async def fetch_json(url: str, headers: Optional[Dict[str, str]] = None, params: Optional[Dict[str, Any]] = None,
                     timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """GET a JSON document, raising ValorantAPIError on any failure"""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", url, e)
            raise ValorantAPIError(f"Request to {url} failed: {e}") from e

    if response.status_code >= 400:
        logger.error("API error (%s) from %s: %s", response.status_code, url, response.text[:200])
        raise ValorantAPIError(f"API request failed with status: {response.status_code}", response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise ValorantAPIError(f"Invalid JSON from {url}", response.status_code) from e

class HenrikAPIService:
    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.henrik_api_base_url
        self.headers = {"Accept": "application/json"}
        if self.settings.henrik_api_key:
            self.headers["Authorization"] = self.settings.henrik_api_key
        self.transport = transport

    async def _get_data(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.info("Fetching %s", url)
        payload = await fetch_json(url, headers=self.headers, params=params,
                                   timeout=self.settings.request_timeout, transport=self.transport)
        if not isinstance(payload, dict):
            raise ValorantAPIError(f"Unexpected payload from {url}")
        return payload.get("data")

    async def get_account(self, name: str, tag: str) -> Dict[str, Any]:
        """Account lookup (name, tag, puuid, level, card)"""
        data = await self._get_data(f"/v1/account/{_segment(name)}/{_segment(tag)}")
        if not isinstance(data, dict) or not data:
            raise ValorantAPIError("Invalid account data received from Henrik API")
        return data

    async def get_mmr(self, name: str, tag: str, region: str) -> Dict[str, Any]:
        """Current rank/MMR"""
        data = await self._get_data(f"/v1/mmr/{_segment(region)}/{_segment(name)}/{_segment(tag)}")
        return data if isinstance(data, dict) else {}

    async def get_match_history(self, name: str, tag: str, region: str, size: int = 10) -> List[Dict[str, Any]]:
        """Recent competitive matches, most recent first"""
        data = await self._get_data(
            f"/v3/matches/{_segment(region)}/{_segment(name)}/{_segment(tag)}",
            params={"filter": "competitive", "size": size},
        )
        return data if isinstance(data, list) else []

    async def find_account(self, query: str, region: str) -> List[Dict[str, str]]:
        """Resolve a bare name by probing common tags, else suggest region tags"""
        for tag in SEARCH_TAGS:
            try:
                account = await self.get_account(query, tag)
            except ValorantAPIError:
                continue
            if account.get("name") and account.get("tag"):
                logger.info("Found player via Henrik API: %s#%s", account["name"], account["tag"])
                return [{"name": account["name"], "tag": account["tag"]}]

        tags = REGION_TAGS.get(region.lower(), REGION_TAGS["eu"])
        suggestions = [
            {"name": query, "tag": tags[0] if len(tags) > 0 else "EUW"},
            {"name": query, "tag": tags[1] if len(tags) > 1 else "NA"},
        ]
        logger.info("Suggesting players: %s", suggestions)
        return suggestions
