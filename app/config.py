import os
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default

class Settings:
    def __init__(self):
        self.henrik_api_key: Optional[str] = os.getenv("HENRIK_API_KEY") or None
        self.henrik_api_base_url = os.getenv("HENRIK_API_BASE_URL", "https://api.henrikdev.xyz/valorant").rstrip("/")
        self.valorant_api_base_url = os.getenv("VALORANT_API_BASE_URL", "https://valorant-api.com/v1").rstrip("/")
        self.default_region = os.getenv("DEFAULT_REGION", "eu")
        self.default_language = os.getenv("DEFAULT_LANGUAGE", "en-US")
        self.request_timeout = _env_float("REQUEST_TIMEOUT", 10.0)
        self.debug_mode = os.getenv("DEBUG_MODE", "false").strip().lower() in _TRUTHY
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

@lru_cache()
def get_settings() -> Settings:
    """Settings read from the environment (built once)"""
    return Settings()
