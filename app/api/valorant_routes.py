import logging
from fastapi import APIRouter, HTTPException, Request
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse
from pathlib import Path
from typing import Optional
from app.config import get_settings
from app.models.valorant_models import CardData, PlayerCardData, RankIcon, ValorantPlayerStats
from app.services.henrik_api import HenrikAPIService, ValorantAPIError
from app.services.valorant_content import ValorantContentService
from app.services.player_stats import PlayerStatsService
from app.services.mock_data import get_mock_card_data, suggest_players
from app.services import stats_aggregator
from app.utils.display_utils import get_tier_display_name, get_tier_color, get_region_name

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
henrik_service = HenrikAPIService()
content_service = ValorantContentService()
player_stats_service = PlayerStatsService(henrik_service)

def _upstream_error(e: ValorantAPIError) -> HTTPException:
    detail = {"error": "Upstream API request failed"}
    if get_settings().debug_mode:
        detail["details"] = str(e)
    return HTTPException(status_code=502, detail=detail)

def _require(value: Optional[str], message: str) -> str:
    if not value:
        raise HTTPException(status_code=400, detail=message)
    return value

@router.get("/api/valorant")
async def valorant_proxy(
    action: Optional[str] = None,
    region: Optional[str] = None,
    language: Optional[str] = None,
    gameName: Optional[str] = None,
    tagLine: Optional[str] = None,
    uuid: Optional[str] = None,
):
    """Passthrough to HenrikDev (player) and valorant-api.com (content)"""
    action = _require(action, "Missing action parameter")
    region = region or get_settings().default_region

    try:
        if action == "player":
            if not gameName or not tagLine:
                raise HTTPException(status_code=400, detail="Missing gameName or tagLine parameters")
            return await player_stats_service.fetch_raw_player(gameName, tagLine, region)
        if action == "agents":
            return {"data": await content_service.get_agents(language)}
        if action == "agent":
            uuid = _require(uuid, "Missing uuid parameter")
            return {"data": await content_service.get_agent(uuid, language)}
        if action == "maps":
            return {"data": await content_service.get_maps(language)}
        if action == "weapons":
            return {"data": await content_service.get_weapons(language)}
    except ValorantAPIError as e:
        logger.error("Error in Valorant API route (%s): %s", action, e)
        raise _upstream_error(e)

    raise HTTPException(status_code=400, detail="Invalid action parameter")

@router.get("/api/valorant/stats", response_model=ValorantPlayerStats)
async def valorant_player_stats(name: Optional[str] = None, tag: Optional[str] = None, region: Optional[str] = None):
    """Service-layer stats; never fails, falls back to generated values"""
    return await player_stats_service.fetch_player_stats(name or "", tag or "", region or get_settings().default_region)

@router.get("/api/tracker-network/player", response_model=PlayerCardData)
async def tracker_player(name: Optional[str] = None, tag: Optional[str] = None, region: Optional[str] = None):
    """Card-ready player data"""
    if not name or not tag:
        raise HTTPException(status_code=400, detail="Name and tag parameters are required")
    return await player_stats_service.fetch_player_card(name, tag, region or get_settings().default_region)

@router.get("/api/tracker-network/search")
async def tracker_search(query: Optional[str] = None, region: Optional[str] = None):
    query = _require(query, "Query parameter is required")
    players = await henrik_service.find_account(query, region or get_settings().default_region)
    return {"players": players}

@router.get("/api/players/suggest")
async def player_suggestions(query: str = ""):
    return {"players": suggest_players(query)}

@router.get("/api/rank-icon", response_model=RankIcon)
async def rank_icon(tier: str = "GOLD", division: str = "1"):
    return RankIcon(
        tier=tier.upper(),
        division=division,
        index=stats_aggregator.rank_icon_index(tier, division),
        url=stats_aggregator.rank_icon_url(tier, division),
    )

@router.get("/api/tournament-card/share/{card_id}", response_model=CardData)
async def shared_card(card_id: str):
    return get_mock_card_data(card_id)

@router.get("/player/{name}/{tag}", response_class=HTMLResponse)
async def player_profile(request: Request, name: str, tag: str, region: Optional[str] = None):
    """Player stats page"""
    region = region or get_settings().default_region
    card = await player_stats_service.fetch_player_card(name, tag, region)
    return templates.TemplateResponse(request, "player_profile.html", {
        "card": card,
        "region_name": get_region_name(region),
        "tier_name": get_tier_display_name(card.rank.tier, card.rank.number),
        "tier_color": get_tier_color(card.rank.tier),
    })
