"""
Fetch-then-aggregate pipeline: HenrikDev data -> match aggregation -> card payload.

Every upstream call is made once; a failed account lookup short-circuits to
the deterministic fallback generator.
"""
import logging
from typing import Any, Dict, Optional
from app.models.valorant_models import (
    PlayerCardData,
    PlayerRank,
    PlayerStatsSummary,
    ValorantPlayerStats,
)
from app.services.henrik_api import HenrikAPIService, ValorantAPIError
from app.services import stats_aggregator
from app.utils.display_utils import build_card_stats

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300"
DEFAULT_TIER = "GOLD"
DEFAULT_DIVISION = "2"

def _empty_stats() -> PlayerStatsSummary:
    return PlayerStatsSummary(kda="0.0", win_rate="0%", mvps="0", final="0")

def _card_image(account: Dict[str, Any]) -> str:
    card = account.get("card")
    if isinstance(card, dict) and card.get("large"):
        return card["large"]
    return PLACEHOLDER_IMAGE

class PlayerStatsService:
    def __init__(self, henrik: Optional[HenrikAPIService] = None):
        self.henrik = henrik or HenrikAPIService()

    def fallback_card(self, name: str, tag: str, region: str) -> PlayerCardData:
        fallback = stats_aggregator.generate_fallback_stats(name, tag)
        stats = PlayerStatsSummary(
            kda=fallback.kda,
            win_rate=fallback.win_rate,
            mvps=fallback.mvps,
            final=fallback.final,
        )
        return PlayerCardData(
            name=name,
            tag=tag,
            region=region,
            stats=stats,
            rank=PlayerRank(tier=fallback.tier, number=fallback.rank),
            image=PLACEHOLDER_IMAGE,
            rank_icon=stats_aggregator.rank_icon_url(fallback.tier, fallback.rank),
            card_stats=build_card_stats(stats),
            is_fallback=True,
        )

    async def fetch_player_card(self, name: str, tag: str, region: str) -> PlayerCardData:
        """Tracker-style card data: percent win rate, tie-inclusive MVPs, weighted final score"""
        logger.info("Player data request: %s#%s (%s)", name, tag, region)

        try:
            account = await self.henrik.get_account(name, tag)
        except ValorantAPIError as e:
            logger.warning("Account lookup failed for %s#%s, using fallback data: %s", name, tag, e)
            return self.fallback_card(name, tag, region)

        tier, division = DEFAULT_TIER, DEFAULT_DIVISION
        try:
            mmr = await self.henrik.get_mmr(name, tag, region)
        except ValorantAPIError as e:
            logger.warning("MMR lookup failed for %s#%s: %s", name, tag, e)
            mmr = {}
        if mmr.get("currenttierpatched"):
            tier, division = stats_aggregator.parse_rank(mmr["currenttierpatched"])

        stats = _empty_stats()
        try:
            matches = await self.henrik.get_match_history(name, tag, region)
        except ValorantAPIError as e:
            logger.warning("Match history lookup failed for %s#%s: %s", name, tag, e)
            matches = []
        if matches:
            stats = stats_aggregator.summarize_matches(matches, name, tag)

        logger.info("Stats for %s#%s: %s, rank %s %s", name, tag, stats.model_dump(), tier, division)

        return PlayerCardData(
            name=name,
            tag=tag,
            region=region,
            stats=stats,
            rank=PlayerRank(tier=tier, number=division),
            image=_card_image(account),
            rank_icon=stats_aggregator.rank_icon_url(tier, division),
            card_stats=build_card_stats(stats),
        )

    async def fetch_player_stats(self, name: str, tag: str, region: str) -> ValorantPlayerStats:
        """Service-layer stats: decimal win rate, ELO-based final rating"""
        if not name or not tag:
            logger.warning("Player name and tag are required, using fallback data")
            return stats_aggregator.generate_fallback_stats(name or "", tag or "")

        try:
            raw = await self.fetch_raw_player(name, tag, region)
        except ValorantAPIError as e:
            logger.warning("API error, using fallback data: %s", e)
            return stats_aggregator.generate_fallback_stats(name, tag)

        account, mmr, matches = raw["account"], raw["mmr"], raw["matches"]
        tier, division = stats_aggregator.parse_rank(mmr.get("currenttierpatched") or "")

        return ValorantPlayerStats(
            kda=stats_aggregator.compute_kda(matches, name, tag),
            win_rate=stats_aggregator.win_rate_decimal_string(matches, name, tag),
            mvps=stats_aggregator.compute_mvp_count(matches, name, tag),
            final=stats_aggregator.elo_final_rating(mmr.get("elo")),
            player_name=account.get("name") or name,
            player_tag=account.get("tag") or tag,
            tier=tier,
            rank=division,
        )

    async def fetch_raw_player(self, name: str, tag: str, region: str) -> Dict[str, Any]:
        """Combined account / MMR / match history, errors propagate"""
        account = await self.henrik.get_account(name, tag)
        mmr = await self.henrik.get_mmr(name, tag, region)
        matches = await self.henrik.get_match_history(name, tag, region)
        return {"account": account, "mmr": mmr, "matches": matches}
