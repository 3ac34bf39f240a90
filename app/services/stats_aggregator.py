"""
Match statistics aggregation: KDA, win rate, MVPs, final score and rank helpers.

Every function here is pure and total: malformed match entries are skipped,
missing counters read as 0 and zero denominators yield fixed display values.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, NamedTuple, Optional

from app.models.valorant_models import ValorantPlayerStats, PlayerStatsSummary

KDA_WINDOW = 5
MATCH_WINDOW = 10

RANK_ICON_URL = (
    "https://media.valorant-api.com/competitivetiers/"
    "03621f52-342b-cf4e-4f86-9350a49c6d04/{index}/largeicon.png"
)
RADIANT_ICON_INDEX = 27
DEFAULT_TIER_BASE = 12

TIER_BASE_INDEX = {
    "iron": 3,
    "bronze": 6,
    "silver": 9,
    "gold": 12,
    "platinum": 15,
    "diamond": 18,
    "ascendant": 21,
    "immortal": 24,
}

FALLBACK_TIERS = [
    "IRON", "BRONZE", "SILVER", "GOLD", "PLATINUM",
    "DIAMOND", "ASCENDANT", "IMMORTAL", "RADIANT",
]

FINAL_SCORE_WEIGHTS = {
    "kills": Decimal("1"),
    "assists": Decimal("0.5"),
    "first_bloods": Decimal("2"),
    "plants": Decimal("1.5"),
    "defuses": Decimal("1.5"),
}

_STAT_ALIASES = {
    "first_bloods": ("first_bloods", "firstBloods"),
}

_ONE_DECIMAL = Decimal("0.1")
_INTEGER = Decimal("1")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class RankInfo(NamedTuple):
    tier: str
    division: str


# --- helpers -----------------------------------------------------------------

def _one_decimal(value: Decimal) -> str:
    return str(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _round_int(value: Decimal) -> str:
    return str(value.quantize(_INTEGER, rounding=ROUND_HALF_UP))


def _window(matches: Any, size: int) -> List[Any]:
    if not isinstance(matches, (list, tuple)):
        return []
    return list(matches[:size])


def _roster(match: Any) -> List[Dict[str, Any]]:
    """Player blocks of a match, either ``players.all_players`` or a bare list."""
    if not isinstance(match, dict):
        return []
    players = match.get("players")
    if isinstance(players, dict):
        players = players.get("all_players")
    if not isinstance(players, list):
        return []
    return [p for p in players if isinstance(p, dict)]


def _same_identity(player: Dict[str, Any], name: str, tag: str) -> bool:
    p_name = player.get("name")
    p_tag = player.get("tag")
    if not isinstance(p_name, str) or not isinstance(p_tag, str):
        return False
    return p_name.lower() == name.lower() and p_tag.lower() == tag.lower()


def find_player(match: Any, name: str, tag: str) -> Optional[Dict[str, Any]]:
    """Locate the player's block in a match (case-insensitive name and tag)."""
    if not isinstance(name, str) or not isinstance(tag, str):
        return None
    return next((p for p in _roster(match) if _same_identity(p, name, tag)), None)


def _stats_block(player: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if player is None:
        return None
    stats = player.get("stats")
    return stats if isinstance(stats, dict) else None


def _stat(stats: Dict[str, Any], key: str) -> int:
    for alias in _STAT_ALIASES.get(key, (key,)):
        value = stats.get(alias)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if not math.isfinite(value) or value < 0:
            return 0
        return value
    return 0


def _team_key(player: Dict[str, Any]) -> Optional[str]:
    team = player.get("team")
    if not isinstance(team, str) or not team:
        return None
    return team.lower()


def _team_won(match: Dict[str, Any], player: Dict[str, Any]) -> Optional[bool]:
    """Outcome for the player's team, or None when it cannot be determined."""
    team = _team_key(player)
    teams = match.get("teams")
    if team is None or not isinstance(teams, dict):
        return None
    entry = teams.get(team)
    if not isinstance(entry, dict):
        return None
    has_won = entry.get("has_won", entry.get("hasWon"))
    if not isinstance(has_won, bool):
        return None
    return has_won


def _teammate_scores(match: Any, player: Dict[str, Any]) -> Optional[List[int]]:
    """Scores of everyone else on the player's team; None if the team is unknown."""
    team = _team_key(player)
    if team is None:
        return None
    return [
        _stat(_stats_block(p) or {}, "score")
        for p in _roster(match)
        if p is not player and _team_key(p) == team
    ]


# --- rank --------------------------------------------------------------------

def parse_rank(text: Optional[str]) -> RankInfo:
    """Parse "Gold 2" / "Radiant" / "Unranked" into (TIER, division)."""
    if not isinstance(text, str) or not text or text == "Unranked":
        return RankInfo("UNRANKED", "")

    parts = text.split(" ")
    tier = parts[0].upper()
    division = parts[1] if len(parts) > 1 and parts[1] in ("1", "2", "3") else ""
    return RankInfo(tier, division)


def _division_offset(division: Any) -> int:
    if isinstance(division, int) and not isinstance(division, bool):
        return division - 1
    if not isinstance(division, str):
        return 0
    match = _LEADING_INT.match(division)
    if not match:
        return 0
    return int(match.group(1)) - 1


def rank_icon_index(tier: Optional[str], division: Optional[str] = "") -> int:
    tier_key = tier.lower() if isinstance(tier, str) else ""
    if tier_key == "radiant":
        return RADIANT_ICON_INDEX

    base = TIER_BASE_INDEX.get(tier_key, DEFAULT_TIER_BASE)
    return base + _division_offset(division)


def rank_icon_url(tier: Optional[str] = "GOLD", division: Optional[str] = "1") -> str:
    return RANK_ICON_URL.format(index=rank_icon_index(tier, division))


# --- match aggregations ------------------------------------------------------

def compute_kda(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    """(kills + assists) / deaths over the last five matches, one decimal."""
    kills = deaths = assists = 0
    found = 0

    for match in _window(matches, KDA_WINDOW):
        stats = _stats_block(find_player(match, name, tag))
        if stats is None:
            continue
        kills += _stat(stats, "kills")
        deaths += _stat(stats, "deaths")
        assists += _stat(stats, "assists")
        found += 1

    if found == 0 or deaths == 0:
        return "0.0"
    return _one_decimal(Decimal(kills + assists) / Decimal(deaths))


def win_rate_percent_string(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    """Wins over every considered match (max 10), e.g. ``"70%"``.

    Matches where the player cannot be located still count toward the
    denominator.
    """
    window = _window(matches, MATCH_WINDOW)
    if not window:
        return "0%"

    wins = 0
    for match in window:
        player = find_player(match, name, tag)
        if player is not None and _team_won(match, player):
            wins += 1

    return _round_int(Decimal(100 * wins) / Decimal(len(window))) + "%"


compute_win_rate = win_rate_percent_string


def win_rate_decimal_string(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    """Wins over matches with a known outcome for the player (max 10), e.g. ``"70.0"``."""
    wins = 0
    resolved = 0

    for match in _window(matches, MATCH_WINDOW):
        player = find_player(match, name, tag)
        if player is None:
            continue
        outcome = _team_won(match, player)
        if outcome is None:
            continue
        resolved += 1
        if outcome:
            wins += 1

    if resolved == 0:
        return "0.0"
    return _one_decimal(Decimal(100 * wins) / Decimal(resolved))


def _count_mvps(matches: List[Dict[str, Any]], name: str, tag: str, strict: bool) -> str:
    mvp_count = 0

    for match in _window(matches, MATCH_WINDOW):
        player = find_player(match, name, tag)
        stats = _stats_block(player)
        if stats is None:
            continue
        teammates = _teammate_scores(match, player)
        if teammates is None:
            continue
        score = _stat(stats, "score")
        if strict:
            is_mvp = all(score > other for other in teammates)
        else:
            is_mvp = all(score >= other for other in teammates)
        if is_mvp:
            mvp_count += 1

    return str(mvp_count)


def compute_mvp_count(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    """Matches (max 10) where the player's score ties or tops every teammate."""
    return _count_mvps(matches, name, tag, strict=False)


def compute_mvp_count_strict(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    """Matches (max 10) where the player is the sole top scorer of their team."""
    return _count_mvps(matches, name, tag, strict=True)


def compute_final_score(matches: List[Dict[str, Any]], name: str, tag: str) -> str:
    totals = {key: 0 for key in FINAL_SCORE_WEIGHTS}
    found = 0

    for match in _window(matches, MATCH_WINDOW):
        stats = _stats_block(find_player(match, name, tag))
        if stats is None:
            continue
        for key in totals:
            totals[key] += _stat(stats, key)
        found += 1

    if found == 0:
        return "0"

    weighted = sum(
        (Decimal(str(totals[key])) * weight for key, weight in FINAL_SCORE_WEIGHTS.items()),
        Decimal(0),
    )
    return _round_int(weighted)


def summarize_matches(matches: List[Dict[str, Any]], name: str, tag: str) -> PlayerStatsSummary:
    return PlayerStatsSummary(
        kda=compute_kda(matches, name, tag),
        win_rate=win_rate_percent_string(matches, name, tag),
        mvps=compute_mvp_count(matches, name, tag),
        final=compute_final_score(matches, name, tag),
    )


# --- fallback ----------------------------------------------------------------

def name_hash(player_name: str) -> int:
    # UTF-16 code units, so astral characters count as two surrogates
    data = (player_name or "").encode("utf-16-le", errors="surrogatepass")
    return sum(int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2))


def generate_fallback_stats(player_name: str, player_tag: str) -> ValorantPlayerStats:
    """Deterministic stand-in stats derived from the player name only."""
    h = name_hash(player_name)

    tier = FALLBACK_TIERS[h % len(FALLBACK_TIERS)]
    rank = "" if tier == "RADIANT" else str(h % 3 + 1)

    return ValorantPlayerStats(
        kda=_one_decimal(Decimal(h % 30) / 10 + 2),
        win_rate=_one_decimal(Decimal(h % 40) / 10 + 4),
        mvps=_one_decimal(Decimal(h % 20) / 10 + 3),
        final=_one_decimal(Decimal(h % 50) / 10 + 5),
        player_name=player_name,
        player_tag=player_tag,
        tier=tier,
        rank=rank,
        is_fallback=True,
    )


def elo_final_rating(elo: Any) -> str:
    if isinstance(elo, bool) or not isinstance(elo, (int, float)):
        return "5.8"
    if not math.isfinite(elo) or elo <= 0:
        return "5.8"
    return _one_decimal(Decimal(str(elo)) / 100)
