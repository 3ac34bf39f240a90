"""
Display helpers for cards and pages
"""
from typing import List
from app.models.valorant_models import CardStat, PlayerStatsSummary

def get_tier_display_name(tier: str, division: str = "") -> str:
    """"GOLD", "2" -> "Gold 2" """
    if not tier:
        return "Unranked"
    name = tier.capitalize()
    return f"{name} {division}" if division else name

def get_tier_color(tier: str) -> str:
    """Accent colour for a rank tier"""
    color_map = {
        'iron': '#4F4F4F',
        'bronze': '#A5855D',
        'silver': '#BBC2C2',
        'gold': '#ECA839',
        'platinum': '#59A9B6',
        'diamond': '#B489C4',
        'ascendant': '#2E9B6A',
        'immortal': '#BB3D65',
        'radiant': '#FFFFAA'
    }
    return color_map.get((tier or "").lower(), "#666666")

def get_region_name(region: str) -> str:
    region_map = {
        'eu': 'Europe',
        'na': 'North America',
        'ap': 'Asia Pacific',
        'kr': 'Korea',
        'latam': 'Latin America',
        'br': 'Brazil'
    }
    return region_map.get((region or "").lower(), region)

def build_card_stats(stats: PlayerStatsSummary) -> List[CardStat]:
    """Four label/value pairs in the order the card shows them"""
    return [
        CardStat(label="KDA", value=stats.kda),
        CardStat(label="WIN RATE", value=stats.win_rate),
        CardStat(label="MVPS", value=stats.mvps),
        CardStat(label="FINAL", value=stats.final),
    ]
