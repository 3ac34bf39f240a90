from pydantic import BaseModel
from typing import Optional, List, Literal

CardTemplateName = Literal[
    "classic", "modern", "angled", "fifa", "esports",
    "minimalist", "new_one", "golden", "flaptzy",
]

class PlayerStatsSummary(BaseModel):
    kda: str
    win_rate: str
    mvps: str
    final: str

class PlayerRank(BaseModel):
    tier: str
    number: str

class CardStat(BaseModel):
    label: str
    value: str

class PlayerCardData(BaseModel):
    name: str
    tag: str
    region: str
    stats: PlayerStatsSummary
    rank: PlayerRank
    image: Optional[str] = None
    rank_icon: str
    card_stats: List[CardStat]
    is_fallback: bool = False

class ValorantPlayerStats(BaseModel):
    kda: str
    win_rate: str
    mvps: str
    final: str
    player_name: str
    player_tag: str
    tier: str
    rank: str
    is_fallback: bool = False

class RankIcon(BaseModel):
    tier: str
    division: str
    index: int
    url: str

class SocialLink(BaseModel):
    platform: str
    url: str

class BrandLogo(BaseModel):
    name: str
    image_url: str = ""

class CardData(BaseModel):
    player_name: str
    title: str
    team_name: str
    role: str = ""
    player_image: Optional[str] = None
    stats: List[CardStat]
    border_color: str
    background_color: str
    text_color: str
    accent_color: str
    template: CardTemplateName = "classic"
    social_links: List[SocialLink] = []
    brand_logos: List[BrandLogo] = []
