"""
In-memory mock data: share-card contents and offline player suggestions.
Nothing here is persisted.
"""
from typing import Dict, List
from app.models.valorant_models import BrandLogo, CardData, CardStat, SocialLink

PRO_PLAYERS = [
    {"name": "Flaptzy", "tag": "1337"},
    {"name": "TenZ", "tag": "0000"},
    {"name": "Shroud", "tag": "0000"},
    {"name": "Aceu", "tag": "0000"},
    {"name": "Sinatraa", "tag": "1337"},
]

MIN_QUERY_LENGTH = 3
MAX_SUGGESTIONS = 5

def get_mock_card_data(card_id: str) -> CardData:
    """Share page card; the id is accepted but every id maps to the same card"""
    return CardData(
        player_name="LALE ERGIN",
        title="CO-FOUNDER & CEO",
        team_name="ESA ESPORTS",
        role="",
        stats=[
            CardStat(label="KDA", value="5.8"),
            CardStat(label="MVPS", value="4"),
            CardStat(label="WIN RATE", value="90%"),
            CardStat(label="FINAL", value="3RD"),
        ],
        border_color="#3B82F6",
        background_color="#0F172A",
        text_color="#FFFFFF",
        accent_color="#60A5FA",
        template="classic",
        social_links=[
            SocialLink(platform="twitter", url="https://twitter.com/username"),
            SocialLink(platform="instagram", url="https://instagram.com/username"),
        ],
        brand_logos=[
            BrandLogo(name="READY2.GG"),
            BrandLogo(name="BtcTurk"),
        ],
    )

def suggest_players(query: str) -> List[Dict[str, str]]:
    """Offline name suggestions (there is no upstream search endpoint)"""
    if not query or len(query) < MIN_QUERY_LENGTH:
        return []

    candidates = [
        {"name": query, "tag": "0000"},
        {"name": f"{query}Pro", "tag": "1337"},
        {"name": f"{query}Player", "tag": "9999"},
    ] + PRO_PLAYERS

    needle = query.lower()
    return [dict(p) for p in candidates if needle in p["name"].lower()][:MAX_SUGGESTIONS]
