"""Region enumeration for League of Legends servers."""
from enum import Enum

_REGIONAL_ROUTES = {
    # Americas
    "na1": "americas",
    "br1": "americas",
    "la1": "americas",
    "la2": "americas",

    # Europe
    "euw1": "europe",
    "eun1": "europe",
    "tr1": "europe",
    "ru": "europe",
    "me1": "europe",

    # Asia
    "kr": "asia",
    "jp1": "asia",

    # SEA
    "oc1": "sea",
    "ph2": "sea",
    "sg2": "sea",
    "th2": "sea",
    "tw2": "sea",
    "vn2": "sea",
}


class Region(Enum):
    """League of Legends platforms.

    Provides:
    - platform_route: platform host (e.g., euw1), used by league endpoints
    - regional_route: routing host for match/account APIs (e.g., europe)
    """

    # Europe
    EUW1 = "euw1"  # Europe West
    EUN1 = "eun1"  # Europe Nordic & East
    TR1 = "tr1"    # Turkey
    RU = "ru"      # Russia
    ME1 = "me1"    # Middle East

    # Americas
    NA1 = "na1"    # North America
    BR1 = "br1"    # Brazil
    LA1 = "la1"    # Latin America North
    LA2 = "la2"    # Latin America South

    # Asia
    KR = "kr"      # Korea
    JP1 = "jp1"    # Japan

    # SEA & Oceania
    OC1 = "oc1"    # Oceania
    PH2 = "ph2"    # Philippines
    SG2 = "sg2"    # Singapore
    TH2 = "th2"    # Thailand
    TW2 = "tw2"    # Taiwan
    VN2 = "vn2"    # Vietnam

    @property
    def platform_route(self) -> str:
        """Get platform routing value for API calls."""
        return self.value

    @property
    def regional_route(self) -> str:
        """Get regional routing for account and match APIs."""
        return _REGIONAL_ROUTES[self.value]

    @classmethod
    def from_string(cls, value: str) -> 'Region':
        """Parse a platform code ("na1", "EUW1") or its short form ("na", "euw")."""
        code = value.strip().lower()
        for region in cls:
            if code == region.value or (region.value[-1].isdigit() and code == region.value[:-1]):
                return region
        raise ValueError(f"Unknown region: {value!r}")
