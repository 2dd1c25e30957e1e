"""Rank tier enumeration."""
from enum import Enum


class Rank(Enum):
    """League of Legends rank tiers."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Apex tiers have a single league per queue instead of divisions."""
        return self in (Rank.MASTER, Rank.GRANDMASTER, Rank.CHALLENGER)

    @property
    def league_path(self) -> str:
        """Path segment of the league-v4 endpoint serving an apex tier."""
        if not self.is_apex:
            raise ValueError(f"{self.value} is not an apex tier")
        return f"{self.value.lower()}leagues"

    @classmethod
    def apex_tiers(cls) -> list['Rank']:
        """Apex tiers, highest first (the order seed discovery walks them)."""
        return [cls.CHALLENGER, cls.GRANDMASTER, cls.MASTER]
