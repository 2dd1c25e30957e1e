"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """League of Legends lane roles/positions."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"  # Support

    @classmethod
    def from_string(cls, role_str: Optional[str]) -> Optional['Role']:
        """Create Role from a provider position string; None when it carries no role."""
        if not isinstance(role_str, str) or not role_str:
            return None
        try:
            return cls[role_str.upper()]
        except KeyError:
            mappings = {
                "SUPPORT": cls.UTILITY,
                "SUP": cls.UTILITY,
                "ADC": cls.BOTTOM,
                "BOT": cls.BOTTOM,
                "MID": cls.MIDDLE,
                "JG": cls.JUNGLE,
                "JGL": cls.JUNGLE
            }
            return mappings.get(role_str.upper())
