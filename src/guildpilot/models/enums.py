"""
GuildPilot Enumerations

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union


# =============================================================================
# Jurisdictions
# =============================================================================

_POSTAL_CODES = {
    "Alberta": "AB",
    "British Columbia": "BC",
    "Manitoba": "MB",
    "New Brunswick": "NB",
    "Newfoundland and Labrador": "NL",
    "Nova Scotia": "NS",
    "Northwest Territories": "NT",
    "Nunavut": "NU",
    "Ontario": "ON",
    "Prince Edward Island": "PE",
    "Quebec": "QC",
    "Saskatchewan": "SK",
    "Yukon": "YT",
}


class Jurisdiction(str, Enum):
    """
    Canadian provinces and territories.

    Values are the display names used on worker profiles; rule tables
    are keyed by these values.
    """
    AB = "Alberta"
    BC = "British Columbia"
    MB = "Manitoba"
    NB = "New Brunswick"
    NL = "Newfoundland and Labrador"
    NS = "Nova Scotia"
    NT = "Northwest Territories"
    NU = "Nunavut"
    ON = "Ontario"
    PE = "Prince Edward Island"
    QC = "Quebec"
    SK = "Saskatchewan"
    YT = "Yukon"

    @property
    def code(self) -> str:
        """Two-letter postal abbreviation."""
        return _POSTAL_CODES[self.value]

    @classmethod
    def coerce(cls, value: Union[str, "Jurisdiction", None]) -> Optional["Jurisdiction"]:
        """
        Interpret a member, display name or postal code.

        Matching is case-insensitive and ignores surrounding whitespace.
        Returns None for anything unrecognised.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text:
            return None
        for member in cls:
            if text == member.value.lower() or text == member.code.lower():
                return member
        return None


def canonical_jurisdiction(value: Union[str, Jurisdiction, None]) -> str:
    """
    Table key for a jurisdiction.

    Known provinces and territories collapse to their display name
    ("on", "ON" and "Ontario" all give "Ontario"). Anything else is
    kept as its stripped text so custom datasets can use their own keys.
    """
    member = Jurisdiction.coerce(value)
    if member is not None:
        return member.value
    if value is None:
        return ""
    return str(value).strip()


# =============================================================================
# Membership
# =============================================================================

class TargetMetric(str, Enum):
    """What a membership tier counts toward its threshold."""
    HOURS = "HOURS"
    DAYS = "DAYS"
    CREDITS = "CREDITS"
    EARNINGS = "EARNINGS"


# =============================================================================
# Resolution
# =============================================================================

class ResolutionTier(str, Enum):
    """
    Precedence tier that contributed an organization to a result.

    Listed in evaluation order.
    """
    JURISDICTION_ROLE = "jurisdiction_role"
    JURISDICTION_DEPARTMENT = "jurisdiction_department"
    NATIONAL_ROLE = "national_role"
    NATIONAL_DEPARTMENT = "national_department"
    OVERLAP = "overlap"
    CATCH_ALL = "catch_all"
