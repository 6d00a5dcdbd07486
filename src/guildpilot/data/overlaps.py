"""
Competing-authority rules.

These always run after the override and national tiers and add every
listed organization, so a role can sit under a provincial default and a
documented rival claim at the same time.
"""
from __future__ import annotations

from functools import lru_cache

from ..models import Jurisdiction, OverlapRule, OverlapTable
from .overrides import ATLANTIC_ALIASES

_ONTARIO_TECH = (
    "Grip", "Electric", "Sound", "Props", "Set Dec", "Costume", "Wardrobe",
    "Construction", "Paint", "Hair", "Makeup",
)

OVERLAP_RULES: dict[Jurisdiction, tuple[OverlapRule, ...]] = {
    Jurisdiction.ON: (
        OverlapRule(
            label="Ontario technical",
            organization_ids=("u-873", "u-nabet"),
            role_substrings=_ONTARIO_TECH,
            department_substrings=_ONTARIO_TECH,
        ),
        OverlapRule(
            label="Ontario transportation",
            organization_ids=("u-t938", "u-nabet"),
            role_substrings=("Transportation", "Driver"),
            department_substrings=("Transportation",),
        ),
    ),
    Jurisdiction.AB: (
        OverlapRule(
            label="Alberta design and editing",
            organization_ids=("u-dgc", "u-212"),
            role_substrings=("Production Designer", "Art Director", "Editor"),
        ),
    ),
    Jurisdiction.BC: (
        OverlapRule(
            label="British Columbia editing",
            organization_ids=("u-dgc", "u-891"),
            role_substrings=("Editor",),
        ),
    ),
}


@lru_cache(maxsize=1)
def default_overlaps() -> OverlapTable:
    return OverlapTable.build(OVERLAP_RULES, aliases=ATLANTIC_ALIASES)
