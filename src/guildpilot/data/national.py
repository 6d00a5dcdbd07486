"""
National standards: the fallback when no provincial rule applies.

Declaration order matters only when two matching keys have the same
length; otherwise the longest matching key wins.
"""
from __future__ import annotations

from functools import lru_cache

from ..models import NationalStandards

ROLE_MAPPING: dict[str, str] = {
    # Direction
    "Director": "u-dgc",
    "Assistant Director": "u-dgc",
    "Script Supervisor": "u-dgc",

    # Production office
    "Coordinator": "u-411",
    "Production Manager": "u-dgc",
    "Location Manager": "u-dgc",

    # Camera
    "Director of Photography": "u-667",
    "Cinematographer": "u-667",
    "DOP": "u-667",
    "Operator": "u-667",
    "Assistant Camera": "u-667",
    "Still Photographer": "u-667",

    # Creative
    "Production Designer": "u-dgc",
    "Art Director": "u-dgc",
    "Editor": "u-dgc",
    "Writer": "u-wgc",

    # Performers
    "Actor": "u-actra",
    "Stunt": "u-actra",
    "Background": "u-actra",

    # Logistics
    "Driver": "u-t938",
    "Transportation": "u-t938",
    "Grip": "u-873",
    "Electric": "u-873",
    "Sound": "u-873",
    "Props": "u-873",
    "Set Dec": "u-873",
    "Costume": "u-873",
    "Wardrobe": "u-873",
    "Construction": "u-873",
    "Paint": "u-873",
    "Hair": "u-873",
    "Makeup": "u-873",
    "Craft": "u-873",
}

DEPARTMENT_MAPPING: dict[str, str] = {
    "Direction": "u-dgc",
    "Performer": "u-actra",
    "Writing": "u-wgc",
    "Transportation": "u-t938",
    "Camera Department": "u-667",

    # Technical departments
    "Lighting": "u-873",
    "Electric": "u-873",
    "Grip": "u-873",
    "Sound": "u-873",
    "Art Department": "u-873",
    "Construction": "u-873",
    "Costume": "u-873",
    "Hair": "u-873",
    "Makeup": "u-873",
}


@lru_cache(maxsize=1)
def default_national_standards() -> NationalStandards:
    return NationalStandards.from_mappings(ROLE_MAPPING, DEPARTMENT_MAPPING)
