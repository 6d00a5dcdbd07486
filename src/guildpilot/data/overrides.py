"""
Provincial override rules.

Each province lists its rules in order; every matching rule applies.
Role rules are tried first, department rules only when no role rule
matched. The Atlantic provinces share Nova Scotia's list.
"""
from __future__ import annotations

from functools import lru_cache

from ..models import Jurisdiction, JurisdictionOverrides, JurisdictionRule

_CAMERA_ROLES = ("DOP / Operator", "Assistant (1st/2nd)", "Still Photographer")

_TECH_ROLES = (
    "Script Supervisor", "Coordinator", "Grip", "Electric", "Sound", "Props",
    "Set Dec", "Costume", "Wardrobe", "Construction", "Paint", "Hair",
    "Makeup", "Craft", "First Aid",
)


def _roles(organization_id: str, *roles: str) -> JurisdictionRule:
    return JurisdictionRule(organization_id=organization_id, role_substrings=roles)


def _departments(organization_id: str, *departments: str) -> JurisdictionRule:
    return JurisdictionRule(organization_id=organization_id, department_substrings=departments)


PROVINCIAL_RULES: dict[Jurisdiction, tuple[JurisdictionRule, ...]] = {
    Jurisdiction.BC: (
        _roles("u-ubcp", "Actor", "Stunt", "Background"),
        _roles("u-891", *_TECH_ROLES),
        _roles("u-669", *_CAMERA_ROLES),
        _roles("u-t155", "Driver", "Transportation", "Coordinator / Driver", "Catering", "Security"),
        _roles("u-dgc", "Editor", "Picture Editor", "Sound Editor"),
        _departments(
            "u-891",
            "Camera Department", "Sound", "Grip", "Electric", "Art Dept", "Props",
            "Set Dec", "Costume", "Construction", "Paint", "Hair", "Makeup", "First Aid",
        ),
    ),
    Jurisdiction.AB: (
        _roles("u-669", *_CAMERA_ROLES),
        _roles("u-212", *_TECH_ROLES),
        _roles("u-t362", "Driver", "Transportation", "Coordinator / Driver", "Security"),
        _roles(
            "u-dgc",
            "Production Designer", "Art Director", "Editor", "Picture Editor",
            "Accountant", "Production Accountant",
        ),
    ),
    Jurisdiction.MB: (
        _roles("u-669", *_CAMERA_ROLES),
        _roles("u-856", *_TECH_ROLES, "Attendant", "Server"),
        _departments("u-856", "First Aid", "Craft Service"),
    ),
    Jurisdiction.ON: (
        _roles("u-667", *_CAMERA_ROLES, "Publicity"),
        _roles("u-411", "Coordinator", "Coordinator / Driver", "Server"),
        _roles("u-873", "Script Supervisor"),
        _roles("u-t938", "Driver", "Transportation"),
        _departments(
            "u-873",
            "Grip", "Electric", "Sound", "Props", "Set Dec", "Costume", "Wardrobe",
            "Construction", "Paint", "Hair", "Makeup",
        ),
    ),
    Jurisdiction.QC: (
        _departments(
            "u-aqtis",
            "Camera Department", "Grip", "Electric", "Sound", "Art Dept", "Props",
            "Set Dec", "Costume", "Wardrobe", "Construction", "Paint", "Hair", "Makeup",
            "Transportation", "Craft Service", "First Aid", "Accounting Department",
            "Picture Editing", "Sound Editing",
        ),
        # No bare "Director" key: it would capture "Director of Photography"
        # before the camera department rule is consulted.
        _roles(
            "u-dgc",
            "1st/2nd AD", "Assistant Director", "Script Supervisor",
            "Production Designer", "Art Director", "Editor",
        ),
        _departments("u-dgc", "Direction", "Directing"),
    ),
    Jurisdiction.NS: (
        _roles("u-667", *_CAMERA_ROLES),
        _roles("u-849", *_TECH_ROLES, "Transportation"),
    ),
}

ATLANTIC_ALIASES: dict[Jurisdiction, Jurisdiction] = {
    Jurisdiction.NB: Jurisdiction.NS,
    Jurisdiction.PE: Jurisdiction.NS,
    Jurisdiction.NL: Jurisdiction.NS,
}


@lru_cache(maxsize=1)
def default_overrides() -> JurisdictionOverrides:
    return JurisdictionOverrides.build(PROVINCIAL_RULES, aliases=ATLANTIC_ALIASES)
