"""
GuildPilot Reference Data

The compiled-in dataset: organization records, national standards,
provincial overrides and competing-authority rules for Canadian film
and television production.

Usage:
    from guildpilot.data import build_default_dataset

    dataset = build_default_dataset()   # built once, cached
"""
from __future__ import annotations

from functools import lru_cache

from ..models import AuthorityDataset
from .national import DEPARTMENT_MAPPING, ROLE_MAPPING, default_national_standards
from .overlaps import OVERLAP_RULES, default_overlaps
from .overrides import ATLANTIC_ALIASES, PROVINCIAL_RULES, default_overrides
from .registry import ORGANIZATIONS, default_registry

DATASET_NAME = "canada-screen"
DATASET_VERSION = "1.0.0"

# General trades local used when nothing else matches
CATCH_ALL_ORGANIZATION_ID = "u-873"


@lru_cache(maxsize=1)
def build_default_dataset() -> AuthorityDataset:
    """Build and validate the compiled-in dataset."""
    return AuthorityDataset.build(
        registry=default_registry(),
        national=default_national_standards(),
        overrides=default_overrides(),
        overlaps=default_overlaps(),
        catch_all_id=CATCH_ALL_ORGANIZATION_ID,
        name=DATASET_NAME,
        version=DATASET_VERSION,
        source="builtin",
    )


__all__ = [
    "ATLANTIC_ALIASES",
    "CATCH_ALL_ORGANIZATION_ID",
    "DATASET_NAME",
    "DATASET_VERSION",
    "DEPARTMENT_MAPPING",
    "ORGANIZATIONS",
    "OVERLAP_RULES",
    "PROVINCIAL_RULES",
    "ROLE_MAPPING",
    "build_default_dataset",
]
