"""
Pytest configuration and fixtures for GuildPilot tests.

Provides helper factories for small hand-built datasets and fixtures for
the compiled-in one.
"""
from decimal import Decimal
from pathlib import Path

import pytest

from guildpilot.data import build_default_dataset
from guildpilot.engine import AuthorityResolver, reset_default_resolver
from guildpilot.models import (
    AuthorityDataset,
    JurisdictionOverrides,
    JurisdictionRule,
    MembershipTier,
    NationalStandards,
    Organization,
    OrganizationRegistry,
    OverlapRule,
    OverlapTable,
    TargetMetric,
)

PACKS_DIR = Path(__file__).parent.parent / "packs"


# =============================================================================
# Factory Helpers
# =============================================================================

def make_organization(
    id: str,
    name: str = None,
    description: str = None,
    dues_rate="0.03",
    application_fee="100",
    benefits: tuple = (),
    membership_tiers: tuple = (),
    **kwargs,
) -> Organization:
    """Create an Organization with required fields."""
    return Organization(
        id=id,
        name=name or id.upper(),
        description=description or f"{id} members",
        dues_rate=Decimal(dues_rate),
        application_fee=Decimal(application_fee) if application_fee is not None else None,
        benefits=benefits,
        membership_tiers=membership_tiers,
        **kwargs,
    )


def make_tier(
    name: str = "Full Member",
    metric: TargetMetric = TargetMetric.DAYS,
    value="30",
) -> MembershipTier:
    """Create a MembershipTier."""
    return MembershipTier(name=name, target_metric=metric, target_value=Decimal(value))


def make_rule(organization_id: str, roles: tuple = (), departments: tuple = ()) -> JurisdictionRule:
    """Create a JurisdictionRule."""
    return JurisdictionRule(
        organization_id=organization_id,
        role_substrings=roles,
        department_substrings=departments,
    )


def make_overlap(
    organization_ids: tuple,
    roles: tuple = (),
    departments: tuple = (),
    label: str = "test overlap",
) -> OverlapRule:
    """Create an OverlapRule."""
    return OverlapRule(
        organization_ids=organization_ids,
        role_substrings=roles,
        department_substrings=departments,
        label=label,
    )


def make_dataset(
    organization_ids: tuple = ("o-catch", "o-a", "o-b", "o-c"),
    national_roles: dict = None,
    national_departments: dict = None,
    overrides: dict = None,
    overlaps: dict = None,
    aliases: dict = None,
    catch_all_id: str = "o-catch",
) -> AuthorityDataset:
    """
    Create a validated AuthorityDataset.

    Every id in ``organization_ids`` gets a registry record; tables
    default to empty.
    """
    return AuthorityDataset.build(
        registry=OrganizationRegistry.from_records(
            make_organization(i) for i in organization_ids
        ),
        national=NationalStandards.from_mappings(
            national_roles or {}, national_departments or {}
        ),
        overrides=JurisdictionOverrides.build(overrides or {}, aliases=aliases),
        overlaps=OverlapTable.build(overlaps or {}, aliases=aliases),
        catch_all_id=catch_all_id,
        name="test",
    )


def pack_dict(**overrides) -> dict:
    """A minimal valid dataset pack as a dictionary."""
    data = {
        "schema_version": "1.0.0",
        "name": "test-pack",
        "version": "1.0.0",
        "catch_all_id": "o-catch",
        "organizations": [
            {"id": "o-catch", "name": "Catch All", "dues_rate": "0.03"},
            {"id": "o-a", "name": "Org A", "dues_rate": "0.04", "application_fee": "50"},
        ],
        "national_standards": {
            "roles": [{"key": "Actor", "organization_id": "o-a"}],
            "departments": [],
        },
        "jurisdiction_overrides": {
            "Ontario": [{"organization_id": "o-a", "roles": ["Grip"]}],
        },
        "aliases": {},
        "overlaps": {},
    }
    data.update(overrides)
    return data


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep GP_* variables and the module-level resolver out of tests."""
    for name in (
        "GP_DATASET_PATH",
        "GP_STRICT_VERSION",
        "GP_CACHE_ENABLED",
        "GP_CACHE_SIZE",
        "GP_LOG_LEVEL",
        "GP_DOCS_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_default_resolver()
    yield
    reset_default_resolver()


@pytest.fixture
def default_dataset() -> AuthorityDataset:
    return build_default_dataset()


@pytest.fixture
def resolver(default_dataset) -> AuthorityResolver:
    return AuthorityResolver(dataset=default_dataset)


@pytest.fixture
def sample_pack_path() -> Path:
    return PACKS_DIR / "northern_pilot.yaml"
