"""
GuildPilot Organization Registry

Descriptive records for the guilds, unions and locals that can hold
bargaining authority, plus the read-only registry the resolver's
callers use to turn resolved ids into displayable records.

Key features:
- Immutable records (frozen dataclasses, tuples for ordered lists)
- Construction-time validation of rates, fees and tier targets
- Lookup by id with an explicit raising variant
- Bulk lookup that asserts on unknown ids in debug runs and skips
  them (with a warning) when assertions are disabled
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..exceptions import OrganizationNotFoundError, RuleDefinitionError
from .enums import TargetMetric

logger = logging.getLogger(__name__)


# =============================================================================
# Membership Tier
# =============================================================================

@dataclass(frozen=True)
class MembershipTier:
    """
    One rung of an organization's membership ladder.

    Attributes:
        name: Tier label (e.g., "Permittee", "Full Member")
        target_metric: What is counted (days worked, credits, ...)
        target_value: Threshold to reach the tier
        description: Short explanation for display
    """
    name: str
    target_metric: TargetMetric
    target_value: Decimal
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.target_metric, TargetMetric):
            object.__setattr__(self, "target_metric", TargetMetric(self.target_metric))
        if not isinstance(self.target_value, Decimal):
            object.__setattr__(self, "target_value", Decimal(str(self.target_value)))
        if self.target_value < 0:
            raise RuleDefinitionError(
                message=f"Tier '{self.name}' has a negative target",
                details={"tier": self.name, "target_value": str(self.target_value)},
            )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "target_metric": self.target_metric.value,
            "target_value": str(self.target_value),
            "description": self.description,
        }


# =============================================================================
# Organization
# =============================================================================

@dataclass(frozen=True)
class Organization:
    """
    A labour organization (guild, union or local).

    Attributes:
        id: Stable short code, unique across the registry (e.g., "u-873")
        name: Display name
        description: Who the organization represents
        dues_rate: Fraction of earnings paid as dues (0.045 = 4.5%)
        application_fee: One-off initiation fee, if any
        benefits: Member benefits, in display order
        membership_tiers: Membership ladder, lowest tier first
        jurisdiction_notes: Free-text caveats about the organization's reach
        residency_rule: Residency requirement for applicants
        application_steps: Joining process, in order
    """
    id: str
    name: str
    description: str
    dues_rate: Decimal
    application_fee: Optional[Decimal] = None
    benefits: tuple[str, ...] = ()
    membership_tiers: tuple[MembershipTier, ...] = ()
    jurisdiction_notes: Optional[str] = None
    residency_rule: Optional[str] = None
    application_steps: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise RuleDefinitionError(message="Organization id must not be empty")
        if not isinstance(self.dues_rate, Decimal):
            object.__setattr__(self, "dues_rate", Decimal(str(self.dues_rate)))
        if self.application_fee is not None and not isinstance(self.application_fee, Decimal):
            object.__setattr__(self, "application_fee", Decimal(str(self.application_fee)))
        # Lists handed in by callers are frozen into tuples
        object.__setattr__(self, "benefits", tuple(self.benefits))
        object.__setattr__(self, "membership_tiers", tuple(self.membership_tiers))
        object.__setattr__(self, "application_steps", tuple(self.application_steps))

        if not Decimal("0") <= self.dues_rate <= Decimal("1"):
            raise RuleDefinitionError(
                message=f"Dues rate for '{self.id}' must be between 0 and 1",
                details={"organization_id": self.id, "dues_rate": str(self.dues_rate)},
            )
        if self.application_fee is not None and self.application_fee < 0:
            raise RuleDefinitionError(
                message=f"Application fee for '{self.id}' must not be negative",
                details={"organization_id": self.id},
            )

    @property
    def dues_percent(self) -> str:
        """Dues rate formatted for display (e.g., '4.5%')."""
        percent = (self.dues_rate * 100).normalize()
        return f"{percent:f}%"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "dues_rate": str(self.dues_rate),
            "benefits": list(self.benefits),
            "membership_tiers": [t.to_dict() for t in self.membership_tiers],
        }
        if self.application_fee is not None:
            result["application_fee"] = str(self.application_fee)
        if self.jurisdiction_notes:
            result["jurisdiction_notes"] = self.jurisdiction_notes
        if self.residency_rule:
            result["residency_rule"] = self.residency_rule
        if self.application_steps:
            result["application_steps"] = list(self.application_steps)
        return result


# =============================================================================
# Organization Registry
# =============================================================================

@dataclass(frozen=True)
class OrganizationRegistry:
    """
    Read-only catalogue of organizations keyed by id.

    Built once; iteration follows declaration order.

    Usage:
        registry = OrganizationRegistry.from_records([actra, dgc, ...])
        registry.get("u-dgc")           # Organization or None
        registry.get_or_raise("u-dgc")  # raises OrganizationNotFoundError
    """
    organizations: Mapping[str, Organization] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_records(cls, records: Iterable[Organization]) -> OrganizationRegistry:
        """
        Build a registry, rejecting duplicate ids.

        Raises:
            RuleDefinitionError: If two records share an id
        """
        organizations: dict[str, Organization] = {}
        for record in records:
            if record.id in organizations:
                raise RuleDefinitionError(
                    message=f"Duplicate organization id: '{record.id}'",
                    details={"organization_id": record.id},
                )
            organizations[record.id] = record
        return cls(organizations=MappingProxyType(organizations))

    def get(self, organization_id: str) -> Optional[Organization]:
        """Get an organization by id."""
        return self.organizations.get(organization_id)

    def get_or_raise(self, organization_id: str) -> Organization:
        """
        Get an organization by id, raising if not found.

        Raises:
            OrganizationNotFoundError: If the id is unknown
        """
        organization = self.get(organization_id)
        if organization is None:
            raise OrganizationNotFoundError(
                message=f"Organization not found: {organization_id}",
                details={"organization_id": organization_id},
            )
        return organization

    def list_all(self) -> tuple[Organization, ...]:
        """All organizations in declaration order."""
        return tuple(self.organizations.values())

    def records_for(self, organization_ids: Iterable[str]) -> list[Organization]:
        """
        Look up records for resolved ids, preserving order.

        Resolved ids come from validated tables, so a miss is a bug in
        the caller. The assert fails loudly in debug runs; under
        ``python -O`` the id is skipped and logged instead.
        """
        records = []
        for organization_id in organization_ids:
            organization = self.get(organization_id)
            assert organization is not None, f"Unknown organization id: {organization_id}"
            if organization is None:
                logger.warning("Skipping unknown organization id %s", organization_id)
                continue
            records.append(organization)
        return records

    @property
    def ids(self) -> tuple[str, ...]:
        """All organization ids in declaration order."""
        return tuple(self.organizations.keys())

    def __contains__(self, organization_id: object) -> bool:
        return organization_id in self.organizations

    def __len__(self) -> int:
        return len(self.organizations)

    def __iter__(self) -> Iterator[Organization]:
        return iter(self.organizations.values())
