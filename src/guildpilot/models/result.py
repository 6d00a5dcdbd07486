"""
GuildPilot Resolution Result

The value returned by the resolver: an ordered, de-duplicated, never
empty tuple of organization ids plus a trace of which tier contributed
each one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .enums import ResolutionTier


@dataclass(frozen=True)
class ResolutionMatch:
    """
    One contribution to a result.

    Attributes:
        tier: Precedence tier that fired
        organization_id: Organization it contributed
        matched_key: Table key found in the role/department (None for
            the catch-all)
        label: Overlap label, when the tier is OVERLAP
    """
    tier: ResolutionTier
    organization_id: str
    matched_key: Optional[str] = None
    label: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "tier": self.tier.value,
            "organization_id": self.organization_id,
        }
        if self.matched_key is not None:
            result["matched_key"] = self.matched_key
        if self.label:
            result["label"] = self.label
        return result


@dataclass(frozen=True)
class ResolutionResult:
    """
    Organizations holding authority over a role in a jurisdiction.

    ``organization_ids`` keeps discovery order with duplicates removed;
    ``matches`` keeps every contribution, duplicates included, so the
    trace shows when two tiers agreed.

    The first id is the conventional default for pre-selecting an
    organization in a form (see ``primary``).
    """
    jurisdiction: str
    role: str
    department: str
    organization_ids: tuple[str, ...]
    matches: tuple[ResolutionMatch, ...] = ()

    def __post_init__(self) -> None:
        if not self.organization_ids:
            raise ValueError("ResolutionResult must contain at least one organization")

    @property
    def primary(self) -> str:
        """First resolved organization."""
        return self.organization_ids[0]

    @property
    def has_competing_authority(self) -> bool:
        """True when more than one organization claims the work."""
        return len(self.organization_ids) > 1

    @property
    def used_catch_all(self) -> bool:
        return any(m.tier == ResolutionTier.CATCH_ALL for m in self.matches)

    @property
    def tiers(self) -> tuple[ResolutionTier, ...]:
        """Tiers that fired, in evaluation order, without repeats."""
        seen: list[ResolutionTier] = []
        for match in self.matches:
            if match.tier not in seen:
                seen.append(match.tier)
        return tuple(seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self.organization_ids)

    def __len__(self) -> int:
        return len(self.organization_ids)

    def __contains__(self, organization_id: object) -> bool:
        return organization_id in self.organization_ids

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "jurisdiction": self.jurisdiction,
            "role": self.role,
            "department": self.department,
            "organization_ids": list(self.organization_ids),
            "primary": self.primary,
            "has_competing_authority": self.has_competing_authority,
            "matches": [m.to_dict() for m in self.matches],
        }
