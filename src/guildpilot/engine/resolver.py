"""
GuildPilot Authority Resolver

Determines which labour organizations hold bargaining authority over a
role in a jurisdiction.

Order of evaluation:
1. Normalize role and department (lowercase, trimmed)
2. Jurisdiction role rules (all matching rules apply)
3. Jurisdiction department rules, only if step 2 found nothing
4. National standards (role, then department), only if 2-3 found nothing
5. Overlap rules for the jurisdiction, always
6. Catch-all organization, only if the result is still empty

Unknown jurisdictions have no rules and fall through to step 4.
Resolution never raises for "no match".
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Optional, Union

from ..config import DEFAULT_CACHE_SIZE, Settings
from ..data import build_default_dataset
from ..matching import normalize
from ..models import (
    AuthorityDataset,
    Jurisdiction,
    Organization,
    ResolutionMatch,
    ResolutionResult,
    ResolutionTier,
    canonical_jurisdiction,
)
from ..packs import load_dataset_pack

logger = logging.getLogger(__name__)


class _Accumulator:
    """Ordered, de-duplicated id collection with a match trace."""

    def __init__(self) -> None:
        self.ids: dict[str, None] = {}
        self.matches: list[ResolutionMatch] = []

    def add(
        self,
        tier: ResolutionTier,
        organization_id: str,
        matched_key: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.ids.setdefault(organization_id, None)
        self.matches.append(
            ResolutionMatch(
                tier=tier,
                organization_id=organization_id,
                matched_key=matched_key,
                label=label,
            )
        )

    def __bool__(self) -> bool:
        return bool(self.ids)


@dataclass
class AuthorityResolver:
    """
    Resolves jurisdiction/role/department to organization ids.

    The resolver holds no state beyond its dataset and an optional memo
    cache. The cache is a ``functools.lru_cache`` keyed on the normalized
    inputs and bounded by ``cache_maxsize``, so free-text queries cannot
    grow it without limit. Concurrent callers missing on the same key
    compute the same immutable result.

    Usage:
        resolver = AuthorityResolver(build_default_dataset())

        result = resolver.resolve("Ontario", "Key Grip", "Grip")
        result.organization_ids   # ("u-873", "u-nabet")
        result.primary            # "u-873"

        resolver.resolve_organizations("Quebec", "Gaffer", "Electric")
    """
    dataset: AuthorityDataset
    cache_enabled: bool = True
    cache_maxsize: int = DEFAULT_CACHE_SIZE
    _cached_compute: Callable[[str, str, str], ResolutionResult] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.cache_maxsize < 1:
            raise ValueError(f"cache_maxsize must be positive, got {self.cache_maxsize}")
        maxsize = self.cache_maxsize if self.cache_enabled else 0
        self._cached_compute = lru_cache(maxsize=maxsize)(self._compute)

    def resolve(
        self,
        jurisdiction: Union[str, Jurisdiction, None],
        role: Optional[str],
        department: Optional[str],
    ) -> ResolutionResult:
        """
        Resolve the organizations holding authority.

        Args:
            jurisdiction: Province/territory name, postal code or member
            role: Job role name (free text)
            department: Department name (free text)

        Returns:
            ResolutionResult with at least one organization id
        """
        return self._cached_compute(
            canonical_jurisdiction(jurisdiction),
            normalize(role),
            normalize(department),
        )

    def _compute(self, jurisdiction: str, role: str, department: str) -> ResolutionResult:
        dataset = self.dataset
        found = _Accumulator()

        overrides = dataset.overrides.rules_for(jurisdiction)
        if jurisdiction not in dataset.overrides.rules:
            logger.debug("No override rules for jurisdiction %r", jurisdiction)

        # Jurisdiction role rules
        for rule in overrides:
            matched = rule.match_role(role)
            if matched is not None:
                found.add(ResolutionTier.JURISDICTION_ROLE, rule.organization_id, matched)

        # Jurisdiction department rules
        if not found:
            for rule in overrides:
                matched = rule.match_department(department)
                if matched is not None:
                    found.add(
                        ResolutionTier.JURISDICTION_DEPARTMENT, rule.organization_id, matched
                    )

        # National standards
        if not found:
            entry = dataset.national.lookup_role(role)
            if entry is not None:
                found.add(ResolutionTier.NATIONAL_ROLE, entry.organization_id, entry.key)
            else:
                entry = dataset.national.lookup_department(department)
                if entry is not None:
                    found.add(
                        ResolutionTier.NATIONAL_DEPARTMENT, entry.organization_id, entry.key
                    )

        # Competing authority always applies
        for overlap in dataset.overlaps.rules_for(jurisdiction):
            matched = overlap.match(role, department)
            if matched is None:
                continue
            for organization_id in overlap.organization_ids:
                found.add(ResolutionTier.OVERLAP, organization_id, matched, overlap.label)

        if not found:
            found.add(ResolutionTier.CATCH_ALL, dataset.catch_all_id)

        result = ResolutionResult(
            jurisdiction=jurisdiction,
            role=role,
            department=department,
            organization_ids=tuple(found.ids),
            matches=tuple(found.matches),
        )
        logger.debug(
            "Resolved %r / %r / %r -> %s via %s",
            jurisdiction,
            role,
            department,
            ",".join(result.organization_ids),
            ",".join(t.value for t in result.tiers),
        )
        return result

    def resolve_ids(
        self,
        jurisdiction: Union[str, Jurisdiction, None],
        role: Optional[str],
        department: Optional[str],
    ) -> tuple[str, ...]:
        """Resolved organization ids, in discovery order."""
        return self.resolve(jurisdiction, role, department).organization_ids

    def resolve_primary(
        self,
        jurisdiction: Union[str, Jurisdiction, None],
        role: Optional[str],
        department: Optional[str],
    ) -> str:
        """First resolved id; the conventional form default."""
        return self.resolve(jurisdiction, role, department).primary

    def resolve_organizations(
        self,
        jurisdiction: Union[str, Jurisdiction, None],
        role: Optional[str],
        department: Optional[str],
    ) -> list[Organization]:
        """Full registry records for the resolved ids."""
        ids = self.resolve_ids(jurisdiction, role, department)
        return self.dataset.registry.records_for(ids)

    def clear_cache(self) -> None:
        self._cached_compute.cache_clear()

    @property
    def cache_size(self) -> int:
        """Number of memoized results, at most ``cache_maxsize``."""
        return self._cached_compute.cache_info().currsize


# =============================================================================
# Module-level Resolver Instance
# =============================================================================

_default_resolver: Optional[AuthorityResolver] = None


def create_resolver(settings: Optional[Settings] = None) -> AuthorityResolver:
    """
    Build a resolver from settings.

    Uses the pack at ``settings.dataset_path`` when one is configured,
    otherwise the compiled-in dataset.

    Raises:
        GuildPilotError: If the configured pack cannot be loaded
    """
    if settings is None:
        settings = Settings.from_env()
    if settings.dataset_path:
        dataset = load_dataset_pack(
            settings.dataset_path, strict_version=settings.strict_version
        )
    else:
        dataset = build_default_dataset()
    return AuthorityResolver(
        dataset=dataset,
        cache_enabled=settings.cache_enabled,
        cache_maxsize=settings.cache_size,
    )


def get_default_resolver() -> AuthorityResolver:
    """Get or create the default resolver instance."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = create_resolver()
    return _default_resolver


def reset_default_resolver() -> None:
    """Drop the default resolver so the next call rebuilds it."""
    global _default_resolver
    _default_resolver = None


def resolve_authorities(
    jurisdiction: Union[str, Jurisdiction, None],
    role: Optional[str],
    department: Optional[str],
) -> tuple[str, ...]:
    """
    Resolve organization ids using the default resolver.

    Convenience function for simple use cases.
    """
    return get_default_resolver().resolve_ids(jurisdiction, role, department)


def resolve_primary_authority(
    jurisdiction: Union[str, Jurisdiction, None],
    role: Optional[str],
    department: Optional[str],
) -> str:
    """First resolved organization id, using the default resolver."""
    return get_default_resolver().resolve_primary(jurisdiction, role, department)


def get_organization(organization_id: str) -> Optional[Organization]:
    """Look up an organization in the default resolver's registry."""
    return get_default_resolver().dataset.registry.get(organization_id)


def list_organizations() -> tuple[Organization, ...]:
    """All organizations in the default resolver's registry."""
    return get_default_resolver().dataset.registry.list_all()
