"""
GuildPilot Models

All domain models for jurisdictional authority resolution:

    from guildpilot.models import (
        # Enums
        Jurisdiction, TargetMetric, ResolutionTier,
        # Registry
        Organization, MembershipTier, OrganizationRegistry,
        # Rule tables
        JurisdictionRule, OverlapRule, NationalStandards,
        JurisdictionOverrides, OverlapTable,
        # Dataset + result
        AuthorityDataset, ResolutionResult, ResolutionMatch,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    Jurisdiction,
    ResolutionTier,
    TargetMetric,
    canonical_jurisdiction,
)

# =============================================================================
# Organization Registry
# =============================================================================
from .organization import (
    MembershipTier,
    Organization,
    OrganizationRegistry,
)

# =============================================================================
# Rule Tables
# =============================================================================
from .rules import (
    JurisdictionOverrides,
    JurisdictionRule,
    NationalMappingEntry,
    NationalStandards,
    OverlapRule,
    OverlapTable,
    expand_aliases,
)

# =============================================================================
# Dataset and Result
# =============================================================================
from .dataset import (
    AuthorityDataset,
    validate_reference_integrity,
)
from .result import (
    ResolutionMatch,
    ResolutionResult,
)

__all__ = [
    # Enums
    "Jurisdiction",
    "ResolutionTier",
    "TargetMetric",
    "canonical_jurisdiction",
    # Registry
    "MembershipTier",
    "Organization",
    "OrganizationRegistry",
    # Rule tables
    "JurisdictionOverrides",
    "JurisdictionRule",
    "NationalMappingEntry",
    "NationalStandards",
    "OverlapRule",
    "OverlapTable",
    "expand_aliases",
    # Dataset
    "AuthorityDataset",
    "validate_reference_integrity",
    # Result
    "ResolutionMatch",
    "ResolutionResult",
]
