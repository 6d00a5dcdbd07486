"""
GuildPilot - Jurisdictional Authority Resolution for Screen Crews

GuildPilot answers one question for film and television workers: which
guilds, unions or locals hold bargaining authority over a given role in
a given province or territory.

Key Features:
- Per-jurisdiction override rules with aliasing (Atlantic provinces)
- National fallback tables with most-specific-key matching
- Competing-authority overlaps that add rival organizations
- A catch-all organization, so every query gets an answer
- YAML/JSON dataset packs validated with pydantic

Quick Start:
    from guildpilot import resolve_authorities, get_organization

    ids = resolve_authorities("Ontario", "Key Grip", "Grip")
    # ("u-873", "u-nabet")
    get_organization(ids[0]).name

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "GuildPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    AuthorityDataset,
    Jurisdiction,
    JurisdictionOverrides,
    JurisdictionRule,
    MembershipTier,
    NationalStandards,
    Organization,
    OrganizationRegistry,
    OverlapRule,
    OverlapTable,
    ResolutionMatch,
    ResolutionResult,
    ResolutionTier,
    TargetMetric,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    AuthorityResolver,
    create_resolver,
    get_default_resolver,
    get_organization,
    list_organizations,
    reset_default_resolver,
    resolve_authorities,
    resolve_primary_authority,
)
from .data import build_default_dataset

# =============================================================================
# Utilities
# =============================================================================
from .canon import (
    canonical_json,
    compute_dataset_hash,
    content_hash,
)
from .config import Settings

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    DatasetLoadError,
    DatasetValidationError,
    DatasetVersionMismatch,
    GuildPilotError,
    OrganizationNotFoundError,
    ReferentialIntegrityError,
    RuleDefinitionError,
)

# =============================================================================
# Public API
# =============================================================================
__all__ = [
    # Version
    "__version__",
    # Models
    "AuthorityDataset",
    "Jurisdiction",
    "JurisdictionOverrides",
    "JurisdictionRule",
    "MembershipTier",
    "NationalStandards",
    "Organization",
    "OrganizationRegistry",
    "OverlapRule",
    "OverlapTable",
    "ResolutionMatch",
    "ResolutionResult",
    "ResolutionTier",
    "TargetMetric",
    # Engine
    "AuthorityResolver",
    "build_default_dataset",
    "create_resolver",
    "get_default_resolver",
    "get_organization",
    "list_organizations",
    "reset_default_resolver",
    "resolve_authorities",
    "resolve_primary_authority",
    # Utilities
    "Settings",
    "canonical_json",
    "compute_dataset_hash",
    "content_hash",
    # Exceptions
    "DatasetLoadError",
    "DatasetValidationError",
    "DatasetVersionMismatch",
    "GuildPilotError",
    "OrganizationNotFoundError",
    "ReferentialIntegrityError",
    "RuleDefinitionError",
]
