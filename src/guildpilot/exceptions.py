"""
GuildPilot Exception Hierarchy

Domain-specific exceptions for jurisdictional authority resolution.
All exceptions include error codes for tracking and logging.

Resolution itself never raises: unknown jurisdictions and unmatched
roles degrade to the national table and the catch-all organization.
These exceptions cover configuration time (building or loading a
dataset) and explicit registry lookups.

Exception codes follow the pattern: GP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class GuildPilotError(Exception):
    """
    Base exception for all GuildPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (GP_*)
        details: Additional context about the error
        source: Dataset file or table the error relates to, if any
    """
    message: str
    code: str = "GP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.source:
            parts.append(f"(source: {self.source})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.source:
            result["source"] = self.source
        return result


# =============================================================================
# Dataset/Pack Errors
# =============================================================================

@dataclass
class DatasetLoadError(GuildPilotError):
    """Failed to read or parse a dataset pack."""
    code: str = "GP_DATASET_LOAD_ERROR"


@dataclass
class DatasetValidationError(GuildPilotError):
    """Dataset pack schema validation failed."""
    code: str = "GP_DATASET_VALIDATION_ERROR"


@dataclass
class DatasetVersionMismatch(GuildPilotError):
    """Dataset pack schema version is not supported."""
    code: str = "GP_DATASET_VERSION_MISMATCH"


# =============================================================================
# Rule Table Errors
# =============================================================================

@dataclass
class RuleDefinitionError(GuildPilotError):
    """A rule, mapping or organization record is malformed."""
    code: str = "GP_RULE_DEFINITION_ERROR"


@dataclass
class ReferentialIntegrityError(GuildPilotError):
    """A table references an organization id missing from the registry."""
    code: str = "GP_REFERENTIAL_INTEGRITY_ERROR"


# =============================================================================
# Registry Errors
# =============================================================================

@dataclass
class OrganizationNotFoundError(GuildPilotError):
    """Requested organization id is not in the registry."""
    code: str = "GP_ORGANIZATION_NOT_FOUND"
