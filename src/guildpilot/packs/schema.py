"""
GuildPilot Dataset Pack Schemas

Pydantic models for validating dataset pack YAML/JSON files.

A dataset pack carries the same tables as the compiled-in dataset:
organizations, national standards, jurisdiction overrides (with
aliases) and competing-authority overlaps. The loader converts a
validated pack into the immutable domain models in guildpilot.models.

Schema versioning:
- schema_version tracks breaking changes
- Only the major version has to match
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


TargetMetricValue = Literal["HOURS", "DAYS", "CREDITS", "EARNINGS"]


def _reject_blank(values: list[str]) -> list[str]:
    for value in values:
        if not value or not value.strip():
            raise ValueError("substrings must not be empty")
    return values


# =============================================================================
# Organization Schemas
# =============================================================================

class MembershipTierSchema(BaseModel):
    """Schema for one membership tier."""
    name: str = Field(..., min_length=1, description="Tier label")
    target_metric: TargetMetricValue = Field(..., description="What the target counts")
    target_value: Decimal = Field(..., ge=0, description="Threshold for the tier")
    description: str = Field("", description="Short explanation")

    model_config = {"extra": "forbid"}


class OrganizationSchema(BaseModel):
    """Schema for an organization record."""
    id: str = Field(..., min_length=1, description="Stable short code (e.g., u-873)")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field("", description="Who the organization represents")
    dues_rate: Decimal = Field(..., ge=0, le=1, description="Fraction of earnings")
    application_fee: Optional[Decimal] = Field(None, ge=0, description="Initiation fee")
    benefits: list[str] = Field(default_factory=list)
    membership_tiers: list[MembershipTierSchema] = Field(default_factory=list)
    jurisdiction_notes: Optional[str] = None
    residency_rule: Optional[str] = None
    application_steps: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


# =============================================================================
# Rule Schemas
# =============================================================================

class MappingEntrySchema(BaseModel):
    """Schema for a national standards entry."""
    key: str = Field(..., description="Role or department substring")
    organization_id: str = Field(..., min_length=1)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("key must not be empty")
        return v

    model_config = {"extra": "forbid"}


class NationalStandardsSchema(BaseModel):
    """Schema for the national fallback tables (ordered lists)."""
    roles: list[MappingEntrySchema] = Field(default_factory=list)
    departments: list[MappingEntrySchema] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class JurisdictionRuleSchema(BaseModel):
    """
    Schema for a jurisdiction override rule.

    At least one of roles/departments is required.
    """
    organization_id: str = Field(..., min_length=1)
    roles: list[str] = Field(default_factory=list, description="Role substrings")
    departments: list[str] = Field(default_factory=list, description="Department substrings")

    @field_validator("roles", "departments")
    @classmethod
    def validate_substrings(cls, v: list[str]) -> list[str]:
        return _reject_blank(v)

    @model_validator(mode="after")
    def validate_structure(self) -> "JurisdictionRuleSchema":
        if not self.roles and not self.departments:
            raise ValueError("rule requires 'roles' or 'departments'")
        return self

    model_config = {"extra": "forbid"}


class OverlapRuleSchema(BaseModel):
    """Schema for a competing-authority rule."""
    organization_ids: list[str] = Field(..., min_length=1)
    roles: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)
    label: str = ""

    @field_validator("roles", "departments")
    @classmethod
    def validate_substrings(cls, v: list[str]) -> list[str]:
        return _reject_blank(v)

    @model_validator(mode="after")
    def validate_structure(self) -> "OverlapRuleSchema":
        if not self.roles and not self.departments:
            raise ValueError("overlap requires 'roles' or 'departments'")
        return self

    model_config = {"extra": "forbid"}


# =============================================================================
# Dataset Pack
# =============================================================================

class DatasetPackSchema(BaseModel):
    """Root schema for a dataset pack file."""
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    name: str = Field("custom", description="Dataset label")
    version: str = Field("1.0.0", description="Dataset revision")
    catch_all_id: str = Field(..., min_length=1, description="Organization used when nothing matches")

    organizations: list[OrganizationSchema] = Field(..., min_length=1)
    national_standards: NationalStandardsSchema = Field(default_factory=NationalStandardsSchema)
    jurisdiction_overrides: dict[str, list[JurisdictionRuleSchema]] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(
        default_factory=dict, description="Jurisdictions sharing another's rules"
    )
    overlaps: dict[str, list[OverlapRuleSchema]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "DatasetPackSchema":
        seen: set[str] = set()
        for organization in self.organizations:
            if organization.id in seen:
                raise ValueError(f"duplicate organization id '{organization.id}'")
            seen.add(organization.id)
        return self

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_dataset_pack(data: dict[str, Any]) -> DatasetPackSchema:
    """
    Validate a dataset pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return DatasetPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True if the pack's major schema version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
