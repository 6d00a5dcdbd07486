"""Response schemas for the API."""

from pydantic import BaseModel
from typing import Optional


class HealthResponse(BaseModel):
    """Health check response."""
    healthy: bool
    organizations_loaded: int
    dataset: str


class ApiInfoResponse(BaseModel):
    """Service info, including which dataset is answering."""
    service: str
    version: str
    status: str
    dataset_name: str
    dataset_version: str
    dataset_hash: str
    dataset_source: str
    organizations_loaded: int
    docs: Optional[str] = None


class MembershipTierSummary(BaseModel):
    """One membership tier."""
    name: str
    target_metric: str  # HOURS|DAYS|CREDITS|EARNINGS
    target_value: str
    description: str = ""


class OrganizationSummary(BaseModel):
    """Organization listing entry."""
    id: str
    name: str
    dues_rate: str
    dues_percent: str
    application_fee: Optional[str] = None


class OrganizationDetail(OrganizationSummary):
    """Full organization record."""
    description: str
    benefits: list[str] = []
    membership_tiers: list[MembershipTierSummary] = []
    jurisdiction_notes: Optional[str] = None
    residency_rule: Optional[str] = None
    application_steps: list[str] = []


class JurisdictionSummary(BaseModel):
    """A jurisdiction and the rule tables that cover it."""
    name: str
    code: Optional[str] = None
    has_overrides: bool
    has_overlaps: bool
    alias_of: Optional[str] = None


class MatchTrace(BaseModel):
    """Which tier contributed an organization."""
    tier: str  # jurisdiction_role|jurisdiction_department|national_role|...
    organization_id: str
    matched_key: Optional[str] = None
    label: Optional[str] = None


class ResolveResponse(BaseModel):
    """Response from authority resolution."""
    # Normalized inputs
    jurisdiction: str
    role: str
    department: str

    # Result
    organization_ids: list[str]
    primary: str
    has_competing_authority: bool
    used_catch_all: bool
    matches: list[MatchTrace]
    organizations: list[OrganizationSummary]

    # Provenance
    dataset_hash: str


class BatchResolveResponse(BaseModel):
    """Results of a batch, in request order."""
    count: int
    results: list[ResolveResponse]
