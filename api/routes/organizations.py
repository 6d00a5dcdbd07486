"""Organization registry endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException

from api.schemas.responses import OrganizationDetail, OrganizationSummary
from guildpilot.engine import AuthorityResolver
from guildpilot.models import Organization

router = APIRouter(prefix="/organizations", tags=["Organizations"])

# Shared resolver instance (set by main.py)
resolver: Optional[AuthorityResolver] = None


def set_resolver(r: Optional[AuthorityResolver]):
    global resolver
    resolver = r


def get_resolver() -> AuthorityResolver:
    if resolver is None:
        raise HTTPException(status_code=503, detail="Dataset not loaded")
    return resolver


def organization_summary(organization: Organization) -> OrganizationSummary:
    return OrganizationSummary(
        id=organization.id,
        name=organization.name,
        dues_rate=str(organization.dues_rate),
        dues_percent=organization.dues_percent,
        application_fee=(
            str(organization.application_fee)
            if organization.application_fee is not None
            else None
        ),
    )


@router.get("", response_model=list[OrganizationSummary])
async def list_organizations():
    """List every organization in the active dataset, in registry order."""
    return [organization_summary(o) for o in get_resolver().dataset.registry]


@router.get("/{organization_id}", response_model=OrganizationDetail)
async def get_organization(organization_id: str):
    """
    Get the full record for one organization.

    Unknown ids raise OrganizationNotFoundError, which the app maps to 404.
    """
    organization = get_resolver().dataset.registry.get_or_raise(organization_id)
    record = organization.to_dict()
    record["dues_percent"] = organization.dues_percent
    return OrganizationDetail(**record)
