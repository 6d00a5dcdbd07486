"""Jurisdiction listing endpoint."""

from fastapi import APIRouter

from api.routes.organizations import get_resolver
from api.schemas.responses import JurisdictionSummary

router = APIRouter(prefix="/jurisdictions", tags=["Jurisdictions"])


@router.get("", response_model=list[JurisdictionSummary])
async def list_jurisdictions():
    """
    List provinces and territories with their rule coverage.

    Jurisdictions without override rules still resolve, through the
    national tables and the catch-all.
    """
    return [
        JurisdictionSummary(**summary)
        for summary in get_resolver().dataset.describe_jurisdictions()
    ]
