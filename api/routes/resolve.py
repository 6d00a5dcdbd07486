"""Authority resolution endpoints."""

import logging

from fastapi import APIRouter, Query

from api.routes.organizations import get_resolver, organization_summary
from api.schemas.requests import BatchResolveRequest
from api.schemas.responses import BatchResolveResponse, MatchTrace, ResolveResponse
from guildpilot.models import ResolutionResult

logger = logging.getLogger("guildpilot.api")

router = APIRouter(prefix="/resolve", tags=["Resolve"])

# Fingerprint of the loaded dataset (set by main.py)
dataset_hash: str = ""


def set_dataset_hash(value: str):
    global dataset_hash
    dataset_hash = value


def _to_response(result: ResolutionResult) -> ResolveResponse:
    registry = get_resolver().dataset.registry
    return ResolveResponse(
        jurisdiction=result.jurisdiction,
        role=result.role,
        department=result.department,
        organization_ids=list(result.organization_ids),
        primary=result.primary,
        has_competing_authority=result.has_competing_authority,
        used_catch_all=result.used_catch_all,
        matches=[MatchTrace(**m.to_dict()) for m in result.matches],
        organizations=[organization_summary(o) for o in registry.records_for(result)],
        dataset_hash=dataset_hash,
    )


@router.get("", response_model=ResolveResponse)
async def resolve(
    jurisdiction: str = Query("", description="Province or territory name or postal code"),
    role: str = Query("", description="Job role"),
    department: str = Query("", description="Department"),
):
    """
    Resolve which organizations hold authority over a role.

    Always answers: unknown jurisdictions and unmatched roles fall back
    to the national tables and then the catch-all organization.
    """
    result = get_resolver().resolve(jurisdiction, role, department)
    logger.info(
        "Resolved authority",
        extra={
            "jurisdiction": result.jurisdiction,
            "organization_ids": list(result.organization_ids),
        },
    )
    return _to_response(result)


@router.post("/batch", response_model=BatchResolveResponse)
async def resolve_batch(request: BatchResolveRequest):
    """Resolve several roles in one call. Results keep request order."""
    resolver = get_resolver()
    results = [
        _to_response(resolver.resolve(r.jurisdiction, r.role, r.department))
        for r in request.requests
    ]
    logger.info("Resolved batch", extra={"batch_size": len(results)})
    return BatchResolveResponse(count=len(results), results=results)
