"""
GuildPilot API

Jurisdictional authority resolution for film and television crews.

Environment:
    GP_DATASET_PATH    Optional dataset pack replacing the built-in data
    GP_STRICT_VERSION  Reject packs with an unsupported schema version
    GP_CACHE_ENABLED   Memoize resolutions
    GP_CACHE_SIZE      Most memoized resolutions (4096)
    GP_LOG_LEVEL       Log level (INFO)
    GP_DOCS_ENABLED    Serve /docs, /redoc and /openapi.json
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import jurisdictions, organizations, resolve
from api.schemas.responses import ApiInfoResponse, HealthResponse
from guildpilot import __version__
from guildpilot.canon import compute_dataset_hash
from guildpilot.config import Settings
from guildpilot.engine import create_resolver
from guildpilot.exceptions import GuildPilotError, OrganizationNotFoundError

settings = Settings.from_env()


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

_EXTRA_FIELDS = (
    "request_id",
    "path",
    "status_code",
    "duration_ms",
    "jurisdiction",
    "organization_ids",
    "batch_size",
    "dataset_hash_short",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        return json.dumps(log_entry)


# Configure logging
logger = logging.getLogger("guildpilot")
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)


# =============================================================================
# Dataset State
# =============================================================================

dataset_info: dict[str, str] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the resolver on startup."""
    try:
        resolver = create_resolver(settings)
    except GuildPilotError as e:
        logger.error("Failed to load dataset: %s", e)
        raise

    dataset = resolver.dataset
    dataset_hash = compute_dataset_hash(dataset)
    dataset_info.update(
        name=dataset.name,
        version=dataset.version,
        source=dataset.source,
        hash=dataset_hash,
    )

    # Share resolver with routes
    organizations.set_resolver(resolver)
    resolve.set_dataset_hash(dataset_hash)

    logger.info(
        "GuildPilot starting: dataset %s %s from %s",
        dataset.name,
        dataset.version,
        dataset.source,
        extra={"dataset_hash_short": dataset_hash[:12]},
    )
    logger.info("Docs enabled: %s", settings.docs_enabled)

    yield

    organizations.set_resolver(None)
    dataset_info.clear()
    logger.info("Shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="GuildPilot API",
    description="""
**Which guild or union holds authority over this role?**

GuildPilot resolves a province or territory, a job role and a department
to the labour organizations with bargaining authority, with a trace of
which rule table answered.

## Quick Start

1. `GET /jurisdictions` - See provinces, territories and their rule coverage
2. `GET /resolve?jurisdiction=Ontario&role=Key%20Grip&department=Grip`
3. `GET /organizations/{id}` - Dues, membership tiers and joining steps
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
)

# CORS (restrict in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(organizations.router)
app.include_router(jurisdictions.router)
app.include_router(resolve.router)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    start_time = time.time()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.debug(
        "Request handled",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": int((time.time() - start_time) * 1000),
        },
    )
    return response


# =============================================================================
# Error Handling
# =============================================================================

@app.exception_handler(GuildPilotError)
async def guildpilot_error_handler(request: Request, exc: GuildPilotError):
    """Map domain errors to JSON error bodies."""
    status_code = 404 if isinstance(exc, OrganizationNotFoundError) else 500
    if status_code == 500:
        logger.error("Unhandled %s: %s", exc.code, exc.message)
    content = exc.to_dict()
    content["request_id"] = getattr(request.state, "request_id", "unknown")
    return JSONResponse(status_code=status_code, content=content)


# =============================================================================
# Health Endpoints
# =============================================================================

def _organizations_loaded() -> int:
    if organizations.resolver is None:
        return 0
    return len(organizations.resolver.dataset.registry)


@app.get("/api", response_model=ApiInfoResponse, tags=["Health"])
async def api_info():
    """API info endpoint - JSON health check and dataset fingerprint."""
    return ApiInfoResponse(
        service="GuildPilot API",
        version=__version__,
        status="running",
        dataset_name=dataset_info.get("name", ""),
        dataset_version=dataset_info.get("version", ""),
        dataset_hash=dataset_info.get("hash", ""),
        dataset_source=dataset_info.get("source", ""),
        organizations_loaded=_organizations_loaded(),
        docs="/docs" if settings.docs_enabled else None,
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health():
    """Health check endpoint."""
    return HealthResponse(
        healthy=organizations.resolver is not None,
        organizations_loaded=_organizations_loaded(),
        dataset=dataset_info.get("name", ""),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
