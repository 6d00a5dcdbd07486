"""Request schemas for the API."""

from pydantic import BaseModel, Field

MAX_BATCH_SIZE = 100


class ResolveRequest(BaseModel):
    """One role to resolve."""
    jurisdiction: str = Field(default="", description="Province or territory name or postal code")
    role: str = Field(default="", description="Job role, e.g., 'Key Grip'")
    department: str = Field(default="", description="Department, e.g., 'Grip'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"jurisdiction": "Ontario", "role": "Key Grip", "department": "Grip"},
                {"jurisdiction": "QC", "role": "Director of Photography", "department": "Camera"},
            ]
        }
    }


class BatchResolveRequest(BaseModel):
    """Several roles resolved against the same dataset."""
    requests: list[ResolveRequest] = Field(..., min_length=1, max_length=MAX_BATCH_SIZE)
