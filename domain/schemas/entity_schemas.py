from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class EntityRecord(BaseModel):
    """A stored record: a string ``id`` plus any other fields"""

    model_config = ConfigDict(extra="allow")

    id: str


class BulkCreateRequest(BaseModel):
    """Several field sets created in one write"""

    items: List[Dict[str, Any]] = Field(..., description="Field sets, created in order")


class FilterRequest(BaseModel):
    """Equality criteria; every field must be present and loosely equal"""

    criteria: Optional[Dict[str, Any]] = Field(
        default=None, description="Field/value pairs; empty or missing matches all"
    )


class DeleteResponse(BaseModel):
    success: bool = True
