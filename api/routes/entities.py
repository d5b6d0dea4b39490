"""Generic entity collection routes"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging
from typing import Any, Dict, List

from api.dependencies import get_auth_service, get_entity_store
from domain.enums import EntityName
from domain.schemas import BulkCreateRequest, DeleteResponse, EntityRecord, FilterRequest
from repositories import EntityStore
from services.auth_service import AuthService, strip_password

router = APIRouter(prefix="/entities", tags=["Entities"])
logger = logging.getLogger("mealtrack.api.entities")

# collections only an admin session may touch through the generic routes
ADMIN_ENTITIES = {EntityName.USERS.value, EntityName.AUDIT_LOG.value}


def resolve_entity(name: str, auth: AuthService) -> str:
    """Validate the collection name of a request"""
    known = {e.value for e in EntityName}
    if name not in known:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown entity {name}",
        )
    if name in ADMIN_ENTITIES:
        auth.require_admin()
    return name


def _public(name: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if name == EntityName.USERS.value:
        return [strip_password(r) for r in records]
    return records


@router.get("/{name}", response_model=List[EntityRecord])
def list_entities(
    name: str,
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """Get the whole collection in stored order"""
    name = resolve_entity(name, auth)
    return _public(name, store.list(name))


@router.post("/{name}/filter", response_model=List[EntityRecord])
def filter_entities(
    name: str,
    payload: FilterRequest,
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Get records matching every criterion.

    Values compare with loose (coercing) equality: ``{"cost": "100"}``
    matches a record with ``cost: 100``. A record missing a criterion field
    never matches.
    """
    name = resolve_entity(name, auth)
    return _public(name, store.filter(name, payload.criteria))


@router.post("/{name}", response_model=EntityRecord, status_code=status.HTTP_201_CREATED)
def create_entity(
    name: str,
    fields: Dict[str, Any],
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """Create a record; a caller-supplied ``id`` is replaced by a minted one"""
    name = resolve_entity(name, auth)
    record = store.create(name, fields)
    logger.info(f"Created {name} {record['id']}")
    return _public(name, [record])[0]


@router.post("/{name}/bulk", response_model=List[EntityRecord], status_code=status.HTTP_201_CREATED)
def bulk_create_entities(
    name: str,
    payload: BulkCreateRequest,
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """Create several records in one write, in order"""
    name = resolve_entity(name, auth)
    records = store.bulk_create(name, payload.items)
    logger.info(f"Created {len(records)} {name} records")
    return _public(name, records)


@router.patch("/{name}/{record_id}", response_model=EntityRecord)
def update_entity(
    name: str,
    record_id: str,
    patch: Dict[str, Any],
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """Shallow-merge fields into a record; ``id`` in the patch is ignored"""
    name = resolve_entity(name, auth)
    record = store.update(name, record_id, patch)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{name} {record_id} not found",
        )
    return _public(name, [record])[0]


@router.delete("/{name}/{record_id}", response_model=DeleteResponse)
def delete_entity(
    name: str,
    record_id: str,
    store: EntityStore = Depends(get_entity_store),
    auth: AuthService = Depends(get_auth_service),
):
    """Delete a record; deleting an unknown id also succeeds"""
    name = resolve_entity(name, auth)
    store.delete(name, record_id)
    return {"success": True}
