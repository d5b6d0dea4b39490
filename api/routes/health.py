"""Health check and utility routes"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_entity_store
from app.config import settings
from domain.enums import EntityName
from repositories import EntityStore

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealtrack.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}


@router.get("/storage/status")
def storage_status(store: EntityStore = Depends(get_entity_store)):
    """Which collections have been persisted so far."""
    try:
        keys = set(store.storage.keys())
        return {
            "collections": {e.value: e.value in keys for e in EntityName},
            "keys": len(keys),
        }
    except Exception as e:
        logger.exception("Error reading storage status")
        return {"collections": None, "error": str(e)}
