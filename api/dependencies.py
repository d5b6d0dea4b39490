"""
API dependencies for dependency injection

The service objects are built once in the application lifespan and kept on
``app.state``. Tests swap them through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from app.config import settings
from repositories import EntityStore
from services.auth_service import AuthService, ClientInfo
from services.integration_service import IntegrationService


def get_entity_store(request: Request) -> EntityStore:
    """
    Entity store dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(store: EntityStore = Depends(get_entity_store)):
            # Use the store here
            pass
    """
    return request.app.state.entity_store


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_integration_service(request: Request) -> IntegrationService:
    return request.app.state.integration_service


def get_client_info(request: Request) -> ClientInfo:
    """Caller address and user agent, recorded on audit entries"""
    return ClientInfo(
        ip_address=request.client.host if request.client else settings.audit_ip_address,
        user_agent=request.headers.get("user-agent") or settings.default_user_agent,
    )


def require_admin(auth: AuthService = Depends(get_auth_service)) -> dict:
    """Session user, if it is an admin (401 without a session, 403 for non-admins)"""
    return auth.require_admin()
