"""Administration routes (admin session required)"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
import logging
from typing import List, Optional

from api.dependencies import get_auth_service, get_client_info, require_admin
from domain.schemas import (
    AdminStatsResponse,
    AuditLogListResponse,
    PasswordResetResponse,
    UserResponse,
)
from services.auth_service import AuthService, ClientInfo

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])
logger = logging.getLogger("mealtrack.api.admin")


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(auth: AuthService = Depends(get_auth_service)):
    """User counts, audit volume and the five latest audit entries"""
    return auth.admin_stats()


@router.get("/users", response_model=List[UserResponse])
def list_users(
    q: Optional[str] = Query(None, description="Substring of email or name"),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.search_users(q)


@router.post("/users/{user_id}/toggle-status", response_model=UserResponse)
def toggle_user_status(
    user_id: str,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """Activate a deactivated user or deactivate an active one"""
    return auth.toggle_user_status(user_id, client)


@router.post("/users/{user_id}/reset-password", response_model=PasswordResetResponse)
def reset_user_password(
    user_id: str,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """Reset a user's password to a temporary one, returned to the admin"""
    temporary = auth.admin_reset_password(user_id, client)
    logger.info(f"Admin reset password of user {user_id}")
    return {"user_id": user_id, "temporary_password": temporary}


@router.get("/audit-logs", response_model=AuditLogListResponse)
def list_audit_logs(
    search: Optional[str] = Query(None, description="Substring of action or entity id"),
    action: Optional[str] = Query(None, description="Exact action, or 'all'"),
    auth: AuthService = Depends(get_auth_service),
):
    """Audit entries, newest first"""
    logs = auth.query_audit_logs(search, action)
    return {"logs": logs, "total": len(logs), "actions": auth.audit_actions()}


@router.get("/audit-logs/export", response_class=PlainTextResponse)
def export_audit_logs(
    search: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    auth: AuthService = Depends(get_auth_service),
):
    """The filtered audit entries as CSV"""
    csv_text = auth.export_audit_logs_csv(search, action)
    return PlainTextResponse(
        csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="audit-logs.csv"'},
    )
