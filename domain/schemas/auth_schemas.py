from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class LoginRequest(BaseModel):
    """Email (case-insensitive) or exact username, with password"""

    identifier: str = Field(..., min_length=1, description="Email or username")
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)
    name: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of a user; the password digest is never included"""

    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
    email_verified: Optional[bool] = None
    created_at: Optional[str] = None
    last_login_at: Optional[str] = None


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[UserResponse] = None
    expires: Optional[int] = Field(None, description="Session expiry, epoch milliseconds")
    is_admin: bool = False


class OkResponse(BaseModel):
    success: bool = True


class AdminStatsResponse(BaseModel):
    total_users: int
    active_users: int
    audit_log_count: int
    admin_count: int
    recent_activity: List[Dict[str, Any]]


class PasswordResetResponse(BaseModel):
    user_id: str
    temporary_password: str


class AuditLogListResponse(BaseModel):
    logs: List[Dict[str, Any]]
    total: int
    actions: List[str]
