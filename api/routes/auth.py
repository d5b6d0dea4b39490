"""Authentication and session routes"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_auth_service, get_client_info
from domain.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    OkResponse,
    ResetPasswordRequest,
    SessionResponse,
    SignupRequest,
    UserResponse,
)
from services.auth_service import AuthService, ClientInfo

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("mealtrack.api.auth")


def _session(auth: AuthService) -> SessionResponse:
    user = auth.current_user
    return SessionResponse(
        authenticated=user is not None,
        user=user,
        expires=auth.session_expires,
        is_admin=auth.is_admin(),
    )


@router.post("/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Log in by email (case-insensitive) or username.

    Wrong credentials answer 401 ``INVALID_CREDENTIALS``; a deactivated
    account ``ACCOUNT_DEACTIVATED`` and an unverified one
    ``EMAIL_NOT_VERIFIED``.
    """
    auth.login(payload.identifier, payload.password, client)
    return _session(auth)


@router.post("/signup", response_model=UserResponse, status_code=201)
def signup(
    payload: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """Register a new user account (409 if the email is taken)"""
    return auth.signup(payload.email, payload.password, payload.name, client)


@router.post("/logout", response_model=OkResponse)
def logout(
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    auth.logout(client)
    return {"success": True}


@router.get("/session", response_model=SessionResponse)
def get_session(auth: AuthService = Depends(get_auth_service)):
    """Current session, if any"""
    return _session(auth)


@router.post("/forgot-password", response_model=OkResponse)
def forgot_password(
    payload: ForgotPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """Record a password reset request; answers the same whether or not the email exists"""
    return {"success": auth.forgot_password(payload.email, client)}


@router.post("/reset-password", response_model=OkResponse)
def reset_password(
    payload: ResetPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    return {"success": auth.reset_password(payload.email, payload.new_password, client)}
