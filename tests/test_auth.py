"""
Tests for authentication, sessions and the audit trail.

This test suite covers:
- Login by email (case-insensitive) or username (exact)
- Failed, blocked and unverified logins
- Signup and duplicate emails
- Session persistence, restore and 24h expiry
- Password reset flows
- Admin operations and audit log queries/export
"""

import json

import pytest

from app.exceptions import (
    AccountDeactivatedError,
    EmailAlreadyExistsError,
    EmailNotVerifiedError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from core.utils.helpers import simple_hash
from domain.enums import AuditAction, SESSION_STORAGE_KEY
from repositories import AuditLogRepository
from services.auth_service import ADMIN_RESET_PASSWORD, AUDIT_CSV_HEADER, AuthService, ClientInfo
from test_fixtures import FakeClock, clock, store


def audit_actions(store):
    return [log["action"] for log in store.list("AuditLog")]


# =============================================================================
# LOGIN
# =============================================================================


def test_login_by_email_is_case_insensitive(store, clock):
    auth = AuthService(store, clock=clock)
    user = auth.login("DEMO@MealTrack.pro", "demo123!")

    assert user["id"] == "user-demo"
    assert "password_hash" not in user
    assert auth.is_authenticated()
    assert not auth.is_admin()


def test_login_by_username_is_exact(store, clock):
    auth = AuthService(store, clock=clock)
    assert auth.login("superadmin", "passcode123!")["role"] == "ADMIN"
    assert auth.is_admin()

    auth.logout()
    with pytest.raises(InvalidCredentialsError):
        auth.login("SuperAdmin", "passcode123!")


def test_login_success_is_audited_for_the_logged_in_user(store, clock):
    auth = AuthService(store, clock=clock)
    auth.login("demo@mealtrack.pro", "demo123!", ClientInfo(ip_address="10.0.0.7", user_agent="pytest"))

    entry = store.list("AuditLog")[-1]
    assert entry["action"] == AuditAction.LOGIN_SUCCESS.value
    assert entry["user_id"] == "user-demo"
    assert entry["entity_type"] == "User"
    assert entry["entity_id"] == "user-demo"
    assert entry["ip_address"] == "10.0.0.7"
    assert entry["user_agent"] == "pytest"
    assert entry["timestamp"].endswith("Z")


def test_login_updates_last_login_at(store, clock):
    auth = AuthService(store, clock=clock)
    auth.login("demo@mealtrack.pro", "demo123!")
    demo = next(u for u in store.list("Users") if u["id"] == "user-demo")
    assert demo["last_login_at"] == "2026-03-18T09:00:00.000Z"


def test_wrong_password_fails_and_is_audited(store, clock):
    auth = AuthService(store, clock=clock)
    with pytest.raises(InvalidCredentialsError) as exc:
        auth.login("demo@mealtrack.pro", "wrong")

    assert exc.value.code == "INVALID_CREDENTIALS"
    assert exc.value.http_status == 401
    assert not auth.is_authenticated()
    entry = store.list("AuditLog")[-1]
    assert entry["action"] == AuditAction.LOGIN_FAILED.value
    assert entry["entity_id"] == "demo@mealtrack.pro"
    assert entry["user_id"] is None


def test_deactivated_user_is_blocked(store, clock):
    auth = AuthService(store, clock=clock)
    auth.toggle_user_status("user-demo")

    with pytest.raises(AccountDeactivatedError):
        auth.login("demo@mealtrack.pro", "demo123!")
    assert audit_actions(store)[-1] == AuditAction.LOGIN_BLOCKED.value
    assert not auth.is_authenticated()


def test_unverified_email_is_rejected_without_audit(store, clock):
    store.create("Users", {
        "email": "new@example.com",
        "password_hash": simple_hash("pw"),
        "role": "USER",
        "is_active": True,
        "email_verified": False,
    })
    auth = AuthService(store, clock=clock)
    before = len(store.list("AuditLog"))

    with pytest.raises(EmailNotVerifiedError) as exc:
        auth.login("new@example.com", "pw")
    assert exc.value.code == "EMAIL_NOT_VERIFIED"
    assert len(store.list("AuditLog")) == before


def test_audit_failure_does_not_fail_login(store, clock, monkeypatch):
    def broken_append(self, entry):
        raise RuntimeError("audit storage unavailable")

    monkeypatch.setattr(AuditLogRepository, "append", broken_append)
    auth = AuthService(store, clock=clock)
    assert auth.login("demo@mealtrack.pro", "demo123!")["id"] == "user-demo"


# =============================================================================
# SIGNUP
# =============================================================================


def test_signup_creates_active_verified_user(store, clock):
    auth = AuthService(store, clock=clock)
    user = auth.signup("wanjiku@example.com", "s3cret!", "Wanjiku")

    assert user["role"] == "USER"
    assert user["is_active"] is True
    assert user["email_verified"] is True
    assert "password_hash" not in user
    assert audit_actions(store)[-1] == AuditAction.USER_CREATED.value

    assert auth.login("wanjiku@example.com", "s3cret!")["id"] == user["id"]


def test_signup_defaults_name_to_email_local_part(store, clock):
    user = AuthService(store, clock=clock).signup("otieno@example.com", "pw")
    assert user["name"] == "otieno"


def test_signup_duplicate_email_is_case_insensitive(store, clock):
    auth = AuthService(store, clock=clock)
    with pytest.raises(EmailAlreadyExistsError) as exc:
        auth.signup("Demo@MealTrack.pro", "pw")
    assert exc.value.http_status == 409
    assert len(store.list("Users")) == 2


# =============================================================================
# SESSION
# =============================================================================


def test_session_is_persisted_and_restored(store, clock):
    AuthService(store, clock=clock).login("demo@mealtrack.pro", "demo123!")

    saved = json.loads(store.storage.get_item(SESSION_STORAGE_KEY))
    assert saved["user"]["id"] == "user-demo"
    assert saved["expires"] == clock.now + 24 * 3600 * 1000

    restored = AuthService(store, clock=clock)
    assert restored.current_user["id"] == "user-demo"


def test_session_expires_after_ttl(store, clock):
    auth = AuthService(store, clock=clock)
    auth.login("demo@mealtrack.pro", "demo123!")

    clock.advance(24 * 3600 - 1)
    assert auth.is_authenticated()

    clock.advance(1)
    assert auth.current_user is None
    assert store.storage.get_item(SESSION_STORAGE_KEY) is None


def test_expired_session_is_discarded_on_restore(store):
    clock = FakeClock()
    AuthService(store, clock=clock).login("demo@mealtrack.pro", "demo123!")
    clock.advance(25 * 3600)

    auth = AuthService(store, clock=clock)
    assert auth.current_user is None
    assert store.storage.get_item(SESSION_STORAGE_KEY) is None


def test_unreadable_session_is_discarded(store, clock):
    store.storage.set_item(SESSION_STORAGE_KEY, "{broken")
    auth = AuthService(store, clock=clock)
    assert auth.current_user is None
    assert store.storage.get_item(SESSION_STORAGE_KEY) is None


def test_custom_session_ttl(store, clock):
    auth = AuthService(store, session_ttl_hours=1, clock=clock)
    auth.login("demo@mealtrack.pro", "demo123!")
    clock.advance(3600)
    assert not auth.is_authenticated()


def test_logout_ends_session_and_is_audited(store, clock):
    auth = AuthService(store, clock=clock)
    auth.login("demo@mealtrack.pro", "demo123!")
    auth.logout()

    assert auth.current_user is None
    assert store.storage.get_item(SESSION_STORAGE_KEY) is None
    entry = store.list("AuditLog")[-1]
    assert entry["action"] == AuditAction.LOGOUT.value
    assert entry["user_id"] == "user-demo"


# =============================================================================
# PASSWORD RESET
# =============================================================================


def test_forgot_password_always_succeeds(store, clock):
    auth = AuthService(store, clock=clock)
    assert auth.forgot_password("nobody@example.com") is True
    assert store.list("AuditLog") == []

    assert auth.forgot_password("demo@mealtrack.pro") is True
    assert audit_actions(store) == [AuditAction.PASSWORD_RESET_REQUESTED.value]


def test_reset_password_changes_login(store, clock):
    auth = AuthService(store, clock=clock)
    assert auth.reset_password("DEMO@mealtrack.pro", "new-pass") is True
    assert audit_actions(store)[-1] == AuditAction.PASSWORD_RESET_COMPLETED.value

    with pytest.raises(InvalidCredentialsError):
        auth.login("demo@mealtrack.pro", "demo123!")
    assert auth.login("demo@mealtrack.pro", "new-pass")["id"] == "user-demo"


# =============================================================================
# ADMINISTRATION
# =============================================================================


def test_require_admin(store, clock):
    auth = AuthService(store, clock=clock)
    with pytest.raises(UnauthorizedError):
        auth.require_admin()

    auth.login("demo@mealtrack.pro", "demo123!")
    with pytest.raises(ForbiddenError):
        auth.require_admin()

    auth.logout()
    auth.login("superadmin", "passcode123!")
    assert auth.require_admin()["id"] == "admin-1"


def test_toggle_user_status_round_trip(store, clock):
    auth = AuthService(store, clock=clock)
    assert auth.toggle_user_status("user-demo")["is_active"] is False
    assert auth.toggle_user_status("user-demo")["is_active"] is True
    assert audit_actions(store) == [
        AuditAction.USER_DEACTIVATED.value,
        AuditAction.USER_ACTIVATED.value,
    ]


def test_toggle_unknown_user(store, clock):
    with pytest.raises(NotFoundError):
        AuthService(store, clock=clock).toggle_user_status("ghost")


def test_admin_reset_password(store, clock):
    auth = AuthService(store, clock=clock)
    assert auth.admin_reset_password("user-demo") == ADMIN_RESET_PASSWORD
    assert auth.login("demo@mealtrack.pro", ADMIN_RESET_PASSWORD)["id"] == "user-demo"

    with pytest.raises(NotFoundError):
        auth.admin_reset_password("ghost")


def test_get_and_search_users_hide_password_hashes(store, clock):
    auth = AuthService(store, clock=clock)
    assert all("password_hash" not in u for u in auth.get_users())
    assert [u["id"] for u in auth.search_users("DEMO")] == ["user-demo"]
    assert len(auth.search_users(None)) == 2


def test_admin_stats(store, clock):
    auth = AuthService(store, clock=clock)
    auth.login("superadmin", "passcode123!")
    auth.toggle_user_status("user-demo")

    stats = auth.admin_stats()
    assert stats["total_users"] == 2
    assert stats["active_users"] == 1
    assert stats["admin_count"] == 1
    assert stats["audit_log_count"] == 2
    assert stats["recent_activity"][0]["action"] == AuditAction.USER_DEACTIVATED.value


def test_query_audit_logs_newest_first_and_filters(store, clock):
    auth = AuthService(store, clock=clock)
    auth.forgot_password("demo@mealtrack.pro")
    clock.advance()
    with pytest.raises(InvalidCredentialsError):
        auth.login("demo@mealtrack.pro", "nope")
    clock.advance()
    auth.login("demo@mealtrack.pro", "demo123!")

    logs = auth.query_audit_logs()
    assert [log["action"] for log in logs] == [
        AuditAction.LOGIN_SUCCESS.value,
        AuditAction.LOGIN_FAILED.value,
        AuditAction.PASSWORD_RESET_REQUESTED.value,
    ]
    assert [log["action"] for log in auth.query_audit_logs(search="login")] == [
        AuditAction.LOGIN_SUCCESS.value,
        AuditAction.LOGIN_FAILED.value,
    ]
    assert len(auth.query_audit_logs(action=AuditAction.LOGIN_FAILED.value)) == 1
    assert len(auth.query_audit_logs(action="all")) == 3
    assert auth.audit_actions() == [
        AuditAction.PASSWORD_RESET_REQUESTED.value,
        AuditAction.LOGIN_FAILED.value,
        AuditAction.LOGIN_SUCCESS.value,
    ]


def test_export_audit_logs_csv(store, clock):
    auth = AuthService(store, clock=clock)
    auth.forgot_password("demo@mealtrack.pro", ClientInfo(user_agent="Mozilla/5.0, test"))

    lines = auth.export_audit_logs_csv().splitlines()
    assert lines[0] == ",".join(AUDIT_CSV_HEADER)
    assert lines[0] == "Timestamp,Action,Entity Type,Entity ID,User Agent"
    assert lines[1] == '2026-03-18T09:00:00.000Z,PASSWORD_RESET_REQUESTED,User,user-demo,"Mozilla/5.0, test"'


def test_audit_log_is_append_only(store):
    repo = AuditLogRepository(store)
    entry = repo.append({"action": "LOGOUT"})
    with pytest.raises(NotImplementedError):
        repo.update(entry["id"], {"action": "x"})
    with pytest.raises(NotImplementedError):
        repo.delete(entry["id"])
