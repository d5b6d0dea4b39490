"""
Authentication, session and audit trail over the entity store.

The user directory is the ``Users`` collection and the audit trail the
``AuditLog`` collection. The single active session is serialized under the
``auth_session`` storage key and survives restarts until it expires.

Password digests use ``simple_hash``, a non-cryptographic demo hash. It is
unsuitable for real accounts and would have to be replaced by a salted slow
hash before this ever left demo use.
"""

from __future__ import annotations

import csv
import io
import json
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from app.config import settings
from app.exceptions import (
    AccountDeactivatedError,
    EmailAlreadyExistsError,
    EmailNotVerifiedError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from core.base.base_service import BaseService
from core.utils.helpers import iso_from_ms, now_ms, simple_hash
from domain.enums import AuditAction, SESSION_STORAGE_KEY, UserRole
from repositories import AuditLogRepository, EntityStore, UserRepository

Record = Dict[str, Any]

ADMIN_RESET_PASSWORD = "reset123!"
AUDIT_CSV_HEADER = ["Timestamp", "Action", "Entity Type", "Entity ID", "User Agent"]


@dataclass
class ClientInfo:
    """Where a request came from, as recorded on audit entries"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def strip_password(user: Record) -> Record:
    return {k: v for k, v in user.items() if k != "password_hash"}


class AuthService(BaseService):
    """
    User directory, single active session and audit trail.

    Session states: no session, or an active ``(user, expires)`` pair. A
    successful login activates it; logout or passing ``expires`` ends it.
    """

    def __init__(
        self,
        store: EntityStore,
        session_ttl_hours: Optional[float] = None,
        clock: Callable[[], int] = now_ms,
    ):
        super().__init__("mealtrack.auth")
        self.store = store
        self.users = UserRepository(store)
        self.audit = AuditLogRepository(store)
        self.session_ttl_ms = int(
            (settings.session_ttl_hours if session_ttl_hours is None else session_ttl_hours) * 3600 * 1000
        )
        self._clock = clock
        self._lock = threading.RLock()
        self._user: Optional[Record] = None
        self._expires: Optional[int] = None
        self.restore_session()

    # ------------------ Session ------------------
    def restore_session(self) -> Optional[Record]:
        """
        Load the persisted session. An unexpired one becomes active; an
        expired or unreadable one is discarded.
        """
        with self._lock:
            raw = self.store.storage.get_item(SESSION_STORAGE_KEY)
            if raw is None:
                self._user, self._expires = None, None
                return None
            try:
                data = json.loads(raw)
                user, expires = data["user"], data["expires"]
                valid = isinstance(user, dict) and isinstance(expires, (int, float))
            except (TypeError, ValueError, KeyError) as exc:
                self.log_warning("Discarding unreadable session", error=exc)
                valid = False
            if valid and expires > self._clock():
                self._user, self._expires = user, int(expires)
                self.log_info("Session restored", user_id=user.get("id"))
                return dict(user)
            self._end_session()
            return None

    def _start_session(self, user: Record) -> None:
        self._user = strip_password(user)
        self._expires = self._clock() + self.session_ttl_ms
        self.store.storage.set_item(
            SESSION_STORAGE_KEY, json.dumps({"user": self._user, "expires": self._expires})
        )

    def _end_session(self) -> None:
        self._user, self._expires = None, None
        self.store.storage.remove_item(SESSION_STORAGE_KEY)

    @property
    def current_user(self) -> Optional[Record]:
        """The session user, or None when no session is active or it expired"""
        with self._lock:
            if self._user is not None and self._expires is not None and self._expires <= self._clock():
                self.log_info("Session expired", user_id=self._user.get("id"))
                self._end_session()
            return dict(self._user) if self._user is not None else None

    @property
    def session_expires(self) -> Optional[int]:
        return self._expires if self.current_user is not None else None

    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def is_admin(self) -> bool:
        user = self.current_user
        return user is not None and user.get("role") == UserRole.ADMIN.value

    def require_admin(self) -> Record:
        """Return the session user if it is an admin; raise otherwise"""
        user = self.current_user
        if user is None:
            raise UnauthorizedError("Login required")
        if user.get("role") != UserRole.ADMIN.value:
            raise ForbiddenError("Admin role required")
        return user

    # ------------------ Audit ------------------
    def add_audit_log(
        self,
        action,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        client: Optional[ClientInfo] = None,
    ) -> Optional[Record]:
        """
        Append an audit entry attributed to the current session user.

        A failure to write the entry is logged and does not fail the audited
        operation.
        """
        client = client or ClientInfo()
        user = self.current_user
        entry = {
            "user_id": user.get("id") if user else None,
            "action": action.value if isinstance(action, AuditAction) else str(action),
            "entity_type": entity_type,
            "entity_id": entity_id,
            "ip_address": client.ip_address or settings.audit_ip_address,
            "user_agent": client.user_agent or settings.default_user_agent,
            "timestamp": iso_from_ms(self._clock()),
        }
        try:
            return self.audit.append(entry)
        except Exception:
            self.logger.exception(f"Failed to add audit log {entry['action']}")
            return None

    # ------------------ Account flows ------------------
    def login(self, identifier: str, password: str, client: Optional[ClientInfo] = None) -> Record:
        """
        Log in by case-insensitive email or exact username.

        Raises:
            InvalidCredentialsError: no user matches identifier and password
            AccountDeactivatedError: the user is deactivated
            EmailNotVerifiedError: the user's email is not verified
        """
        with self._lock:
            user = self.users.get_by_login(identifier, simple_hash(password))
            if user is None:
                self.add_audit_log(AuditAction.LOGIN_FAILED, "User", identifier, client)
                self.log_warning("Login failed", identifier=identifier)
                raise InvalidCredentialsError()
            if not user.get("is_active"):
                self.add_audit_log(AuditAction.LOGIN_BLOCKED, "User", user["id"], client)
                self.log_warning("Login blocked", user_id=user["id"])
                raise AccountDeactivatedError()
            if not user.get("email_verified"):
                raise EmailNotVerifiedError()

            user = self.users.update(user["id"], {"last_login_at": iso_from_ms(self._clock())}) or user
            self._start_session(user)
            self.add_audit_log(AuditAction.LOGIN_SUCCESS, "User", user["id"], client)
            self.log_info("Login succeeded", user_id=user["id"])
            return dict(self._user)

    def signup(self, email: str, password: str, name: Optional[str] = None,
               client: Optional[ClientInfo] = None) -> Record:
        """
        Register a ``USER`` account, auto-verified and active.

        Raises:
            EmailAlreadyExistsError: an account already uses this email (case-insensitive)
        """
        with self.store.locked(self.users.entity_name):
            if self.users.get_by_email(email) is not None:
                raise EmailAlreadyExistsError()
            user = self.users.create_user({
                "email": email,
                "username": None,
                "name": name or email.split("@")[0],
                "password_hash": simple_hash(password),
                "role": UserRole.USER.value,
                "is_active": True,
                "email_verified": True,
                "created_at": iso_from_ms(self._clock()),
                "last_login_at": None,
            })
        self.add_audit_log(AuditAction.USER_CREATED, "User", user["id"], client)
        self.log_info("User created", user_id=user["id"])
        return strip_password(user)

    def logout(self, client: Optional[ClientInfo] = None) -> None:
        with self._lock:
            user = self.current_user
            self.add_audit_log(AuditAction.LOGOUT, "User", user.get("id") if user else None, client)
            self._end_session()

    def forgot_password(self, email: str, client: Optional[ClientInfo] = None) -> bool:
        """Record a reset request. No email is sent; always returns True."""
        user = self.users.get_by_email(email)
        if user is not None:
            self.add_audit_log(AuditAction.PASSWORD_RESET_REQUESTED, "User", user["id"], client)
        return True

    def reset_password(self, email: str, new_password: str, client: Optional[ClientInfo] = None) -> bool:
        """Set a new password on every account with this email. Always returns True."""
        digest = simple_hash(new_password)
        with self.store.locked(self.users.entity_name):
            for user in self.users.get_all_by_email(email):
                self.users.update(user["id"], {"password_hash": digest})
        self.add_audit_log(AuditAction.PASSWORD_RESET_COMPLETED, "User", email, client)
        return True

    # ------------------ Administration ------------------
    def get_users(self) -> List[Record]:
        return [strip_password(u) for u in self.users.list()]

    def search_users(self, query: Optional[str] = None) -> List[Record]:
        """Users whose email or name contains ``query`` (case-insensitive)"""
        needle = (query or "").lower()
        return [
            u for u in self.get_users()
            if needle in str(u.get("email") or "").lower() or needle in str(u.get("name") or "").lower()
        ]

    def toggle_user_status(self, user_id: str, client: Optional[ClientInfo] = None) -> Record:
        with self.store.locked(self.users.entity_name):
            user = self.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} not found")
            active = not user.get("is_active")
            user = self.users.update(user_id, {"is_active": active})
        action = AuditAction.USER_ACTIVATED if active else AuditAction.USER_DEACTIVATED
        self.add_audit_log(action, "User", user_id, client)
        return strip_password(user)

    def admin_reset_password(self, user_id: str, client: Optional[ClientInfo] = None) -> str:
        """Reset a user's password to the temporary one and return it"""
        if self.users.update(user_id, {"password_hash": simple_hash(ADMIN_RESET_PASSWORD)}) is None:
            raise NotFoundError(f"User {user_id} not found")
        self.add_audit_log(AuditAction.PASSWORD_RESET_BY_ADMIN, "User", user_id, client)
        return ADMIN_RESET_PASSWORD

    def admin_stats(self) -> Dict[str, Any]:
        users = self.users.list()
        logs = self.audit.list()
        return {
            "total_users": len(users),
            "active_users": sum(1 for u in users if u.get("is_active")),
            "audit_log_count": len(logs),
            "admin_count": sum(1 for u in users if u.get("role") == UserRole.ADMIN.value),
            "recent_activity": list(reversed(logs[-5:])),
        }

    def query_audit_logs(self, search: Optional[str] = None, action: Optional[str] = None) -> List[Record]:
        """
        Audit entries, newest first.

        Args:
            search: substring matched case-insensitively against action or entity_id
            action: exact action to keep (None or "all" keeps every action)
        """
        needle = (search or "").lower()
        matches = [
            log for log in self.audit.list()
            if (needle in str(log.get("action") or "").lower()
                or needle in str(log.get("entity_id") or "").lower())
            and (action in (None, "", "all") or log.get("action") == action)
        ]
        return sorted(matches, key=lambda log: str(log.get("timestamp") or ""), reverse=True)

    def audit_actions(self) -> List[str]:
        """Distinct actions in first-seen order"""
        seen: Dict[str, None] = {}
        for log in self.audit.list():
            seen.setdefault(log.get("action"), None)
        return [a for a in seen if a is not None]

    def export_audit_logs_csv(self, search: Optional[str] = None, action: Optional[str] = None) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(AUDIT_CSV_HEADER)
        for log in self.query_audit_logs(search, action):
            writer.writerow([
                log.get("timestamp") or "",
                log.get("action") or "",
                log.get("entity_type") or "",
                log.get("entity_id") or "",
                log.get("user_agent") or "",
            ])
        return buf.getvalue()
