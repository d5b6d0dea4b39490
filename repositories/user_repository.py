"""
User Repository - Data access layer for accounts and the audit trail
"""

from typing import Any, List, Mapping, Optional

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName


class UserRepository(BaseRepository):
    """Repository for the user directory"""

    entity_name = EntityName.USERS.value

    def get_by_email(self, email: str) -> Optional[Record]:
        """Get user by email (case-insensitive)"""
        wanted = (email or "").lower()
        for user in self.list():
            if str(user.get("email") or "").lower() == wanted:
                return user
        return None

    def get_all_by_email(self, email: str) -> List[Record]:
        wanted = (email or "").lower()
        return [u for u in self.list() if str(u.get("email") or "").lower() == wanted]

    def get_by_login(self, identifier: str, password_hash: str) -> Optional[Record]:
        """
        Get the user matching a login attempt: case-insensitive email or exact
        username, and the given password digest.
        """
        wanted = (identifier or "").lower()
        for user in self.list():
            email_match = str(user.get("email") or "").lower() == wanted
            username_match = user.get("username") is not None and user.get("username") == identifier
            if (email_match or username_match) and user.get("password_hash") == password_hash:
                return user
        return None

    def create_user(self, fields: Mapping[str, Any]) -> Record:
        return self.create(fields)


class AuditLogRepository(BaseRepository):
    """
    Repository for audit entries.

    Append-only: entries are never updated or deleted by the application.
    """

    entity_name = EntityName.AUDIT_LOG.value

    def append(self, entry: Mapping[str, Any]) -> Record:
        return self.create(entry)

    def update(self, record_id: str, patch: Mapping[str, Any]):
        raise NotImplementedError("Audit entries are append-only")

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError("Audit entries are append-only")
