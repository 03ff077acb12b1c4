"""
Account Models - Account records and roles.

Design principles:
- A session is not a separate entity: it lives in Account.session_token
- Records are plain dataclasses, serializable to JSON for the store
- Roles form a closed set
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Role(str, Enum):
    """Account roles."""
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


@dataclass
class Account:
    """
    An account record.

    Invariant: at most one live session_token at any time.
    The secret is NOT stored here; it lives in the credential table.
    """
    id: str
    username: str
    role: Role = Role.MEMBER
    is_active: bool = True
    expiry_date: datetime | None = None
    session_token: str | None = None
    api_key: str | None = None  # Transform backend key saved by the user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against the given clock reading."""
        if self.expiry_date is None:
            return False
        return self.expiry_date <= now

    def copy_with(self, **kwargs) -> Account:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "is_active": self.is_active,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "session_token": self.session_token,
            "api_key": self.api_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        expiry = data.get("expiry_date")
        return cls(
            id=data["id"],
            username=data["username"],
            role=Role(data.get("role", Role.MEMBER.value)),
            is_active=data.get("is_active", True),
            expiry_date=as_utc(datetime.fromisoformat(expiry)) if expiry else None,
            session_token=data.get("session_token"),
            api_key=data.get("api_key"),
        )
