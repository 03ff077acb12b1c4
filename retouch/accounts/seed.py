"""
Bootstrap accounts for an empty store.

These credentials are documented demo defaults, not a provisioning
mechanism. Change the admin password with `retouch set-password` on any
deployment reachable by others.
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone

from .models import Account, Role
from .store import AccountStore

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "1234"
DEFAULT_MEMBER_USERNAME = "member1"
DEFAULT_MEMBER_PASSWORD = "123456"
DEFAULT_MEMBER_VALIDITY = timedelta(days=30)


def seed_if_empty(store: AccountStore, now: datetime | None = None) -> bool:
    """
    Seed the admin and one example member if the store has no accounts.

    If the store already has accounts but lost the admin secret, the
    default admin secret is restored.

    Returns True if the store was seeded.
    """
    now = now or datetime.now(timezone.utc)

    if store.is_empty():
        store.create_account(
            Account(
                id="admin-001",
                username=DEFAULT_ADMIN_USERNAME,
                role=Role.ADMIN,
            ),
            DEFAULT_ADMIN_PASSWORD,
        )
        store.create_account(
            Account(
                id="user-001",
                username=DEFAULT_MEMBER_USERNAME,
                role=Role.MEMBER,
                expiry_date=now + DEFAULT_MEMBER_VALIDITY,
            ),
            DEFAULT_MEMBER_PASSWORD,
        )
        logger.info("Seeded empty account store with default admin and member")
        return True

    if store.get_account(DEFAULT_ADMIN_USERNAME) and not store.get_secret(DEFAULT_ADMIN_USERNAME):
        store.put_secret(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)
        logger.warning("Admin credential was missing; restored the default")

    return False
