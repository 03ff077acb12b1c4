"""
Accounts Module - Identity, credentials and sessions.

One store backs both the account records and the credential table.
The SessionAuthority guards every privileged operation; the
AccountRegistry carries out admin actions and feeds invalidations back
into the authority.
"""

from .models import Account, Role
from .store import AccountStore, InMemoryAccountStore, JsonFileAccountStore
from .authority import SessionAuthority
from .registry import AccountRegistry
from .seed import seed_if_empty

__all__ = [
    "Account",
    "Role",
    "AccountStore",
    "InMemoryAccountStore",
    "JsonFileAccountStore",
    "SessionAuthority",
    "AccountRegistry",
    "seed_if_empty",
]
