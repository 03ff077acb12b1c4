"""
Workspace Manager - Holds each logged-in user's editing state.

LIFECYCLE:
1. User logs in -> a fresh workspace replaces any previous one
2. While logged in:
   - User loads a primary image (history reset)
   - User sets/clears a reference image
   - User generates, undoes, redoes
3. Logout or forced logout (invalid session) -> workspace dropped,
   ALL editing state deleted

PERSISTENCE RULES:
- Workspaces are in-memory only
- Only accounts and credentials are durable

CONCURRENCY:
- One generation in flight per workspace, guarded by the busy lock
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import threading
import time

from ..accounts.models import Account
from ..editing.history import HistoryStack
from ..editing.reference import ReferenceSlot
from ..errors import WorkspaceBusy


@dataclass
class Workspace:
    """
    One user's editing session.

    Contains:
    - The token the client holds
    - The edit history and reference slot
    - The access credential loaded from the account
    """
    username: str
    token: str
    created_at: float
    api_key: str | None = None

    history: HistoryStack = field(default_factory=HistoryStack)
    reference: ReferenceSlot = field(default_factory=ReferenceSlot)

    _busy: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    @contextmanager
    def busy(self):
        """
        Hold the busy flag for one generation.

        Raises:
            WorkspaceBusy: another generation is already running
        """
        if not self._busy.acquire(blocking=False):
            raise WorkspaceBusy()
        try:
            yield self
        finally:
            self._busy.release()

    def clear_project(self):
        """New project: drop history and reference."""
        self.history.clear()
        self.reference.clear()


class WorkspaceManager:
    """
    Tracks one workspace per username.

    No persistence - workspaces are in-memory only.
    """

    def __init__(self):
        self._workspaces: dict[str, Workspace] = {}
        self._lock = threading.Lock()

    def open(self, account: Account) -> Workspace:
        """Create a fresh workspace for a just-logged-in account."""
        workspace = Workspace(
            username=account.username,
            token=account.session_token,
            created_at=time.time(),
            api_key=account.api_key,
        )
        with self._lock:
            self._workspaces[account.username] = workspace
        return workspace

    def get(self, username: str) -> Workspace | None:
        with self._lock:
            return self._workspaces.get(username)

    def close(self, username: str) -> bool:
        """
        Drop a workspace and its editing state.

        Returns True if there was one.
        """
        with self._lock:
            workspace = self._workspaces.pop(username, None)
        if workspace is None:
            return False
        workspace.clear_project()
        workspace.api_key = None
        return True
