"""
Session Module - Per-user editing workspaces.

A workspace is the client-side half of a session:
- Created on login
- Holds the history, reference image and API key
- Dropped on logout or when the session stops validating

Workspaces are EPHEMERAL. Accounts are the only durable state.
"""

from .workspace import Workspace, WorkspaceManager

__all__ = [
    "Workspace",
    "WorkspaceManager",
]
