"""
Edit History - Linear undo/redo stack of image versions.

Invariant: -1 <= cursor < len(versions)
- cursor == -1 iff the stack is empty
- versions[0..cursor] are live
- versions past the cursor are reachable only via redo, and are discarded
  the moment a new version is appended (branch truncation)

History is strictly linear; there is no branching tree.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import time
import uuid


@dataclass(frozen=True)
class ImageVersion:
    """One immutable image in the history."""
    id: str
    data: bytes
    media_type: str
    created_at: float = field(default_factory=time.time)

    @classmethod
    def create(cls, data: bytes, media_type: str, prefix: str = "img") -> ImageVersion:
        """Create a version with a fresh id."""
        return cls(
            id=f"{prefix}-{uuid.uuid4().hex[:12]}",
            data=data,
            media_type=media_type,
        )


class HistoryStack:
    """
    Ordered versions with a movable cursor.

    Usage:
        history = HistoryStack()
        history.reset(original)
        history.append(edited)
        history.undo()        # back to original
        history.redo()        # forward to edited
    """

    def __init__(self):
        self._versions: list[ImageVersion] = []
        self._cursor = -1

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def versions(self) -> tuple[ImageVersion, ...]:
        return tuple(self._versions)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._versions) - 1

    @property
    def is_empty(self) -> bool:
        return not self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def current(self) -> ImageVersion | None:
        """The version under the cursor, or None when empty."""
        if self._cursor < 0:
            return None
        return self._versions[self._cursor]

    def reset(self, version: ImageVersion):
        """Start over from a brand-new primary image."""
        self._versions = [version]
        self._cursor = 0

    def append(self, version: ImageVersion):
        """Drop everything past the cursor, then push and move to the tail."""
        del self._versions[self._cursor + 1:]
        self._versions.append(version)
        self._cursor = len(self._versions) - 1

    def undo(self):
        if self._cursor > 0:
            self._cursor -= 1

    def redo(self):
        if self._cursor < len(self._versions) - 1:
            self._cursor += 1

    def reset_cursor_to_origin(self):
        """Show the original again. Nothing is truncated, redo still works."""
        if self._versions:
            self._cursor = 0

    def clear(self):
        self._versions = []
        self._cursor = -1
