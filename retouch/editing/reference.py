"""
Reference Slot - At most one auxiliary style image.

The slot is independent of the edit history: only direct user action sets
or clears it. Undo, redo and generation never touch it.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceImage:
    data: bytes
    media_type: str


class ReferenceSlot:
    """Holds the current reference image, if any."""

    def __init__(self):
        self._image: ReferenceImage | None = None

    @property
    def image(self) -> ReferenceImage | None:
        return self._image

    @property
    def is_set(self) -> bool:
        return self._image is not None

    def set(self, data: bytes, media_type: str) -> ReferenceImage:
        self._image = ReferenceImage(data=data, media_type=media_type)
        return self._image

    def clear(self):
        self._image = None
