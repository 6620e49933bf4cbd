"""Abstract session-scoped key-value string storage.

The cart persists itself here so that a reload of the same session
restores it. Implementations may raise ``OSError`` or ``StorageError``
when the storage is unavailable; callers decide whether that matters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SessionStorage(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
