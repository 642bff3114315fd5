"""
Mailbox
=======

Single-slot, latest-value-wins cell for handing data from one thread to another.
"""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Mailbox(Generic[T]):
    """
    Lock-protected single slot.

    Writers overwrite whatever is pending; the reader takes the newest value
    (or None) and empties the slot. No queueing: intermediate values are lost.

    Example:
        box = Mailbox()
        box.post((10.0, 20.0))
        box.post((12.0, 22.0))
        box.take()   # (12.0, 22.0)
        box.take()   # None
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._has_value = False

    def post(self, value: T) -> None:
        """Store ``value``, replacing any unread one."""
        with self._lock:
            self._value = value
            self._has_value = True

    def take(self) -> Optional[T]:
        """Return the pending value and clear the slot, or None if empty."""
        with self._lock:
            if not self._has_value:
                return None
            value = self._value
            self._value = None
            self._has_value = False
            return value

    def clear(self) -> None:
        with self._lock:
            self._value = None
            self._has_value = False
