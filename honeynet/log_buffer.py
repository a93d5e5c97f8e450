"""Bounded, newest-first record of system and attack events."""

from __future__ import annotations

import itertools
import time
from collections import deque
from datetime import datetime
from threading import Lock
from typing import Callable, Optional

from .models import AttackEvent, LogCategory, LogEntry, Severity

DEFAULT_CAPACITY = 50


class LogBuffer:
    """Append-only ring of :class:`LogEntry` objects.

    The newest entry sits at index 0.  Once ``capacity`` entries are held,
    every append evicts the oldest one; nothing else removes entries.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY,
                 clock: Optional[Callable[[], datetime]] = None):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._clock = clock or datetime.now
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._counter = itertools.count()
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: LogEntry) -> LogEntry:
        with self._lock:
            # appendleft on a full bounded deque drops the rightmost (oldest)
            self._entries.appendleft(entry)
        return entry

    def all(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    def next_id(self) -> str:
        return f"{int(time.time() * 1000)}-{next(self._counter)}"

    def system(self, message: str, severity: Severity) -> LogEntry:
        """Create and append a SYSTEM entry."""
        return self.append(LogEntry(
            id=self.next_id(),
            timestamp=self._clock(),
            category=LogCategory.SYSTEM,
            severity=severity,
            message=message,
        ))

    def attack(self, event: AttackEvent) -> LogEntry:
        """Create and append an ATTACK entry for *event*."""
        return self.append(LogEntry(
            id=self.next_id(),
            timestamp=self._clock(),
            category=LogCategory.ATTACK,
            severity=Severity.WARNING,
            message=f"{event.attack_type} from {event.source_ip} on {event.target_label}",
            attack_type=event.attack_type,
            source_ip=event.source_ip,
            target_id=event.target_id,
            target_label=event.target_label,
        ))
