from __future__ import annotations

import time
import uuid
from typing import List, Optional

from ..models.progression import LogEntry, LogKind, LogOutcome


class EventLog:
    """Append-only writer over a snapshot's history list."""

    def __init__(self, entries: List[LogEntry]) -> None:
        self._entries = entries

    def append(
        self,
        kind: LogKind,
        message: str,
        *,
        source: Optional[str] = None,
        outcome: Optional[LogOutcome] = None,
        roll_value: Optional[int] = None,
        threshold: Optional[int] = None,
        details: Optional[str] = None,
    ) -> LogEntry:
        entry = LogEntry(
            id=uuid.uuid4().hex,
            timestamp=int(time.time() * 1000),
            kind=kind,
            source=source,
            outcome=outcome,
            roll_value=roll_value,
            threshold=threshold,
            message=message,
            details=details,
        )
        self._entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self._entries)
