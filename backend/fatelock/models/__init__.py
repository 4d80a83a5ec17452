"""Domain models shared by the services and routers."""

from .category import Category, TableKind
from .progression import (
    CostKind,
    LogEntry,
    LogKind,
    LogOutcome,
    PendingUnlock,
    ProgressionSnapshot,
    UnlockRecord,
    level_cap,
)

__all__ = [
    "Category",
    "CostKind",
    "LogEntry",
    "LogKind",
    "LogOutcome",
    "PendingUnlock",
    "ProgressionSnapshot",
    "TableKind",
    "UnlockRecord",
    "level_cap",
]
