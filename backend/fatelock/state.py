from __future__ import annotations

from typing import Callable

from .services.progression import ProgressionEngine

_engine_provider: Callable[[], ProgressionEngine] | None = None


def set_engine_provider(provider: Callable[[], ProgressionEngine]) -> None:
    """Register a callable that returns the active progression engine."""

    global _engine_provider
    _engine_provider = provider


def get_engine_dependency() -> ProgressionEngine:
    """FastAPI dependency returning the configured progression engine."""

    if _engine_provider is None:
        raise RuntimeError("Progression engine provider has not been configured")
    return _engine_provider()
