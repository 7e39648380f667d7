"""Optional tracing hook for candidate generation and selection."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

Observer = Callable[[str, dict[str, object]], None]
"""Signature: observer(event_name, fields)."""


def emit(observer: Observer | None, event: str, **fields: object) -> None:
    """Log *event* at debug level and forward it to *observer*, if any."""
    logger.debug(event, **fields)
    if observer is not None:
        observer(event, fields)
