"""Structured logging utilities leveraging loguru.

The client never installs sinks on its own: applications embedding it call
:func:`configure_logging` when they want the JSON output, otherwise loguru's
default stderr sink applies. Services log event-style messages
(``fetch.attempt_failed``, ``paginator.round_completed``...) and attach the
request context through ``logger.bind``.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from typing import Iterator

from loguru import logger

from ddg_search.config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure loguru to output JSON logs on stderr."""
    resolved = level or get_settings().log_level
    logger.remove()
    logger.add(sys.stderr, level=resolved.upper(), serialize=True)


@contextmanager
def log_stage(stage: str, **context: object) -> Iterator[None]:
    """Context manager logging stage completion/failure with latency metrics."""
    started_at = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed_ms = (time.perf_counter() - started_at) * 1000
        logger.bind(stage=stage, latency_ms=elapsed_ms, **context).exception("stage.failed")
        raise
    else:
        elapsed_ms = (time.perf_counter() - started_at) * 1000
        logger.bind(stage=stage, latency_ms=elapsed_ms, **context).info("stage.completed")


__all__ = ["configure_logging", "log_stage"]
