"""Timing utilities for profiling listing queries."""

import time
from collections.abc import Generator
from contextlib import contextmanager

from csa_market.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def timed(operation: str) -> Generator[None]:
    """Log how long the wrapped block took.

    Usage:
        with timed("query farm page"):
            rows = db.execute(stmt).scalars().all()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms < 50:
            logger.debug(f"[{duration_ms:.2f}ms] {operation}")
        elif duration_ms < 200:
            logger.info(f"[{duration_ms:.2f}ms] {operation} (slow)")
        else:
            logger.warning(f"[{duration_ms:.2f}ms] {operation} (very slow)")
