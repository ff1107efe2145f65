"""Bounded polling with a fixed backoff."""

import logging
import time
from typing import Callable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def poll_until(
    probe: Callable[[], T],
    predicate: Callable[[T], bool] = bool,
    max_attempts: int = 30,
    interval: float = 2,
    sleep: Callable[[float], None] = time.sleep,
    description: Optional[str] = None,
) -> Tuple[bool, T, int]:
    """Call ``probe`` until ``predicate`` accepts its result.

    Sleeps ``interval`` seconds between attempts, never after the last one.

    Returns:
        Tuple of (satisfied, last probe result, attempts made)
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    result = None
    for attempt in range(1, max_attempts + 1):
        result = probe()
        if predicate(result):
            return True, result, attempt
        if description:
            logger.debug(f"{description}: attempt {attempt}/{max_attempts} not ready")
        if attempt < max_attempts:
            sleep(interval)
    return False, result, max_attempts
