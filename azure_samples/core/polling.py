"""
Blocking wait for long-running operations.

Azure `begin_*` calls return an LROPoller. The caller must not proceed to
the next step until the operation reaches a terminal state, so every
stage blocks here. The interval and max wait come from SampleConfig and
the sleep/clock functions are injectable for deterministic tests.
"""

import logging
import time
from typing import Any, Callable, Optional

from azure_samples import constants as CONSTANTS
from .exceptions import OperationFailedError, OperationTimeoutError

logger = logging.getLogger(__name__)


def wait_until_terminal(
    poller: Any,
    interval: float,
    max_wait: float,
    description: str = "complete long-running operation",
    sleep: Optional[Callable[[float], None]] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Any:
    """
    Poll a long-running operation until it succeeds, fails or times out.

    Each loop iteration reads `poller.status()` exactly once.

    Args:
        poller: Object exposing status(), done() and result() (e.g., LROPoller)
        interval: Seconds to sleep between polls (must be positive)
        max_wait: Seconds after which the wait is abandoned
        description: Operation description used in logs and errors
        sleep: Sleep function, defaults to time.sleep
        clock: Monotonic clock, defaults to time.monotonic

    Returns:
        The operation result (poller.result())

    Raises:
        ValueError: If interval or max_wait are out of range
        OperationFailedError: If the operation ends Failed/Canceled and the
            poller carries no service error of its own
        AzureError: The service error raised by poller.result() on a failed operation
        OperationTimeoutError: If max_wait elapses before a terminal state
    """
    if interval <= 0:
        raise ValueError("interval must be positive")
    if max_wait < 0:
        raise ValueError("max_wait must not be negative")

    sleep = sleep or time.sleep
    clock = clock or time.monotonic

    started = clock()
    polls = 0

    while True:
        status = str(poller.status())
        polls += 1
        logger.debug(f"[poll {polls}] {description}: {status}")

        normalized = status.lower()
        if normalized in CONSTANTS.FAILED_STATES:
            # result() raises the service error stored on the poller
            poller.result()
            raise OperationFailedError(description, status)
        if normalized in CONSTANTS.SUCCEEDED_STATES or poller.done():
            return poller.result()

        waited = clock() - started
        if waited >= max_wait:
            raise OperationTimeoutError(description, waited, max_wait)

        sleep(interval)
