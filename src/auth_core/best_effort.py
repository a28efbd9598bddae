"""Fire-and-observe side effects.

A best-effort operation is awaited inline like any other store call, but a
failure is recorded on the returned ``BestEffortResult`` and logged instead
of being raised. The enclosing business operation decides what to do with
the result; it must never turn a successful login into a failed one.

Cancellation is not a failure: ``asyncio.CancelledError`` propagates so a
caller's deadline or disconnect still aborts the whole operation.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestEffortResult(Generic[T]):
    """Outcome of a best-effort operation."""

    operation: str
    value: T | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def attempt(
    operation: str,
    awaitable: Awaitable[T],
    timeout: float | None = None,
) -> BestEffortResult[T]:
    """Await ``awaitable`` once, observing rather than raising its failure.

    Parameters
    ----------
    operation
        Name used in logs, e.g. ``"update_last_login"``
    awaitable
        The store call to run
    timeout
        Seconds before the call is abandoned and reported as failed.
        ``None`` waits as long as the caller's own deadline allows.

    Returns
    -------
    BestEffortResult carrying the value on success or the exception on failure
    """
    try:
        if timeout is None:
            value = await awaitable
        else:
            value = await asyncio.wait_for(awaitable, timeout=timeout)
    except Exception as e:
        logger.warning("Best-effort operation %s failed: %r", operation, e)
        return BestEffortResult(operation=operation, error=e)
    return BestEffortResult(operation=operation, value=value)
