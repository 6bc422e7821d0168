"""Cancellable operation context threaded through every fetch of a run."""

import asyncio
import time
from collections.abc import Awaitable
from typing import Optional, TypeVar

from loguru import logger

from ejudge_scraper.domain.exceptions import OperationCancelledError

T = TypeVar("T")

DEADLINE_EXCEEDED = "deadline exceeded"


class OperationContext:
    """
    Cancellation signal and optional deadline shared by a group of fetches.

    Contexts form a tree: a child observes its parent's cancellation and the
    earlier of both deadlines. Cancelling a context never affects its parent.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        parent: Optional["OperationContext"] = None,
    ):
        """
        Initialize context.

        Args:
            timeout: Seconds from now after which the context expires
            parent: Context this one descends from
        """
        self._parent = parent
        self._children: list[OperationContext] = []
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._deadline = time.monotonic() + timeout if timeout is not None else None

        if parent is not None:
            parent._children.append(self)
            if parent.cancelled:
                self.cancel(parent.reason or "cancelled")

    def child(self, timeout: Optional[float] = None) -> "OperationContext":
        """Create a context that descends from this one."""
        return OperationContext(timeout=timeout, parent=self)

    @property
    def deadline(self) -> Optional[float]:
        """Effective monotonic deadline, taking ancestors into account."""
        parent_deadline = self._parent.deadline if self._parent else None
        if self._deadline is None:
            return parent_deadline
        if parent_deadline is None:
            return self._deadline
        return min(self._deadline, parent_deadline)

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is none."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            self.cancel(DEADLINE_EXCEEDED)
            return True
        return False

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Cancel this context and every context descending from it."""
        if self._event.is_set():
            return

        self._reason = reason
        self._event.set()
        logger.debug(f"Operation context {reason}")

        for child in self._children:
            child.cancel(reason)

    def raise_if_cancelled(self, url: Optional[str] = None) -> None:
        if self.cancelled:
            raise OperationCancelledError(url, self._reason or "cancelled")

    async def run(self, awaitable: Awaitable[T], *, url: Optional[str] = None) -> T:
        """
        Await ``awaitable`` unless the context is cancelled first.

        Args:
            awaitable: The fetch to run
            url: URL being fetched, reported on cancellation

        Returns:
            Whatever the awaitable returns

        Raises:
            OperationCancelledError: If the context is cancelled or its deadline
                passes before the awaitable completes
        """
        if self.cancelled:
            # Never started, so close it instead of leaving it un-awaited
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise OperationCancelledError(url, self._reason or "cancelled")

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())

        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

        if not self._event.is_set():
            self.cancel(DEADLINE_EXCEEDED)

        logger.warning(f"Fetch aborted ({self._reason}): {url}")
        raise OperationCancelledError(url, self._reason or "cancelled")
