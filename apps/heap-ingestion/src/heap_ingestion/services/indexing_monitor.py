"""Poll heap state while the remote service is indexing."""

import asyncio
import contextlib
import inspect
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from heap_ingestion.config import get_settings
from heap_ingestion.models.progress import IndexingProgress
from heap_ingestion.models.state import HeapState
from heap_ingestion.utils.errors import IndexingTimeoutError
from heap_ingestion.utils.logging import get_logger

logger = get_logger("indexing_monitor")
settings = get_settings()

PollFn = Callable[[str], Awaitable[Any]]
TriggerFn = Callable[[str], Awaitable[Any]]
ProgressCallback = Callable[[IndexingProgress], Any]


class IndexingMonitor:
    """
    Observe indexing progress of a heap until it reaches 100%.

    Each poll is independent: a failed or malformed read is logged and the
    next tick simply tries again, keeping the last known state. Polling stops
    on the first state reporting ``indexProgressPercent >= 100``.
    """

    def __init__(
        self,
        poll_fn: PollFn,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the monitor.

        Args:
            poll_fn: Async callable returning the heap state (HeapState or raw dict)
            poll_interval: Seconds between polls (defaults to settings.monitor.poll_interval)
            timeout: Optional limit in seconds for ``run`` (defaults to settings.monitor.timeout)
        """
        self._poll_fn = poll_fn
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.monitor.poll_interval
        )
        self.timeout = timeout if timeout is not None else settings.monitor.timeout
        self.state = HeapState()
        self.polls = 0
        self._task: Optional["asyncio.Task[HeapState]"] = None

    async def _read_state(self, heap_id: str) -> HeapState:
        result = await self._poll_fn(heap_id)
        if isinstance(result, HeapState):
            return result
        return HeapState.model_validate(result)

    async def watch(self, heap_id: str) -> AsyncIterator[IndexingProgress]:
        """
        Poll the heap state every ``poll_interval`` seconds.

        Yields one IndexingProgress per successful poll and returns after the
        first completed one.
        """
        self.polls = 0
        while True:
            await asyncio.sleep(self.poll_interval)
            self.polls += 1
            try:
                state = await self._read_state(heap_id)
            except Exception as e:
                logger.warning(f"State poll {self.polls} failed for heap {heap_id}: {e}")
                continue

            self.state = state
            progress = IndexingProgress(
                percent=state.index_progress_percent,
                state=state,
                polls=self.polls,
            )
            yield progress

            if progress.complete:
                logger.info(f"Indexing complete for heap {heap_id} after {self.polls} poll(s)")
                return

    async def _consume(self, heap_id: str, on_progress: Optional[ProgressCallback]) -> HeapState:
        async for progress in self.watch(heap_id):
            if on_progress is not None:
                outcome = on_progress(progress)
                if inspect.isawaitable(outcome):
                    await outcome
        return self.state

    async def run(
        self,
        heap_id: str,
        trigger_fn: Optional[TriggerFn] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> HeapState:
        """
        Optionally trigger indexing, then poll until it completes.

        Args:
            heap_id: Heap being indexed
            trigger_fn: Async callable starting indexing; its errors propagate
            on_progress: Optional callback (sync or async) per progress event

        Returns:
            The completed heap state

        Raises:
            IndexingTimeoutError: If ``timeout`` is set and elapses first
        """
        self.state = HeapState()
        if trigger_fn is not None:
            logger.info(f"Starting indexing of heap {heap_id}")
            await trigger_fn(heap_id)

        try:
            return await asyncio.wait_for(self._consume(heap_id, on_progress), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                f"Indexing of heap {heap_id} not complete after {self.timeout}s "
                f"(last progress {self.state.index_progress_percent}%)"
            )
            raise IndexingTimeoutError(
                timeout=self.timeout,
                last_percent=self.state.index_progress_percent,
                details={"heap_id": heap_id, "polls": self.polls},
            ) from e

    def start(
        self,
        heap_id: str,
        trigger_fn: Optional[TriggerFn] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> "asyncio.Task[HeapState]":
        """Run the monitor as a background task that ``stop`` can cancel."""
        if self.running:
            raise RuntimeError("Indexing monitor is already running")
        self._task = asyncio.create_task(self.run(heap_id, trigger_fn, on_progress))
        return self._task

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> HeapState:
        """Wait for the background task started with ``start``."""
        if self._task is None:
            raise RuntimeError("Indexing monitor was not started")
        return await self._task

    async def stop(self) -> None:
        """Cancel the background task, if any, and wait for it to finish."""
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        logger.info(f"Indexing monitor stopped after {self.polls} poll(s)")
