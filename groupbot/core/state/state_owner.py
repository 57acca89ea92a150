"""
Single-owner task for the bot's mutable state.

Every ledger, catalog and rotation call is submitted as a job to one queue
drained by one worker task. A job runs to completion, including any awaits on
the persistent store, before the next job starts, so read-modify-write-persist
sequences from concurrent callbacks never interleave.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from groupbot.core.logging.logger import get_logger

_STOP = object()


class StateOwner:
    """
    Serializes access to the ledger, catalog and rotation cache.

    Usage::

        state = StateOwner()
        state.start()
        receipt = await state.call(ledger.transfer, "u1", "u2", 3)
        await state.stop()

    Exceptions raised by a job propagate to the caller awaiting it; the
    worker keeps running.
    """

    def __init__(self):
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._worker: asyncio.Task | None = None
        self.jobs_run = 0
        self.logger = get_logger(__name__)

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    @property
    def backlog(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Start the worker task on the running event loop."""
        if self.is_running:
            return
        self._worker = asyncio.create_task(self._run(), name="groupbot-state-owner")
        self.logger.debug("State owner started")

    async def stop(self) -> None:
        """Run every job already queued, then stop the worker."""
        if not self.is_running:
            return
        await self._queue.put(_STOP)
        await self._worker
        self._worker = None
        self.logger.debug(f"State owner stopped after {self.jobs_run} jobs")

    async def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run ``fn(*args, **kwargs)`` on the owner task and return its result.

        ``fn`` may be a plain function or a coroutine function.
        """
        if not self.is_running:
            self.start()
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        await self._queue.put((fn, args, kwargs, future))
        return await future

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                if job is _STOP:
                    return
                fn, args, kwargs, future = job
                if future.cancelled():
                    continue
                try:
                    result = fn(*args, **kwargs)
                    if inspect.isawaitable(result):
                        result = await result
                except asyncio.CancelledError:
                    if not future.done():
                        future.cancel()
                    worker = asyncio.current_task()
                    # Only a cancelled worker stops; a job cancelling itself does not
                    if worker is not None and worker.cancelling():
                        raise
                except Exception as e:
                    if not future.cancelled():
                        future.set_exception(e)
                except BaseException as e:
                    if not future.done():
                        future.set_exception(e)
                    raise
                else:
                    if not future.cancelled():
                        future.set_result(result)
                self.jobs_run += 1
            finally:
                self._queue.task_done()
