# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Cold, single-shot call streams.

A :class:`CallStream` does nothing until it is consumed. Every consumption,
either ``async for`` or :meth:`CallStream.subscribe`, performs its own
request, delivers exactly one value and completes. Cancelling the consumer
before the value arrives cancels the request in flight.
"""

import asyncio
import logging
from typing import (
    Any,
    AsyncGenerator,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Optional,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def report_task_failure(task: "asyncio.Task[Any]") -> None:
    """Log an exception raised by a delivery callback nobody is awaiting"""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Delivery callback raised", exc_info=exc)


class Subscription:
    """Handle to a running :meth:`CallStream.subscribe` consumption"""

    def __init__(self, task: "asyncio.Task[None]"):
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def disposed(self) -> bool:
        return self._task.cancelled()

    def dispose(self) -> None:
        if not self._task.done():
            logger.debug("Disposing subscription, cancelling pending call")
            self._task.cancel()

    async def wait(self) -> None:
        """
        Wait until the subscription emitted its value or was disposed.

        Exceptions raised by the observer callbacks are re-raised here.
        """
        await asyncio.wait([self._task])
        if not self._task.cancelled():
            self._task.result()


class CallStream(Generic[T]):

    def __init__(
        self,
        factory: Callable[[], Awaitable[T]],
        tasks: Optional[set["asyncio.Task[Any]"]] = None,
    ):
        self._factory = factory
        self._tasks = tasks if tasks is not None else set()

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncGenerator[T, None]:
        yield await self._factory()

    async def first(self) -> T:
        async for value in self:
            return value
        raise RuntimeError("Call stream completed without a value")

    def subscribe(
        self,
        on_next: Callable[[T], Any],
        on_completed: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        task = asyncio.get_running_loop().create_task(
            self._emit(on_next, on_completed)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(report_task_failure)
        return Subscription(task)

    async def _emit(
        self,
        on_next: Callable[[T], Any],
        on_completed: Optional[Callable[[], Any]],
    ) -> None:
        value = await self._factory()
        on_next(value)
        if on_completed is not None:
            on_completed()


__all__ = ["CallStream", "Subscription", "report_task_failure"]
