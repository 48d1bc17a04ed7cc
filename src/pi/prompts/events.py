"""Async event stream for push/pull streaming pattern.

Uses asyncio.Queue internally for producer/consumer coordination. A
session publishes one :class:`AnswerEvent` per answered question; callers
can also push questions into a stream to feed a session incrementally.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

T = TypeVar("T")
R = TypeVar("R")

_SENTINEL = object()


@dataclass(frozen=True)
class AnswerEvent:
    """Published after a question's answer is stored."""

    name: str
    answer: Any


class EventStream(Generic[T, R]):
    """Generic async event stream supporting push from producers and async iteration by consumers.

    Besides async iteration, listeners can :meth:`subscribe` with
    ``on_next``/``on_error``/``on_complete`` callbacks.

    Type parameters:
        T: The event type pushed into the stream.
        R: The final result type.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[T | object] = asyncio.Queue()
        self._done = False
        self._result: R | None = None
        self._error: BaseException | None = None
        self._result_future: asyncio.Future[R] | None = None
        self._subscribers: list[tuple[Callable | None, Callable | None, Callable | None]] = []

    @property
    def done(self) -> bool:
        return self._done

    def push(self, event: T) -> None:
        """Push an event into the stream. No-op if stream is already done."""
        if self._done:
            return
        self._queue.put_nowait(event)
        for on_next, _on_error, _on_complete in list(self._subscribers):
            if on_next is not None:
                on_next(event)

    def end(self, result: R | None = None) -> None:
        """Signal that the stream is done, optionally providing a final result."""
        if self._done:
            return
        self._done = True
        self._result = result
        if self._result_future is not None and not self._result_future.done():
            self._result_future.set_result(result)
        self._queue.put_nowait(_SENTINEL)
        for _on_next, _on_error, on_complete in list(self._subscribers):
            if on_complete is not None:
                on_complete()

    def fail(self, error: BaseException) -> None:
        """Terminate the stream with *error*; consumers see it raised."""
        if self._done:
            return
        self._done = True
        self._error = error
        if self._result_future is not None and not self._result_future.done():
            self._result_future.set_exception(error)
        self._queue.put_nowait(_SENTINEL)
        for _on_next, on_error, _on_complete in list(self._subscribers):
            if on_error is not None:
                on_error(error)

    def subscribe(
        self,
        on_next: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        on_complete: Callable[[], Any] | None = None,
    ) -> Callable[[], None]:
        """Receive future events through callbacks; returns an unsubscribe function."""
        entry = (on_next, on_error, on_complete)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            item = await self._queue.get()
            if item is _SENTINEL:
                if self._error is not None:
                    raise self._error
                return
            yield item  # type: ignore[misc]

    async def result(self) -> R:
        """Await the final result given to :meth:`end`."""
        if self._done:
            if self._error is not None:
                raise self._error
            return self._result  # type: ignore[return-value]
        if self._result_future is None:
            self._result_future = asyncio.get_running_loop().create_future()
        return await self._result_future
