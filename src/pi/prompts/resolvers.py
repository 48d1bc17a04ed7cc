"""Uniform resolution of literal, sync, async and callback-style values.

Question fields such as ``when``, ``message``, ``default`` and ``choices``
may be literals or functions of the answers. A function may return its
value, return an awaitable, or report it through a completion callback:
when its signature asks for one more positional argument than it is given,
that argument is a ``done(error, value)`` function. Functions taking fewer
positional arguments than supplied get only the leading ones, so
``validate=lambda value: ...`` works as well as ``lambda value, answers: ...``.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable


def _positional_arity(fn: Callable[..., Any]) -> tuple[int, int] | None:
    """``(required, total)`` positional parameters, or ``None`` if unbounded or unknown."""
    try:
        sig = inspect.signature(fn)
    except (ValueError, TypeError):
        return None

    params = sig.parameters.values()
    if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params):
        return None
    positional = [
        p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    return len(required), len(positional)


async def call_async(fn: Callable[..., Any], *args: Any) -> Any:
    """Call *fn* with *args* and return its value, however it is delivered."""
    arity = _positional_arity(fn)

    if arity is not None and arity[0] == len(args) + 1:
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        def done(error: BaseException | None = None, value: Any = None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value)

        returned = fn(*args, done)
        if inspect.isawaitable(returned):
            await returned
        return await future

    if arity is not None and arity[1] < len(args):
        args = args[: arity[1]]

    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def resolve_value(value: Any, *args: Any) -> Any:
    """Return *value* itself, or the result of calling it with *args*."""
    if not callable(value):
        return value
    return await call_async(value, *args)
