"""
Awaitable twins for the synchronous facade.

The EC2 calls themselves block inside botocore; :func:`async_wrap` pushes
them onto a worker thread with :func:`asyncio.to_thread` so they can be
awaited without stalling the event loop.

Usage::

    ec2 = EC2()
    reservations = await ec2.adescribe_instances(creds)
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def async_wrap(
    fn: Callable[..., T],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Return a coroutine function that runs *fn* in a worker thread."""

    @functools.wraps(fn)
    async def _wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return _wrapper


class AsyncMixin:
    """Give every public sync method an ``a<name>`` coroutine twin.

    Twins are generated once, when the subclass is defined. A name that the
    class already defines is left alone.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name in list(vars(cls)):
            if name.startswith("_"):
                continue
            attr = vars(cls)[name]
            if inspect.isfunction(attr) and not inspect.iscoroutinefunction(attr):
                async_name = f"a{name}"
                if not hasattr(cls, async_name):
                    setattr(cls, async_name, async_wrap(attr))
