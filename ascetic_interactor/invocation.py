"""Invocation of optional, sync or async, interactor behaviors."""

import inspect
import typing
from collections.abc import Callable


__all__ = (
    'invoke',
)


async def invoke(behavior: Callable[..., typing.Any] | None, *args: typing.Any) -> typing.Any:
    """Call ``behavior`` and await its result if needed.

    A missing behavior resolves to None. Exceptions raised synchronously
    and exceptions raised by the returned awaitable propagate the same way.
    """
    if behavior is None:
        return None
    result = behavior(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
