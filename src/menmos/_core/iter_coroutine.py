"""Drive non-suspending coroutines to completion from synchronous code."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run a coroutine that never suspends and return its result.

    The blocking client reuses the async business logic of the async client;
    over a BlockingTransport none of the awaited calls yield to an event loop,
    so a single send() finishes the coroutine.

    Raises:
        RuntimeError: If the coroutine suspends instead of returning.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} did not stop after one iteration!")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
