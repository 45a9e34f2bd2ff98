"""Consuming a Generator from trio

A Generator runs its coroutine synchronously, on whichever thread calls
`next`. If the coroutine does blocking work between emits, pulling from it
directly inside a trio task would block the whole run loop; instead we pull
each item on a trio worker thread.

"""
from __future__ import annotations
import logging
import trio
import typing as t

__all__ = [
    'aiter_in_threads',
]

logger = logging.getLogger(__name__)

Item = t.TypeVar('Item')

_END = object()

async def aiter_in_threads(
        gen: t.Iterator[Item],
        limiter: t.Optional[trio.CapacityLimiter]=None,
) -> t.AsyncGenerator[Item, None]:
    """Iterate over `gen` asynchronously, pulling each item on a worker thread.

    Pulls happen one after another, never overlapping, though successive
    pulls may well land on different threads. `limiter` is passed through to
    `trio.to_thread.run_sync`.

    If we're cancelled while a pull is running, we wait for the pull to
    finish rather than abandoning it; otherwise a later pull could start
    while the abandoned one was still running. The item that pull produced
    is still yielded, and the cancellation lands before the next pull starts.

    """
    while True:
        logger.debug("aiter_in_threads(%s): pulling", gen)
        item: t.Any = await trio.to_thread.run_sync(next, gen, _END, limiter=limiter)
        if item is _END:
            logger.debug("aiter_in_threads(%s): exhausted", gen)
            return
        yield item
