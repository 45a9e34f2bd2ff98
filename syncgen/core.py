"""Driving a coroutine as a synchronous iterator

`generate` calls an async function with a `Communication`, and wraps the
resulting coroutine in a `Generator`. Each call to `next` on the Generator
steps the coroutine with `send(None)` until it either emits an item or
returns. There's no event loop involved: nothing we drive ever waits on a
real event, so there's nothing to wake us up and we just step the coroutine
again straight away.

Any thread may create a Generator, and any thread may pull from it, as long
as only one thread is pulling at a time.

"""
from __future__ import annotations
from syncgen.cell import HandoffCell
from syncgen.exceptions import ProtocolViolation
import functools
import inspect
import logging
import outcome
import threading
import types
import typing as t

__all__ = [
    'generate',
    'generator',
    'Generator',
    'Communication',
    'checkpoint',
]

logger = logging.getLogger(__name__)

Item = t.TypeVar('Item')

class Emitted:
    "What `Communication.emit` yields up to the Generator, once the item is in the cell"
    __slots__ = ()

    def __repr__(self) -> str:
        return "Emitted()"

_EMITTED = Emitted()

@types.coroutine
def checkpoint() -> t.Generator[None, None, None]:
    """Suspend to the Generator without emitting anything

    The Generator steps straight back in; no item is produced.

    """
    yield None

class Communication(t.Generic[Item]):
    """Communicate with a Generator

    The function passed to `generate` receives this as its first argument, and
    uses it to pass items to the Generator. It's the only way to do so.

    """
    def __init__(self, cell: HandoffCell[Item]) -> None:
        self._cell = cell

    @types.coroutine
    def emit(self, item: Item) -> t.Generator[Emitted, None, None]:
        """Pass a single item to the Generator, and suspend until it's been taken.

        This is a coroutine function, just implemented synchronously because
        this is the only place items are yielded from.

        """
        self._cell.put(item)
        yield _EMITTED
        if self._cell.occupied:
            raise ProtocolViolation(
                "emit was resumed before its item was taken; "
                "it's being driven by something other than a syncgen.Generator",
                self._cell)

    async def emit_all(self, items: t.Iterable[Item]) -> None:
        "Emit each of `items`, in order, one at a time"
        for item in items:
            await self.emit(item)

    def __repr__(self) -> str:
        return f"Communication({self._cell!r})"

class Generator(t.Generic[Item]):
    """An iterator which synchronously produces the items emitted by a coroutine

    `generate` returns this. The coroutine doesn't start running until the
    first call to `next`. Once the coroutine returns, or raises, the Generator
    is exhausted, and every later `next` raises StopIteration without touching
    the coroutine again.

    If the coroutine raises, that exception is raised out of the `next` call
    which was running it, once; after that the Generator is exhausted.

    Only one `next` may run at a time. A pull which overlaps another, from a
    second thread or from inside the coroutine itself, raises ValueError and
    leaves the Generator as it was.

    Dropping a Generator before it's exhausted abandons the coroutine. It is
    closed like any other coroutine being torn down, so its `finally` blocks
    run, but it's not told anything else.

    """
    def __init__(self, cell: HandoffCell[Item], coro: t.Generator[t.Any, None, t.Any]) -> None:
        self._cell = cell
        self._coro = coro
        self._done = False
        self._pulling = threading.Lock()

    def __iter__(self) -> Generator[Item]:
        return self

    def __next__(self) -> Item:
        if self._done:
            raise StopIteration
        if not self._pulling.acquire(blocking=False):
            # leave _done alone; the pull already running still owns the coroutine
            raise ValueError(f"{self!r} is already being pulled; pulls must not overlap")
        try:
            return self._step()
        finally:
            self._pulling.release()

    def _step(self) -> Item:
        "Run the coroutine until it emits an item or finishes"
        while True:
            result = outcome.capture(self._coro.send, None)
            if isinstance(result, outcome.Value):
                pending = self._cell.take()
                if pending is not None:
                    item: Item = pending.unwrap()
                    logger.debug("%s: produced %r", self, item)
                    return item
                # some other suspension point, like checkpoint; keep going
                logger.debug("%s: stepping past %r", self, result.value)
                continue
            self._done = True
            if isinstance(result.error, StopIteration):
                logger.debug("%s: coroutine returned", self)
                raise StopIteration
            logger.debug("%s: coroutine raised %r", self, result.error)
            result.unwrap()

    @property
    def done(self) -> bool:
        "Whether this Generator is exhausted"
        return self._done

    def close(self) -> None:
        """Abandon the coroutine, if it hasn't already finished.

        This is what happens anyway when a Generator is garbage collected;
        it's here for when you want it to happen at a particular time.

        """
        if not self._done:
            logger.debug("%s: abandoning coroutine", self)
            self._done = True
        self._coro.close()

    def __del__(self) -> None:
        # a coroutine collected before it ever ran warns that it was never awaited
        self._done = True
        self._coro.close()

    def __repr__(self) -> str:
        name = getattr(self._coro, '__qualname__', type(self._coro).__name__)
        return f"Generator({name}, done={self._done})"

async def _await(awaitable: t.Awaitable[t.Any]) -> t.Any:
    return await awaitable

def _steps(awaitable: t.Any) -> t.Generator[t.Any, None, t.Any]:
    "Get something we can `send` into to run `awaitable` one step at a time"
    if not inspect.isawaitable(awaitable):
        raise TypeError("generate: function returned something that isn't awaitable", awaitable)
    if isinstance(awaitable, (types.CoroutineType, types.GeneratorType)):
        return awaitable
    # __await__ need only return an iterator, which has no send or close
    return _await(awaitable)

def generate(func: t.Callable[..., t.Awaitable[t.Any]], *args: t.Any) -> Generator[t.Any]:
    """Turn an async function into a fully-synchronous iterator.

    `func` is called immediately, as `func(co, *args)`, where `co` is a
    `Communication`. Whatever `func` returns must be awaitable; normally
    `func` is an `async def` function, so that's a coroutine which hasn't
    started running yet. The first call to `next` on the returned Generator
    starts running it.

    ```
    async def count(co: Communication[int], n: int) -> None:
        for i in range(n):
            await co.emit(i)

    for i in generate(count, 4):
        print(i)
    ```

    The coroutine must only await `co.emit`, `checkpoint`, and other
    coroutines built from those; awaiting something that expects to be run by
    an event loop, like `trio.sleep`, doesn't work.

    """
    cell: HandoffCell[t.Any] = HandoffCell()
    return Generator(cell, _steps(func(Communication(cell), *args)))

def generator(func: t.Callable[..., t.Awaitable[t.Any]]) -> t.Callable[..., Generator[t.Any]]:
    "Decorate `async def func(co, ...)`, so that calling `func(...)` returns a Generator"
    @functools.wraps(func)
    def wrapper(*args: t.Any, **kwargs: t.Any) -> Generator[t.Any]:
        return generate(lambda co: func(co, *args, **kwargs))
    return wrapper
