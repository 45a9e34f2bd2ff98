"""Turn an async function into a fully-synchronous iterator

We use Python's native coroutines as a way to write generators in direct
style, with the ability to emit items from arbitrarily deep inside other
coroutines:

```
from syncgen import generate

async def walk(co, tree):
    if tree is None:
        return
    left, value, right = tree
    await walk(co, left)
    await co.emit(value)
    await walk(co, right)

for value in generate(walk, ((None, 1, None), 2, (None, 3, None))):
    print(value)
```

`generate` calls the function immediately, passing it a `Communication`
(here `co`) which the coroutine uses to send items to the iterator. The
coroutine doesn't start running until the first `next`. Each `next` then
runs the coroutine until it awaits `co.emit`, and returns the item emitted.
The code using the iterator and the coroutine take turns: only one of them
is ever running. When the coroutine returns, the iterator is exhausted.

There's no event loop. The iterator steps the coroutine itself, and since
nothing it awaits ever waits on a real event, nothing needs to wake it up.
Items are passed through a single-slot `HandoffCell`; there's never more
than one item in flight.

A Generator may be created on one thread and pulled from on others, as long
as two threads never pull from it at once. `syncgen.threads` uses that to let
trio code consume a Generator without blocking the run loop.

"""
from syncgen.core import generate, generator, Generator, Communication, checkpoint
from syncgen.cell import HandoffCell
from syncgen.exceptions import ProtocolViolation, AlreadyOccupied
