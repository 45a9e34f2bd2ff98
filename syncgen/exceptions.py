"Exceptions raised when the emit/pull handoff is misused"

class ProtocolViolation(RuntimeError):
    """An emit was driven by something other than the Generator that owns it.

    `Communication.emit` fills the HandoffCell and suspends; the Generator
    driving the coroutine empties the cell before resuming it. If the emit is
    resumed while its item is still sitting in the cell, the coroutine has
    been handed to some other runner (asyncio, trio, a hand-written loop),
    and continuing would silently drop or reorder items.

    This is raised inside the coroutine, at the emit, so it unwinds the
    coroutine's own stack; from there it propagates out of `next()` like any
    other error in the computation.

    """
    pass

class AlreadyOccupied(ProtocolViolation):
    """An item was put into a HandoffCell still holding the previous one.

    The args are the pending item and the rejected item.

    """
    pass
