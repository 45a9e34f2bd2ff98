"A trio-enabled variant of unittest.TestCase"
import functools
import inspect
import trio
import typing as t
import unittest

class TrioTestCase(unittest.TestCase):
    """A unittest.TestCase whose `async def test_*` methods each run under their own `trio.run`

    Plain `def test_*` methods are left alone, so a case can mix the two.

    """
    async def asyncSetUp(self) -> None:
        pass

    async def asyncTearDown(self) -> None:
        pass

    async def _run_async(self, test: t.Callable[[t.Any], t.Awaitable[None]]) -> None:
        await self.asyncSetUp()
        try:
            await test(self)
        finally:
            await self.asyncTearDown()

    def __init__(self, methodName='runTest') -> None:
        # unittest and pytest build cases for a default "runTest" that may not exist
        test = getattr(type(self), methodName, None)
        if inspect.iscoroutinefunction(test):
            @functools.wraps(test)
            def sync_test() -> None:
                trio.run(self._run_async, test)
            setattr(self, methodName, sync_test)
        super().__init__(methodName)
