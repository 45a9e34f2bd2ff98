from syncgen.cell import HandoffCell
from syncgen.exceptions import AlreadyOccupied, ProtocolViolation
import threading
import unittest

class TestHandoffCell(unittest.TestCase):
    def setUp(self) -> None:
        self.cell: HandoffCell[object] = HandoffCell()

    def test_empty(self) -> None:
        self.assertFalse(self.cell.occupied)
        self.assertIsNone(self.cell.take())

    def test_put_take(self) -> None:
        self.cell.put(42)
        self.assertTrue(self.cell.occupied)
        pending = self.cell.take()
        assert pending is not None
        self.assertEqual(pending.unwrap(), 42)
        self.assertFalse(self.cell.occupied)
        self.assertIsNone(self.cell.take())

    def test_none_is_an_item(self) -> None:
        self.cell.put(None)
        self.assertTrue(self.cell.occupied)
        pending = self.cell.take()
        self.assertIsNotNone(pending)
        assert pending is not None
        self.assertIsNone(pending.unwrap())

    def test_put_when_occupied(self) -> None:
        self.cell.put("first")
        with self.assertRaises(AlreadyOccupied) as cm:
            self.cell.put("second")
        self.assertIsInstance(cm.exception, ProtocolViolation)
        self.assertEqual(cm.exception.args, ("first", "second"))
        # the pending item survives the failed put
        pending = self.cell.take()
        assert pending is not None
        self.assertEqual(pending.unwrap(), "first")

    def test_reuse(self) -> None:
        for i in range(3):
            self.cell.put(i)
            pending = self.cell.take()
            assert pending is not None
            self.assertEqual(pending.unwrap(), i)

    def test_put_and_take_on_different_threads(self) -> None:
        payload = bytearray(b"hello")
        thread = threading.Thread(target=self.cell.put, args=(payload,))
        thread.start()
        thread.join()
        pending = self.cell.take()
        assert pending is not None
        self.assertIs(pending.unwrap(), payload)

    def test_repr(self) -> None:
        self.assertIn("empty", repr(self.cell))
        self.cell.put("thing")
        self.assertIn("'thing'", repr(self.cell))
