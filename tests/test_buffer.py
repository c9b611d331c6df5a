import unittest

from minihtml import Attribute
from minihtml.buffer import ReplayBuffer
from minihtml.constants import ASCII_ALPHA, ASCII_UPPER
from minihtml.smallset import SmallCharSet


class TestReplayBuffer(unittest.TestCase):
    def test_drains_in_order(self):
        buffer = ReplayBuffer()
        buffer.push_back("</")
        buffer.push_back(["a", "b"])
        drained = []
        while not buffer.is_empty():
            drained.append(buffer.next())
        assert drained == ["<", "/", "a", "b"]
        assert buffer.next() is None

    def test_repr_shows_pending_characters(self):
        buffer = ReplayBuffer()
        buffer.push_back("ab")
        buffer.next()
        assert repr(buffer) == "ReplayBuffer('b')"

    def test_empty_chunk_is_ignored(self):
        buffer = ReplayBuffer()
        buffer.push_back("")
        assert buffer.is_empty()
        assert buffer.next() is None


class TestSmallCharSet(unittest.TestCase):
    def test_membership(self):
        assert ASCII_ALPHA.contains("a")
        assert ASCII_ALPHA.contains("Z")
        assert not ASCII_ALPHA.contains("1")
        assert not ASCII_ALPHA.contains("é")
        assert not ASCII_ALPHA.contains(None)
        assert ASCII_UPPER.contains("Q")
        assert not ASCII_UPPER.contains("q")

    def test_rejects_non_ascii(self):
        with self.assertRaises(ValueError):
            SmallCharSet("é")


class TestAttribute(unittest.TestCase):
    def test_new_is_empty(self):
        attr = Attribute.new()
        assert attr.name == ""
        assert attr.value == ""

    def test_add_char_routes_to_name_or_value(self):
        attr = Attribute.new()
        attr.add_char("i", True)
        attr.add_char("d", True)
        attr.add_char("X", False)
        assert attr == Attribute("id", "X")
        assert repr(attr) == "Attribute('id', 'X')"


if __name__ == "__main__":
    unittest.main()
