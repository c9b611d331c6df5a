class Attribute:
    """One attribute of a start tag, accumulated a character at a time."""

    __slots__ = ("name", "value")

    def __init__(self, name="", value=""):
        self.name = name
        self.value = value

    @classmethod
    def new(cls):
        return cls()

    def add_char(self, c, is_name):
        if is_name:
            self.name += c
        else:
            self.value += c

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    __hash__ = None

    def __repr__(self):
        return f"Attribute({self.name!r}, {self.value!r})"
