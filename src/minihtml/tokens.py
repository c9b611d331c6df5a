class Token:
    __slots__ = ()


class StartTag(Token):
    __slots__ = ("attributes", "self_closing", "tag")

    def __init__(self, tag="", self_closing=False, attributes=None):
        self.tag = tag
        self.self_closing = bool(self_closing)
        self.attributes = attributes if attributes is not None else []

    def __eq__(self, other):
        if not isinstance(other, StartTag):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.self_closing == other.self_closing
            and self.attributes == other.attributes
        )

    __hash__ = None

    def __repr__(self):
        if self.attributes:
            attrs = " " + " ".join(f"{attr.name}={attr.value!r}" for attr in self.attributes)
        else:
            attrs = ""
        closing = " /" if self.self_closing else ""
        return f"<start:{self.tag}{attrs}{closing}>"


class EndTag(Token):
    __slots__ = ("tag",)

    def __init__(self, tag=""):
        self.tag = tag

    def __eq__(self, other):
        if not isinstance(other, EndTag):
            return NotImplemented
        return self.tag == other.tag

    __hash__ = None

    def __repr__(self):
        return f"<end:{self.tag}>"


class Char(Token):
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __eq__(self, other):
        if not isinstance(other, Char):
            return NotImplemented
        return self.data == other.data

    def __hash__(self):
        return hash((Char, self.data))

    def __repr__(self):
        return f"Char({self.data!r})"


class Eof(Token):
    __slots__ = ()

    def __eq__(self, other):
        if not isinstance(other, Eof):
            return NotImplemented
        return True

    def __hash__(self):
        return hash(Eof)

    def __repr__(self):
        return "Eof()"


class TokenSinkResult:
    __slots__ = ()

    Continue = 0
    Script = 1


class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__
