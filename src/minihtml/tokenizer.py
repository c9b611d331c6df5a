import enum

from .attribute import Attribute
from .buffer import ReplayBuffer
from .constants import ASCII_ALPHA, ASCII_LOWER_TABLE, ASCII_UPPER, PARSE_ERRORS
from .errors import StrictModeError, TokenizerContractError
from .tokens import Char, EndTag, Eof, ParseError, StartTag, TokenSinkResult


class LexerState(enum.IntEnum):
    DATA = 0
    TAG_OPEN = 1
    END_TAG_OPEN = 2
    TAG_NAME = 3
    BEFORE_ATTRIBUTE_NAME = 4
    ATTRIBUTE_NAME = 5
    AFTER_ATTRIBUTE_NAME = 6
    BEFORE_ATTRIBUTE_VALUE = 7
    ATTRIBUTE_VALUE_DOUBLE_QUOTED = 8
    ATTRIBUTE_VALUE_SINGLE_QUOTED = 9
    ATTRIBUTE_VALUE_UNQUOTED = 10
    AFTER_ATTRIBUTE_VALUE_QUOTED = 11
    SELF_CLOSING_START_TAG = 12
    SCRIPT_DATA = 13
    SCRIPT_DATA_LESS_THAN_SIGN = 14
    SCRIPT_DATA_END_TAG_OPEN = 15
    SCRIPT_DATA_END_TAG_NAME = 16
    TEMPORARY_BUFFER = 17


# States a tokenizer may start in or be switched to between tokens.
_RESTING_STATES = (LexerState.DATA, LexerState.SCRIPT_DATA)


class TokenizerOpts:
    __slots__ = ("collect_errors", "debug", "initial_rawtext_tag", "initial_state", "strict")

    def __init__(
        self,
        collect_errors=False,
        strict=False,
        initial_state=None,
        initial_rawtext_tag=None,
        debug=False,
    ):
        self.strict = bool(strict)
        # Strict mode needs the errors to raise them.
        self.collect_errors = bool(collect_errors) or self.strict
        self.initial_state = initial_state
        self.initial_rawtext_tag = initial_rawtext_tag
        self.debug = bool(debug)


class Tokenizer:
    """Pull tokenizer: each ``next_token()`` call resumes the state machine.

    The input is held whole. ``pos`` only moves forward; ``reconsume`` makes
    the next read return the previous character again. A start or end tag
    under construction lives in ``current_token`` until it is finished and
    handed out, and is dropped if the input ends first.
    """

    __slots__ = (
        "current_char",
        "current_token",
        "done",
        "errors",
        "failure",
        "input",
        "length",
        "line",
        "line_scan",
        "line_start",
        "opts",
        "pos",
        "rawtext_tag_name",
        "reconsume",
        "replay",
        "state",
        "temp_buffer",
    )

    def __init__(self, html, opts=None):
        self.opts = opts or TokenizerOpts()

        self.input = html or ""
        self.length = len(self.input)
        self.pos = 0
        self.reconsume = False
        self.current_char = None
        self.current_token = None
        self.temp_buffer = []
        self.replay = ReplayBuffer()
        self.errors = []
        self.line = 1
        self.line_start = 0
        self.line_scan = 0
        self.done = False
        self.failure = None

        initial_state = self.opts.initial_state
        if initial_state is None:
            self.state = LexerState.DATA
        else:
            self.state = LexerState(initial_state)
            if self.state not in _RESTING_STATES:
                raise ValueError(f"Tokenizer cannot start in {self.state.name}")
        rawtext_tag = self.opts.initial_rawtext_tag
        self.rawtext_tag_name = rawtext_tag.translate(ASCII_LOWER_TABLE) if rawtext_tag else None

    def __iter__(self):
        return self

    def __next__(self):
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self):
        """Return the next token, or None once the input is exhausted."""
        if self.failure is not None:
            raise self.failure
        if self.done:
            return None
        try:
            token = self._step()
        except (TokenizerContractError, StrictModeError) as exc:
            self.failure = exc
            self.current_token = None
            self.done = True
            raise
        if self.opts.debug:
            if token is None:
                self.debug("end of input")
            else:
                self.debug(f"emit {token!r} (state {self.state.name}, pos {self.pos})")
        return token

    def run(self, sink):
        """Feed every token to ``sink.process_token``.

        A sink answering ``TokenSinkResult.Script`` to a start tag puts the
        tokenizer in raw text until the matching end tag.
        """
        for token in self:
            result = sink.process_token(token)
            if result == TokenSinkResult.Script and isinstance(token, StartTag):
                self.switch_to_script_data(token.tag)

    def switch_to_script_data(self, end_tag_name=None):
        """Scan what follows as raw text.

        Only valid between tokens. With ``end_tag_name`` only ``</name>``
        leaves raw text; without it any complete end tag does.
        """
        if self.current_token is not None or self.state not in _RESTING_STATES:
            raise TokenizerContractError(f"Cannot enter raw text from {self.state.name}")
        self.state = LexerState.SCRIPT_DATA
        self.rawtext_tag_name = end_tag_name.translate(ASCII_LOWER_TABLE) if end_tag_name else None
        self.temp_buffer.clear()
        if self.opts.debug:
            self.debug(f"raw text until </{self.rawtext_tag_name or '*'}>")

    def debug(self, message, indent=4):
        # Callers check opts.debug first to skip the formatting
        if self.opts.debug:
            print(f"{' ' * indent}{message}")

    def _step(self):
        while True:
            state = self.state
            if state == LexerState.DATA:
                token = self._state_data()
            elif state == LexerState.TAG_OPEN:
                token = self._state_tag_open()
            elif state == LexerState.END_TAG_OPEN:
                token = self._state_end_tag_open()
            elif state == LexerState.TAG_NAME:
                token = self._state_tag_name()
            elif state == LexerState.BEFORE_ATTRIBUTE_NAME:
                token = self._state_before_attribute_name()
            elif state == LexerState.ATTRIBUTE_NAME:
                token = self._state_attribute_name()
            elif state == LexerState.AFTER_ATTRIBUTE_NAME:
                token = self._state_after_attribute_name()
            elif state == LexerState.BEFORE_ATTRIBUTE_VALUE:
                token = self._state_before_attribute_value()
            elif state == LexerState.ATTRIBUTE_VALUE_DOUBLE_QUOTED:
                token = self._state_attribute_value_quoted('"')
            elif state == LexerState.ATTRIBUTE_VALUE_SINGLE_QUOTED:
                token = self._state_attribute_value_quoted("'")
            elif state == LexerState.ATTRIBUTE_VALUE_UNQUOTED:
                token = self._state_attribute_value_unquoted()
            elif state == LexerState.AFTER_ATTRIBUTE_VALUE_QUOTED:
                token = self._state_after_attribute_value_quoted()
            elif state == LexerState.SELF_CLOSING_START_TAG:
                token = self._state_self_closing_start_tag()
            elif state == LexerState.SCRIPT_DATA:
                token = self._state_script_data()
            elif state == LexerState.SCRIPT_DATA_LESS_THAN_SIGN:
                token = self._state_script_data_less_than_sign()
            elif state == LexerState.SCRIPT_DATA_END_TAG_OPEN:
                token = self._state_script_data_end_tag_open()
            elif state == LexerState.SCRIPT_DATA_END_TAG_NAME:
                token = self._state_script_data_end_tag_name()
            elif state == LexerState.TEMPORARY_BUFFER:
                token = self._state_temporary_buffer()
            else:
                raise TokenizerContractError(f"Unknown tokenizer state {state!r}")
            if token is not None or self.done:
                return token

    # ---------------------
    # State handlers
    # ---------------------
    # Each handler returns a token to hand out, or None to keep going.

    def _state_data(self):
        c = self._get_char()
        if c is None:
            self.done = True
            return None
        if c == "<":
            self.state = LexerState.TAG_OPEN
            return None
        return Char(c)

    def _state_tag_open(self):
        c = self._get_char()
        if c == "/":
            self.state = LexerState.END_TAG_OPEN
            return None
        if ASCII_ALPHA.contains(c):
            self._create_tag(start=True)
            self._reconsume_current()
            self.state = LexerState.TAG_NAME
            return None
        if c is None:
            return self._emit_eof("eof-before-tag-name")
        # Not a tag after all: the '<' is text, the character goes back to data
        self._emit_error("invalid-first-character-of-tag-name")
        self._reconsume_current()
        self.state = LexerState.DATA
        return Char("<")

    def _state_end_tag_open(self):
        c = self._get_char()
        if c is None:
            return self._emit_eof("eof-before-tag-name")
        if ASCII_ALPHA.contains(c):
            self._create_tag(start=False)
            self._reconsume_current()
            self.state = LexerState.TAG_NAME
            return None
        self._emit_error("unexpected-character-after-end-tag-open")
        return None

    def _state_tag_name(self):
        c = self._get_char()
        if c == " ":
            self.state = LexerState.BEFORE_ATTRIBUTE_NAME
        elif c == "/":
            self.state = LexerState.SELF_CLOSING_START_TAG
        elif c == ">":
            return self._emit_current_tag()
        elif c is None:
            return self._emit_eof("eof-in-tag")
        else:
            self._append_tag_name(c)
        return None

    def _state_before_attribute_name(self):
        c = self._get_char()
        self._reconsume_current()
        if c == "/" or c == ">" or c is None:
            self.state = LexerState.AFTER_ATTRIBUTE_NAME
        else:
            # A further space opens an attribute with an empty name
            self._start_new_attribute()
            self.state = LexerState.ATTRIBUTE_NAME
        return None

    def _state_attribute_name(self):
        c = self._get_char()
        if c == " " or c == "/" or c == ">" or c is None:
            self._reconsume_current()
            self.state = LexerState.AFTER_ATTRIBUTE_NAME
        elif c == "=":
            self.state = LexerState.BEFORE_ATTRIBUTE_VALUE
        else:
            self._append_attribute(c, is_name=True)
        return None

    def _state_after_attribute_name(self):
        c = self._get_char()
        if c == " ":
            return None
        if c == "/":
            self.state = LexerState.SELF_CLOSING_START_TAG
        elif c == "=":
            self.state = LexerState.BEFORE_ATTRIBUTE_VALUE
        elif c == ">":
            return self._emit_current_tag()
        elif c is None:
            return self._emit_eof("eof-in-tag")
        else:
            self._start_new_attribute()
            self._reconsume_current()
            self.state = LexerState.ATTRIBUTE_NAME
        return None

    def _state_before_attribute_value(self):
        c = self._get_char()
        if c == " ":
            return None
        if c == '"':
            self.state = LexerState.ATTRIBUTE_VALUE_DOUBLE_QUOTED
        elif c == "'":
            self.state = LexerState.ATTRIBUTE_VALUE_SINGLE_QUOTED
        else:
            self._reconsume_current()
            self.state = LexerState.ATTRIBUTE_VALUE_UNQUOTED
        return None

    def _state_attribute_value_quoted(self, quote):
        c = self._get_char()
        if c == quote:
            self.state = LexerState.AFTER_ATTRIBUTE_VALUE_QUOTED
        elif c is None:
            return self._emit_eof("eof-in-tag")
        else:
            self._append_attribute(c, is_name=False)
        return None

    def _state_attribute_value_unquoted(self):
        c = self._get_char()
        if c == " ":
            self.state = LexerState.BEFORE_ATTRIBUTE_NAME
        elif c == ">":
            return self._emit_current_tag()
        elif c is None:
            return self._emit_eof("eof-in-tag")
        else:
            self._append_attribute(c, is_name=False)
        return None

    def _state_after_attribute_value_quoted(self):
        c = self._get_char()
        if c == " ":
            self.state = LexerState.BEFORE_ATTRIBUTE_NAME
        elif c == "/":
            self.state = LexerState.SELF_CLOSING_START_TAG
        elif c == ">":
            return self._emit_current_tag()
        elif c is None:
            return self._emit_eof("eof-in-tag")
        else:
            self._emit_error("missing-whitespace-between-attributes")
            self._reconsume_current()
            self.state = LexerState.BEFORE_ATTRIBUTE_NAME
        return None

    def _state_self_closing_start_tag(self):
        c = self._get_char()
        if c == ">":
            if isinstance(self.current_token, EndTag):
                self._emit_error("end-tag-with-trailing-solidus")
            else:
                self._set_self_closing_flag()
            return self._emit_current_tag()
        if c is None:
            return self._emit_eof("eof-in-tag")
        # Anything between '/' and '>' is dropped
        self._emit_error("unexpected-solidus-in-tag")
        return None

    def _state_script_data(self):
        c = self._get_char()
        if c is None:
            self.done = True
            return None
        if c == "<":
            self.state = LexerState.SCRIPT_DATA_LESS_THAN_SIGN
            return None
        return Char(c)

    def _state_script_data_less_than_sign(self):
        c = self._get_char()
        if c == "/":
            self.temp_buffer.clear()
            self.state = LexerState.SCRIPT_DATA_END_TAG_OPEN
            return None
        self._reconsume_current()
        self.state = LexerState.SCRIPT_DATA
        return Char("<")

    def _state_script_data_end_tag_open(self):
        c = self._get_char()
        if ASCII_ALPHA.contains(c):
            self._create_tag(start=False)
            self._reconsume_current()
            self.state = LexerState.SCRIPT_DATA_END_TAG_NAME
            return None
        self._reconsume_current()
        self._roll_back_end_tag()
        return None

    def _state_script_data_end_tag_name(self):
        c = self._get_char()
        if c == ">":
            tag = self._require_tag().tag
            if self.rawtext_tag_name is None or tag == self.rawtext_tag_name:
                self.temp_buffer.clear()
                self.rawtext_tag_name = None
                return self._emit_current_tag()
        elif ASCII_ALPHA.contains(c):
            self.temp_buffer.append(c)
            self._append_tag_name(c)
            return None
        self._roll_back_end_tag(c)
        return None

    def _state_temporary_buffer(self):
        if self.replay.is_empty():
            self.state = LexerState.SCRIPT_DATA
            return None
        return Char(self.replay.next())

    # ---------------------
    # Raw text rollback
    # ---------------------

    def _roll_back_end_tag(self, c=None):
        # The candidate end tag did not materialize: hand back "</", the
        # letters seen so far and the character that broke the match.
        self.current_token = None
        self.replay.push_back("</")
        self.replay.push_back(self.temp_buffer)
        if c is not None:
            self.replay.push_back(c)
        self.temp_buffer.clear()
        self.state = LexerState.TEMPORARY_BUFFER
        if self.opts.debug:
            self.debug(f"roll back {self.replay!r}")

    # ---------------------
    # Tag construction helpers
    # ---------------------

    def _create_tag(self, start):
        if self.current_token is not None:
            raise TokenizerContractError("A tag is already under construction")
        self.current_token = StartTag() if start else EndTag()

    def _require_tag(self):
        token = self.current_token
        if token is None:
            raise TokenizerContractError("No tag is under construction")
        return token

    def _append_tag_name(self, c):
        token = self._require_tag()
        if ASCII_UPPER.contains(c):
            c = chr(ord(c) + 32)
        token.tag += c

    def _set_self_closing_flag(self):
        token = self._require_tag()
        if not isinstance(token, StartTag):
            raise TokenizerContractError("Only a start tag can be self-closing")
        token.self_closing = True

    def _start_new_attribute(self):
        token = self._require_tag()
        if isinstance(token, EndTag):
            # Attribute text on an end tag is read and thrown away
            self._emit_error("end-tag-with-attributes")
            return
        token.attributes.append(Attribute.new())

    def _append_attribute(self, c, is_name):
        token = self._require_tag()
        if isinstance(token, EndTag):
            return
        if not token.attributes:
            raise TokenizerContractError("No attribute has been started")
        if is_name and ASCII_UPPER.contains(c):
            c = chr(ord(c) + 32)
        token.attributes[-1].add_char(c, is_name)

    def _take_token(self):
        token = self._require_tag()
        self.current_token = None
        return token

    def _emit_current_tag(self):
        token = self._take_token()
        if self.opts.collect_errors and isinstance(token, StartTag) and len(token.attributes) > 1:
            seen = set()
            for attr in token.attributes:
                if attr.name in seen:
                    self._emit_error("duplicate-attribute")
                seen.add(attr.name)
        self.state = LexerState.DATA
        return token

    def _emit_eof(self, code):
        self._emit_error(code)
        # An unfinished tag is discarded, never handed out
        self.current_token = None
        self.done = True
        return Eof()

    # ---------------------
    # Low-level helpers
    # ---------------------

    def _get_char(self):
        if self.reconsume:
            self.reconsume = False
            return self.current_char
        if self.pos >= self.length:
            self.current_char = None
            return None
        c = self.input[self.pos]
        self.pos += 1
        self.current_char = c
        return c

    def _reconsume_current(self):
        self.reconsume = True

    def _emit_error(self, code):
        if not self.opts.collect_errors:
            return
        line, column = self._location()
        error = ParseError(code, line=line, column=column, message=PARSE_ERRORS.get(code))
        self.errors.append(error)
        if self.opts.strict:
            raise StrictModeError(error)

    def _location(self):
        # 1-based position of the character read last. The cursor never moves
        # back, so only the text since the previous call is scanned.
        index = max(self.pos - 1, 0)
        newlines = self.input.count("\n", self.line_scan, index)
        if newlines:
            self.line += newlines
            self.line_start = self.input.rfind("\n", self.line_scan, index) + 1
        self.line_scan = index
        return self.line, index - self.line_start + 1
