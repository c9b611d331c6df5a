from .attribute import Attribute
from .errors import StrictModeError, TokenizerContractError, TokenizerError
from .stream import stream, tokenize
from .tokenizer import LexerState, Tokenizer, TokenizerOpts
from .tokens import Char, EndTag, Eof, ParseError, StartTag, Token, TokenSinkResult

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "Char",
    "EndTag",
    "Eof",
    "LexerState",
    "ParseError",
    "StartTag",
    "StrictModeError",
    "Token",
    "TokenSinkResult",
    "Tokenizer",
    "TokenizerContractError",
    "TokenizerError",
    "TokenizerOpts",
    "stream",
    "tokenize",
]
