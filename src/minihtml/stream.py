from .constants import ASCII_LOWER_TABLE, RAW_TEXT_ELEMENTS
from .tokenizer import Tokenizer, TokenizerOpts
from .tokens import StartTag


def stream(html, *, raw_text_elements=RAW_TEXT_ELEMENTS, **opts):
    """
    Yield the tokens of ``html`` one at a time.

    After a start tag named in ``raw_text_elements`` the content up to the
    matching end tag comes out as character tokens. Self-closing start tags
    have no content and do not switch.

    Keyword options are those of ``TokenizerOpts``.
    """
    raw_text = {name.translate(ASCII_LOWER_TABLE) for name in raw_text_elements}
    tokenizer = Tokenizer(html, TokenizerOpts(**opts))
    for token in tokenizer:
        yield token
        if isinstance(token, StartTag) and not token.self_closing and token.tag in raw_text:
            tokenizer.switch_to_script_data(token.tag)


def tokenize(html, **kwargs):
    """Return every token of ``html`` as a list."""
    return list(stream(html, **kwargs))
