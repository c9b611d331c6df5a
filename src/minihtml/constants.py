"""Tokenizer Constants

Character classes and parse error codes shared by the tokenizer states.

Only U+0020 SPACE counts as whitespace, and only ASCII letters start a tag
name. Everything else is ordinary content for whichever buffer is active.
"""

from .smallset import SmallCharSet

ASCII_UPPER = SmallCharSet("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
ASCII_LOWER = SmallCharSet("abcdefghijklmnopqrstuvwxyz")
ASCII_ALPHA = ASCII_UPPER | ASCII_LOWER

ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})

# Start tags whose content is scanned as raw text by stream()
RAW_TEXT_ELEMENTS = ("script",)

# Parse error codes with human readable descriptions
PARSE_ERRORS = {
    "eof-before-tag-name": "Input ended right after '<' or '</'",
    "eof-in-tag": "Input ended inside a tag; the tag is discarded",
    "invalid-first-character-of-tag-name": "'<' not followed by a tag name; emitted as text",
    "unexpected-character-after-end-tag-open": "Character after '</' is not a letter; ignored",
    "missing-whitespace-between-attributes": "No space between a quoted value and the next attribute",
    "unexpected-solidus-in-tag": "'/' inside a tag not followed by '>'; character ignored",
    "end-tag-with-attributes": "Attributes on an end tag are ignored",
    "end-tag-with-trailing-solidus": "Self-closing flag on an end tag is ignored",
    "duplicate-attribute": "Attribute name repeated on the same start tag",
}
