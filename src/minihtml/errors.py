class TokenizerError(Exception):
    """Base class for failures that stop tokenization."""


class TokenizerContractError(TokenizerError):
    """A tag or attribute helper was used outside the state it belongs to.

    This means the state machine itself is broken, not the markup. The
    tokenizer that raised it is halted.
    """


class StrictModeError(SyntaxError):
    """Raised in strict mode at the first parse error."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
