from collections import deque


class ReplayBuffer:
    """Characters waiting to be handed back as character tokens.

    Filled when a speculative end-tag scan in raw text fails, drained one
    character per token request.
    """

    __slots__ = ("_chars",)

    def __init__(self):
        self._chars = deque()

    def is_empty(self):
        return not self._chars

    def push_back(self, chunk):
        if chunk:
            self._chars.extend(chunk)

    def next(self):
        if not self._chars:
            return None
        return self._chars.popleft()

    def __repr__(self):
        return f"ReplayBuffer({''.join(self._chars)!r})"
