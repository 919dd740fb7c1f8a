"""Token cursor shared by every parsing function of one run.

The cursor only ever moves forward. Loops go back over a token range by asking for a replay: a fresh cursor that
starts at a position the loop recorded earlier with mark(). Marks are shared between a cursor and its replays, so a
replay can itself record marks (nested loops) and be replayed.
"""

from enum import Enum

from gama.lang.error import GamaSyntaxError, GenericException
from gama.lang.lexical import TokenKind


class Mode(Enum):
    """Every statement is processed either for its effects or only to get past it."""
    EXECUTE = "execute"
    SKIP = "skip"


class Cursor:

    def __init__(self, tokens, position=0, marks=None):
        assert tokens and tokens[-1].kind is TokenKind.EOF, "token list must end with EOF"
        self.tokens = tokens
        self.position = position
        self._marks = marks if marks is not None else set()

    @property
    def current(self):
        """Token under the cursor. Past the end, this is the final EOF token."""
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def peek(self, offset=0):
        return self.tokens[min(self.position + offset, len(self.tokens) - 1)]

    def at(self, *kinds):
        return self.current.kind in kinds

    def advance(self):
        """Consumes and returns the current token."""
        token = self.current
        if self.position < len(self.tokens):
            self.position += 1
        return token

    def accept(self, *kinds):
        """Consumes the current token if it is one of kinds. Returns it, or None."""
        if self.at(*kinds):
            return self.advance()
        return None

    def expect(self, *kinds):
        """Consumes the current token, which must be one of kinds."""
        if not self.at(*kinds):
            raise GamaSyntaxError.expected(self.current, *(kind.value for kind in kinds))
        return self.advance()

    def mark(self):
        """Records and returns the current position, so that it can be replayed later."""
        self._marks.add(self.position)
        return self.position

    def replay(self, mark):
        """Returns a new cursor over the same tokens, starting at mark."""
        if mark not in self._marks:
            raise GenericException("replay of unrecorded position {}", str(mark), internal=True)
        return Cursor(self.tokens, mark, self._marks)

    def finish(self, mark):
        """Checks that a replay stopped exactly where the first pass over the same range did."""
        if self.position != mark:
            msg = "replay ended at token {} instead of {}"
            raise GenericException(msg, (str(self.position), str(mark)), internal=True)

    def __repr__(self):
        return f"Cursor(position={self.position}, current={self.current.lexeme!r})"
