"""
Optline token scanner: classify raw argv tokens and own the token stream.

Classification (one token at a time, left to right)
- "--"                      → END: end of options, the rest is never reinterpreted.
- "--name" / "--name=value" → LONG: split at the first '='.
- "-abc" / "-ab=value"      → SHORT: a cluster of short aliases; the part after
                              the first '=' is the inline value of the last one.
- anything else             → FREE: a positional candidate (a lone "-" included).

The Scanner keeps the remaining tokens in a deque and a 1-based position
counter so that faults can say “at third position”.
"""
import logging
from collections import deque
from enum import StrEnum
from typing import NamedTuple

from .utils import *

logger = logging.getLogger(__name__)


class Kind(StrEnum):
    END = "end"
    LONG = "long"
    SHORT = "short"
    FREE = "free"


class Lexeme(NamedTuple):
    """
    One classified token.

    - kind: Kind of the token.
    - token: the raw token, unchanged (used in diagnostics).
    - name: LONG → the alias without dashes; SHORT → the cluster characters;
      END/FREE → the token itself.
    - value: the inline value after '=' (possibly empty) or None.
    - index: 1-based position of the token in the argument vector.
    """
    kind: Kind
    token: str
    name: str
    value: str | None
    index: int


def classify(token, /, index=0):
    """
    Classify a single raw token (see the module docstring for the rules).
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")

    if token == "--":
        return Lexeme(Kind.END, token, token, None, index)

    if token.startswith("--"):
        name, separator, value = token[2:].partition("=")
        return Lexeme(Kind.LONG, token, name, value if separator else None, index)

    if token.startswith("-") and len(token) > 1:
        name, separator, value = token[1:].partition("=")
        return Lexeme(Kind.SHORT, token, name, value if separator else None, index)

    return Lexeme(Kind.FREE, token, token, None, index)


class Scanner:
    """
    Left-to-right cursor over the argument vector.

    - next(): classify and consume the next token.
    - take(): consume the next raw token as an option value (Unset when none).
    - drain(): consume and return every remaining raw token.
    - index: position of the last consumed token (0 before the first one).
    """

    def __init__(self, tokens, /):
        self._tokens = deque(tokens)
        self._index = 0

    @property
    def index(self):
        return self._index

    def __bool__(self):
        return bool(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def next(self):
        if not self._tokens:
            raise IndexError("no tokens left to scan")
        self._index += 1
        lexeme = classify(self._tokens.popleft(), self._index)
        logger.debug("scanning %s token %r at %s position", lexeme.kind, lexeme.token, ordinal(lexeme.index))
        return lexeme

    def take(self):
        if not self._tokens:
            return Unset
        self._index += 1
        return self._tokens.popleft()

    def drain(self):
        tokens = list(self._tokens)
        self._index += len(tokens)
        self._tokens.clear()
        return tokens


__all__ = (
    "Kind",
    "Lexeme",
    "Scanner",
    "classify",
)
