"""
Scrivener tokenizer.

Command lines are whitespace-insensitive: any run of whitespace collapses to a
single space and the ends are trimmed. Tokens are the space-separated words of
the normalized line, numbered from one (so they can be named "first",
"second", ... in fault messages) and tagged with their character offset in the
normalized line.

    >>> normalize("  send   alpha\\tbeta ")
    'send alpha beta'
    >>> [word.value for word in tokenize("  a   b ")]
    ['a', 'b']
"""
import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class IndexedWord:
    """
    one whitespace-delimited token of a command line.

    fields
    - value: the token text, never empty.
    - position: 1-based ordinal of the token in its line.
    - offset: character offset of the token in the normalized line.
    """
    value: str
    position: int
    offset: int

    def __str__(self):
        return self.value


def normalize(line, /):
    """
    collapse whitespace runs to single spaces and trim both ends (idempotent).
    """
    if not isinstance(line, str):
        raise TypeError("normalize() argument must be a string")
    return _WHITESPACE.sub(" ", line).strip()


def tokenize(line, /):
    """
    split a command line into an ordered tuple of IndexedWord.

    the line is normalized first; empty tokens never appear in the result, so
    the empty (or blank) line yields an empty tuple.
    """
    words = []
    offset = 0
    for value in normalize(line).split(" "):
        if value:
            words.append(IndexedWord(value, len(words) + 1, offset))
        offset += len(value) + 1
    return tuple(words)


__all__ = (
    "IndexedWord",
    "normalize",
    "tokenize",
)
