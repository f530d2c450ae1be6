"""
Scrivener command layer: typed command values and the grammar matcher.

What this module provides
- Command values, one frozen dataclass per grammar:
  • InputCommand(name, data)              data is None when it must be prompted for.
  • FormatCommand(name, separators)       separators is None when not given.
  • CursorCommand(name, target, origin, ahead, destination)
  • SendCommand(source, target)
  • PrintCommand(name)                    name is None for "print everything".
  • EndCommand()                          the session terminator.
- CursorDestination: a cursor endpoint, either a position (digits) or a word.
- match(line, lookup=None): Matched(command) on the first grammar that matches the
  whole normalized line, in registry order; Unmatched(line) otherwise.
- is_end(line): whether the line is the session terminator.

Core ideas
- No partial results: a command value only exists for a full-line match.
- Matching is case-insensitive; captured values keep the user's casing.
- Diagnosing an Unmatched line is the job of scrivener.diagnosis.
"""
import logging
import re
from dataclasses import dataclass

from .grammars import *
from .tokens import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CursorDestination:
    """
    one end of a cursor range: a numeric position or a word, never both.
    """
    position: int | None = None
    word: str | None = None

    @classmethod
    def classify(cls, token, /):
        """
        build a destination from a captured token.

        digits-only tokens become a position; any other non-empty token a word;
        an empty (or missing) token populates neither field.
        """
        if not token:
            return cls()
        if re.fullmatch(r"\d+", token):
            return cls(position=int(token))
        return cls(word=token)


@dataclass(frozen=True, slots=True)
class InputCommand:
    name: str
    data: str | None = None


@dataclass(frozen=True, slots=True)
class FormatCommand:
    name: str
    separators: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class CursorCommand:
    name: str
    target: object
    origin: CursorDestination
    ahead: bool
    destination: CursorDestination


@dataclass(frozen=True, slots=True)
class SendCommand:
    source: str
    target: str


@dataclass(frozen=True, slots=True)
class PrintCommand:
    name: str | None = None


@dataclass(frozen=True, slots=True)
class EndCommand:
    pass


@dataclass(frozen=True, slots=True)
class Matched:
    command: InputCommand | FormatCommand | CursorCommand | SendCommand | PrintCommand | EndCommand


@dataclass(frozen=True, slots=True)
class Unmatched:
    line: str


def _input(groups, lookup):
    name, data = groups
    return InputCommand(name, data)


def _format(groups, lookup):
    name, separators = groups
    if separators is not None:
        separators = tuple(separator for separator in separators if separator)
    return FormatCommand(name, separators)


def _cursor(groups, lookup):
    name, reference, origin, direction, destination = groups
    if lookup is None:
        target = reference
    else:
        target = next(iter(lookup(reference)), None)
    return CursorCommand(
        name,
        target,
        CursorDestination.classify(origin),
        direction == AHEAD,
        CursorDestination.classify(destination),
    )


def _send(groups, lookup):
    source, target = groups
    return SendCommand(source, target)


def _print(groups, lookup):
    name, = groups
    return PrintCommand(name or None)


def _end(groups, lookup):
    return EndCommand()


# builders share the registry keys and, through it, the priority order
_builders = {
    INPUT.name: _input,
    FORMAT.name: _format,
    CURSOR.name: _cursor,
    SEND.name: _send,
    PRINT.name: _print,
    END.name: _end,
}


def match(line, /, lookup=None):
    """
    match a raw command line against the registry, in priority order.

    parameters
    - line: str
      raw user input; whitespace is normalized before matching.
    - lookup: Callable[[str], Iterable] | None
      resolves a cursor target reference to texts; the first result is used
      (None when there is none). Without a lookup the reference string itself
      becomes the target.

    returns
    - Matched(command) for the first grammar matching the whole line.
    - Unmatched(normalized_line) when no grammar matches.
    """
    line = normalize(line)
    for name, grammar in GRAMMARS.items():
        if (result := grammar.fullmatch(line)) is not None:
            logger.debug("line %r matched grammar %r", line, name)
            return Matched(_builders[name](result.groups(), lookup))
    logger.debug("line %r matched no grammar", line)
    return Unmatched(line)


def is_end(line, /):
    """
    whether the line, once normalized, is the session terminator (any casing).
    """
    return END.fullmatch(normalize(line)) is not None


__all__ = (
    "CursorDestination",
    "InputCommand",
    "FormatCommand",
    "CursorCommand",
    "SendCommand",
    "PrintCommand",
    "EndCommand",
    "Matched",
    "Unmatched",
    "match",
    "is_end",
)
