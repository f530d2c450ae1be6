"""
Stand-in collaborators: an in-memory editor and a terminal prompt.

The interpreter only needs something that honors the Editor protocol; this module
keeps texts, their word splits and cursors in plain dicts so the command line can
run end to end. Nothing here is persisted.

- MemoryEditor: texts addressed by name; references accept shell-style patterns
  (fnmatch) so "cursor c1 note* 1 -> 3" targets the first text starting with "note".
- prompt_area(name, existing): read a multi-line text from the terminal, ending
  with a line holding a single '.' (or end of input).
"""
import fnmatch
import logging
import re
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from .commands import InputCommand, CursorCommand

logger = logging.getLogger(__name__)

console = Console()

TERMINATOR = "."


@dataclass(eq=False)
class Text:
    name: str
    data: str
    separators: tuple[str, ...] | None = None
    words: list[str] = field(default_factory=list)
    cursors: dict[str, CursorCommand] = field(default_factory=dict)

    def split(self):
        """
        recompute words from data using the current separators (whitespace when unset).
        """
        if self.separators:
            pattern = "[%s]" % "".join(re.escape(separator) for separator in self.separators)
        else:
            pattern = r"\s"
        self.words = [word for word in re.split(pattern, self.data) if word]


class MemoryEditor:
    """
    minimal editor engine keeping every text in memory, in creation order.
    """

    def __init__(self):
        self._texts = {}

    def lookup_texts(self, reference, /):
        if reference in self._texts:
            return [self._texts[reference]]
        return [text for name, text in self._texts.items() if fnmatch.fnmatchcase(name, reference)]

    def add_text(self, command, /):
        if not isinstance(command, InputCommand):
            raise TypeError("add_text() argument must be an input command")
        text = self._texts.get(command.name)
        if text is None:
            text = self._texts[command.name] = Text(command.name, command.data or "")
        else:
            text.data = command.data or ""
        text.split()
        logger.debug("text %r holds %d words", text.name, len(text.words))

    def format(self, name, separators, /):
        for text in self.lookup_texts(name):
            text.separators = separators
            text.split()

    def add_cursor(self, command, /):
        if not isinstance(command, CursorCommand):
            raise TypeError("add_cursor() argument must be a cursor command")
        if command.target is None:
            logger.debug("cursor %r has no target and was not placed", command.name)
            return
        command.target.cursors[command.name] = command

    def send_text(self, source, target, /):
        sources = self.lookup_texts(source)
        if not sources:
            logger.warning("nothing to send: no text matches %r", source)
            return
        data = " ".join(text.data for text in sources)
        existing = self._texts.get(target)
        self.add_text(InputCommand(target, data if existing is None else " ".join((existing.data, data))))

    def print(self, name, /):
        texts = self._texts.values() if name is None else self.lookup_texts(name)
        return {
            text.name: {
                "data": text.data,
                "separators": text.separators,
                "words": text.words,
                "cursors": {
                    cursor: {
                        "origin": command.origin,
                        "ahead": command.ahead,
                        "destination": command.destination,
                    }
                    for cursor, command in text.cursors.items()
                },
            }
            for text in texts
        }


def prompt_area(name, existing, /):
    """
    read a multi-line text for `name` from the terminal.

    the existing content (if any) is shown first and kept when nothing is typed.
    """
    console.print("[bold]%s[/bold] (end with a single %r line)" % (escape(name), TERMINATOR))
    if existing:
        console.print(escape(existing), style="dim")

    lines = []
    while True:
        try:
            line = console.input("… ")
        except EOFError:
            break
        if line.strip() == TERMINATOR:
            break
        lines.append(line)

    if not lines and existing:
        return existing
    return "\n".join(lines)


__all__ = (
    "Text",
    "MemoryEditor",
    "prompt_area",
)
