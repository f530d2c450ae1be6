"""
Scrivener interpreter: the line loop and the dispatcher.

What this module provides
- Editor: the collaborator protocol the interpreter drives (text storage, formatting,
  cursors, transfers and printing all live behind it).
- Interpreter: feeds lines through normalize → end check → match → dispatch, or
  → diagnose → trigger when nothing matches.

Runtime flags (same meaning as on the faults)
- shell: render faults on stderr and keep going, instead of raising them.
- fancy: frame rendered faults in a panel.
- colorful: style rendered faults.
- deferred: collect faults during run() and surface them together (CommandExit) at the end.

Quick start
    from scrivener import Interpreter, MemoryEditor

    interpreter = Interpreter(MemoryEditor(), shell=True)
    interpreter.run(["input notes hello world", "print notes", "quit"])
"""
import copy
import dataclasses
import logging
from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from rich.console import Console

from .commands import *
from .diagnosis import diagnose
from .editor import prompt_area
from .faults import *
from .tokens import normalize
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class Editor(Protocol):
    """
    the editor engine as seen by the interpreter.

    every method receives already validated, typed values; what it does with them
    is entirely up to the engine.
    """

    def lookup_texts(self, reference: str, /) -> Sequence[Any]: ...

    def add_text(self, command: InputCommand, /) -> None: ...

    def format(self, name: str, separators: tuple[str, ...] | None, /) -> None: ...

    def add_cursor(self, command: CursorCommand, /) -> None: ...

    def send_text(self, source: str, target: str, /) -> None: ...

    def print(self, name: str | None, /) -> Any: ...


def _serialize(object):
    """
    json fallback for editor results: dataclasses become dicts, anything else a string.
    """
    if dataclasses.is_dataclass(object) and not isinstance(object, type):
        return dataclasses.asdict(object)
    if isinstance(object, tuple | set | frozenset):
        return list(object)
    return str(object)


class Interpreter:
    """
    drive an editor from free-text command lines.

    parameters
    - editor: Editor
      the collaborator receiving dispatched commands.
    - prompt: Callable[[str, str | None], str] | Unset
      interactive fallback for input commands without inline data; receives the
      text name and its existing content (or None). defaults to the terminal prompt
      of scrivener.editor.
    - console: rich Console for print results (defaults to stdout).
    - shell, fancy, colorful, deferred: runtime flags (see module docstring).
    """

    def __init__(
            self,
            editor,
            /,
            prompt=Unset,
            *,
            console=Unset,
            shell=False,
            fancy=False,
            colorful=True,
            deferred=False,
    ):
        prompt = coalesce(prompt, prompt_area)
        if not callable(prompt):
            raise TypeError("Interpreter() prompt must be callable")

        self.editor = editor
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.deferred = bool(deferred)
        self._prompt = prompt
        self._console = coalesce(console, Console())
        self._faults = []

    @property
    def faults(self):
        """
        exceptions seen since the last run() started (read-only view).
        """
        return tuple(self._faults)

    def trigger(self, fault, /, **options):
        """
        surface a fault with this interpreter's runtime flags merged in.

        in deferred mode exceptions are only collected (see run()); warnings are
        always surfaced immediately.
        """
        fault = copy.replace(fault, **{"shell": self.shell, "fancy": self.fancy, "colorful": self.colorful, **options})
        if isinstance(fault, CommandException):
            self._faults.append(fault)
            if self.deferred:
                return
        trigger(fault)

    def _lookup(self, reference):
        texts = list(self.editor.lookup_texts(reference))
        if not texts:
            self.trigger(UnresolvedTargetWarning(
                "no text matches cursor target %r" % reference,
                title="unresolved target",
                code=FaultCode.UNRESOLVED_TARGET,
                input=reference,
                hint="create it first with 'input %s <text>'" % reference,
                docs=getdoc(FaultCode.UNRESOLVED_TARGET),
            ))
        elif len(texts) > 1:
            self.trigger(AmbiguousTargetWarning(
                "cursor target %r matches %d texts, the first one is used" % (reference, len(texts)),
                title="ambiguous target",
                code=FaultCode.AMBIGUOUS_TARGET,
                input=reference,
                hint="use an exact text name to pick a single text",
                docs=getdoc(FaultCode.AMBIGUOUS_TARGET),
            ))
        return texts

    def dispatch(self, command, /):
        """
        route one matched command to its editor operation (no further validation).

        input commands without inline data first acquire it through the prompt,
        pre-filled with the data of the first existing text of that name.
        """
        logger.debug("dispatching %r", command)
        match command:
            case InputCommand(name=name, data=None):
                existing = next((getattr(text, "data", None) for text in self.editor.lookup_texts(name)), None)
                self.editor.add_text(InputCommand(name, self._prompt(name, existing)))
            case InputCommand():
                self.editor.add_text(command)
            case FormatCommand(name=name, separators=separators):
                self.editor.format(name, separators)
            case CursorCommand():
                self.editor.add_cursor(command)
            case SendCommand(source=source, target=target):
                self.editor.send_text(source, target)
            case PrintCommand(name=name):
                self._console.print_json(data=self.editor.print(name), indent=2, default=_serialize)
            case _:
                raise TypeError("dispatch() argument must be a dispatchable command, got %r" % (command,))

    def execute(self, line, /):
        """
        process one command line.

        returns
        - False when the line is the session terminator ('quit'), True otherwise
          (blank lines, dispatched commands and diagnosed mistakes alike).

        errors
        - outside shell mode, the diagnosed CommandException is raised.
        """
        if not isinstance(line, str):
            raise TypeError("execute() argument must be a string")
        if not normalize(line):
            return True
        if is_end(line):
            logger.debug("end of session requested")
            return False

        result = match(line, lookup=self._lookup)
        if isinstance(result, Matched):
            self.dispatch(result.command)
        else:
            self.trigger(diagnose(result.line))
        return True

    def run(self, lines, /):
        """
        execute lines until the terminator or the end of the iterable.

        returns the number of faults (exceptions) seen. in deferred mode they are
        surfaced together as a CommandExit once the lines are exhausted.
        """
        if isinstance(lines, str) or not isinstance(lines, Iterable):
            raise TypeError("run() argument must be an iterable of lines")

        self._faults.clear()
        for line in lines:
            if not self.execute(line):
                break

        if self.deferred and self._faults:
            trigger(
                CommandExit(self._faults),
                shell=self.shell,
                fancy=self.fancy,
                colorful=self.colorful,
            )
        return len(self._faults)


__all__ = (
    "Editor",
    "Interpreter",
)
