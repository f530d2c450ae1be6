"""
Scrivener faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- CommandExit: a group of exceptions collected while running in deferred mode.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Expected/found messages: a malformed command names what the grammar wanted
  at the first divergence and what the line actually had there.
- Position-first wording: the ordinal position of the offending word is always given.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The interpreter builds faults (usually through scrivener.diagnosis) and calls
  trigger(fault, **options).
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered via rich on stderr and the session continues.
"""
import copy
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the interpreter (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - grammar (1111x)
      • MALFORMED_COMMAND
    - warnings (121xx)
      • UNRESOLVED_TARGET, AMBIGUOUS_TARGET

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND   = 11101

    # --- grammar errors (11xxx) ---
    MALFORMED_COMMAND = 11111

    # --- warnings (12xxx) ---
    UNRESOLVED_TARGET = 12111
    AMBIGUOUS_TARGET  = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, message, palette):
    """
    build the rich renderable shared by errors and warnings.

    the header reads "[ prog — code | title ]", followed by the message and a hint line;
    in fancy mode the same content is framed by a panel.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", "scrivener"), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
        " | ",
        text(str(options.get("title", "")).title(), styler("title")),
        " ]"
    )
    body = text(message, styler("message"))
    parts = [body]
    if options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))
    if options.get("docs"):
        parts.append(text(options["docs"], styler("docs")))

    if fancy:
        width = options.get("ratio") and int((console.width - 4) * options["ratio"])
        return Panel(Group(*parts), title=header, title_align="left", width=width or None)

    return Group(header, *parts)


class CommandException(Exception):
    """
    base class for user-facing command errors.

    the message is the one-sentence body; every other detail (title, code, hint,
    docs, payload such as expected/found) travels in the read-only options mapping.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    @property
    def title(self):
        return self.options.get("title")

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        return _render(self, self.message, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#6B6F7A",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException):
    """
    the first word of the line is not the keyword of any grammar.
    """

    @property
    def input(self):
        return self.options.get("input")

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class MalformedCommandError(CommandException):
    """
    the keyword names a grammar but a later word (or the line length) breaks it.
    """

    @property
    def expected(self):
        return self.options.get("expected")

    @property
    def found(self):
        return self.options.get("found")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def grammar(self):
        return self.options.get("grammar")


class CommandWarning(ABC, Warning):
    """
    base class for non-fatal notices; the command still runs.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    def __rich__(self):
        return _render(self, self.message, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "#6B6F7A",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnresolvedTargetWarning(CommandWarning): ...
class AmbiguousTargetWarning(CommandWarning): ...


class CommandExit(ExceptionGroup[CommandException]):
    """
    every exception collected during a deferred run, surfaced at once.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title (Bad Exit)
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", "scrivener"), "prog-name")
        header = Text.assemble("[ ", prog, " — ", text(self.message.title(), "title"), " ]")

        renders = []
        for exception in self.exceptions:
            renders.append(copy.replace(exception, ratio=2/3, colorful=colorful, fancy=self.options.get("fancy", False)))

        if self.options.get("fancy"):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings module.

    typical options
    - shell, fancy, colorful, title, code, hint, docs, and any other context the
      reporter may want to show (e.g., input/index/expected/found).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "MalformedCommandError",
    "CommandWarning",
    "UnresolvedTargetWarning",
    "AmbiguousTargetWarning",
    "CommandExit",
    "FaultCode",
    "trigger",
    "getdoc",
)
