r"""
Scrivener grammar registry.

Overview
- Slots
  • Literal(text): a keyword or symbol that must appear verbatim (case-insensitive).
  • Word(): any run of non-space characters.
  • Number(): digits only.
  • WordOrNumber(): digits or any other word; the command layer tells them apart.
  • Direction(): exactly one of the two direction markers, '->' (ahead) or '<-' (back).
  • FreeText(): everything up to the end of the line, spaces included.
  • Optional(inner): zero or one occurrence of the inner slot.

- Grammar
  • A named, ordered sequence of slots whose first slot is the command keyword.
  • Compiled once, at construction, into an anchored case-insensitive regex; every
    placeholder contributes exactly one capture group, in slot order.

- GRAMMARS
  • The fixed registry, in matching priority order: input, format, cursor, send,
    print, end. It is a read-only mapping built at import time.

Quick example
    >>> GRAMMARS["send"].usage
    'send <word> <word>'
    >>> GRAMMARS["send"].fullmatch("SEND alpha beta").groups()
    ('alpha', 'beta')
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType

AHEAD = "->"
BACK = "<-"


class Slot(ABC):
    """
    one element of a grammar: a literal token or a typed placeholder.

    contract
    - fragment: regex source for this slot; placeholders wrap theirs in one capture group.
    - category: human name used in diagnostics ("word", "number", ...).
    - accepts(token): whether a single whitespace-free token fits this slot.
    - required: False only for Optional.
    """
    __slots__ = ()

    required = True

    @property
    @abstractmethod
    def fragment(self) -> str: ...

    @property
    @abstractmethod
    def category(self) -> str: ...

    @abstractmethod
    def accepts(self, token: str) -> bool: ...

    @property
    def usage(self) -> str:
        return "<%s>" % self.category


@dataclass(frozen=True, slots=True)
class Literal(Slot):
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise TypeError("Literal() argument must be a string")
        if not self.text or re.search(r"\s", self.text):
            raise ValueError("Literal() argument must be a single non-empty token")

    @property
    def fragment(self):
        return re.escape(self.text)

    @property
    def category(self):
        return self.text

    @property
    def usage(self):
        return self.text

    def accepts(self, token):
        return token.casefold() == self.text.casefold()


@dataclass(frozen=True, slots=True)
class Word(Slot):
    fragment = r"(\S+)"
    category = "word"

    def accepts(self, token):
        return re.fullmatch(r"\S+", token) is not None


@dataclass(frozen=True, slots=True)
class Number(Slot):
    fragment = r"(\d+)"
    category = "number"

    def accepts(self, token):
        return re.fullmatch(r"\d+", token) is not None


@dataclass(frozen=True, slots=True)
class WordOrNumber(Slot):
    fragment = r"(\d+|\S+)"
    category = "word or number"

    def accepts(self, token):
        return re.fullmatch(r"\d+|\S+", token) is not None


@dataclass(frozen=True, slots=True)
class Direction(Slot):
    fragment = "(%s|%s)" % (re.escape(BACK), re.escape(AHEAD))
    category = "direction"

    def accepts(self, token):
        return token in (BACK, AHEAD)


@dataclass(frozen=True, slots=True)
class FreeText(Slot):
    fragment = r"(.+)"
    category = "text"

    def accepts(self, token):
        return bool(token)


@dataclass(frozen=True, slots=True)
class Optional(Slot):
    inner: Slot

    required = False

    def __post_init__(self):
        if not isinstance(self.inner, Slot):
            raise TypeError("Optional() argument must be a slot")
        if isinstance(self.inner, Optional):
            raise ValueError("Optional() cannot wrap another optional slot")

    @property
    def fragment(self):
        # the separating space belongs to the optional part
        return "(?: %s)?" % self.inner.fragment

    @property
    def category(self):
        return self.inner.category

    @property
    def usage(self):
        return "[%s]" % self.inner.usage

    def accepts(self, token):
        return self.inner.accepts(token)


class Grammar:
    """
    a named command pattern compiled once into an anchored, case-insensitive regex.

    parameters
    - name: registry key (lowercase identifier, e.g. "cursor").
    - *slots: the slot sequence; the first slot must be the Literal keyword.

    errors
    - TypeError when name is not a string or a slot is not a Slot.
    - ValueError when the sequence is empty, does not start with a literal,
      puts anything after free text, or compiles to an invalid regex.
    """
    __slots__ = ("_name", "_slots", "_pattern")

    def __init__(self, name, /, *slots):
        if not isinstance(name, str):
            raise TypeError("grammar name must be a string")
        if not re.fullmatch(r"[a-z]+", name):
            raise ValueError("grammar name must be a lowercase word, got %r" % name)
        if not slots:
            raise ValueError("grammar %r must have at least one slot" % name)
        for slot in slots:
            if not isinstance(slot, Slot):
                raise TypeError("grammar %r slots must be Slot instances, got %r" % (name, slot))
        if not isinstance(slots[0], Literal):
            raise ValueError("grammar %r must start with a literal keyword" % name)
        for slot in slots[:-1]:
            if isinstance(getattr(slot, "inner", slot), FreeText):
                raise ValueError("grammar %r cannot have slots after free text" % name)

        body = slots[0].fragment
        for slot in slots[1:]:
            body += slot.fragment if not slot.required else " " + slot.fragment

        try:
            pattern = re.compile(body, re.IGNORECASE)
        except re.error as error:
            raise ValueError("grammar %r does not compile: %s" % (name, error)) from None

        self._name = name
        self._slots = slots
        self._pattern = pattern

    @property
    def name(self):
        return self._name

    @property
    def slots(self):
        return self._slots

    @property
    def keyword(self):
        return self._slots[0].text

    @property
    def pattern(self):
        return self._pattern

    @property
    def usage(self):
        return " ".join(slot.usage for slot in self._slots)

    def fullmatch(self, line, /):
        """
        match an already normalized line against the whole pattern (or return None).
        """
        return self._pattern.fullmatch(line)

    def __repr__(self):
        return "%s(%r, %r)" % (type(self).__name__, self._name, self.usage)

    def __rich_repr__(self):
        yield self._name
        yield "usage", self.usage


INPUT = Grammar("input", Literal("input"), Word(), Optional(FreeText()))
FORMAT = Grammar("format", Literal("format"), Word(), Optional(Word()))
CURSOR = Grammar("cursor", Literal("cursor"), Word(), Word(), WordOrNumber(), Direction(), WordOrNumber())
SEND = Grammar("send", Literal("send"), Word(), Word())
PRINT = Grammar("print", Literal("print"), Optional(Word()))
END = Grammar("end", Literal("quit"))

GRAMMARS = MappingProxyType({grammar.name: grammar for grammar in (INPUT, FORMAT, CURSOR, SEND, PRINT, END)})
"""
the fixed grammar registry, in matching priority order (read-only).
"""


__all__ = (
    # Slots
    "Slot",
    "Literal",
    "Word",
    "Number",
    "WordOrNumber",
    "Direction",
    "FreeText",
    "Optional",

    # Grammars
    "Grammar",
    "GRAMMARS",
    "INPUT",
    "FORMAT",
    "CURSOR",
    "SEND",
    "PRINT",
    "END",

    # Constants
    "AHEAD",
    "BACK",
)
