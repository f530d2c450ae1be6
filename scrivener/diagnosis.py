"""
Scrivener mistake diagnosis.

When no grammar matches a line, diagnose(line) works out the most helpful fault:

- the grammar is chosen by its keyword alone (the line's first word, any casing);
  no grammar with that keyword → UnknownCommandError, with close-match suggestions;
- otherwise the line's words and the grammar's slots are walked in parallel and the
  first word a slot does not accept is reported as MalformedCommandError, carrying
  what was expected there (a category such as "number" or "direction", or
  "end of line" when the line is too long) and what was found.

Diagnosis only looks at the first divergence. The fault is returned, not raised;
the caller decides (through faults.trigger) whether it is raised or rendered.
"""
import difflib
import logging

from .faults import FaultCode, UnknownCommandError, MalformedCommandError, getdoc
from .grammars import GRAMMARS, FreeText
from .tokens import normalize, tokenize
from .utils import END_OF_LINE, ordinal, quote

logger = logging.getLogger(__name__)


def _select(word):
    """
    return the first grammar whose keyword is the given word (or None).
    """
    for grammar in GRAMMARS.values():
        if grammar.slots[0].accepts(word):
            return grammar
    return None


def _divergence(words, slots):
    """
    align words with slots and return (expected, found, index) at the first mismatch.

    optional slots are aligned as their inner slot; free text accepts the rest of the
    line. when every word fits, the next required slot is what the line is missing.
    returns None if nothing can be pinpointed.
    """
    for word in words:
        try:
            slot = slots[word.position - 1]
        except IndexError:
            return END_OF_LINE, word.value, word.position
        if not slot.accepts(word.value):
            return slot.category, word.value, word.position
        if isinstance(getattr(slot, "inner", slot), FreeText):
            return None

    for slot in slots[len(words):]:
        if slot.required:
            return slot.category, "", len(words) + 1
    return None


def diagnose(line, /):
    """
    build the fault explaining why a line matches no grammar.

    parameters
    - line: str
      the raw (or normalized) line that failed matching; it must not be blank.

    returns
    - UnknownCommandError when the first word is no grammar keyword.
    - MalformedCommandError with expected/found/index/grammar options otherwise.

    errors
    - ValueError when the line is blank (blank lines never reach diagnosis).
    """
    words = tokenize(line)
    if not words:
        raise ValueError("diagnose() argument must be a non-blank line")
    line = normalize(line)
    first = words[0]
    keywords = [grammar.keyword for grammar in GRAMMARS.values()]

    grammar = _select(first.value)
    if grammar is None:
        suggestions = difflib.get_close_matches(first.value.lower(), keywords, 5)
        try:
            hint = "did you mean %r? known commands are %s" % (suggestions[0], ", ".join(keywords))
        except IndexError:
            hint = "known commands are %s" % ", ".join(keywords)
        logger.debug("line %r has unknown keyword %r", line, first.value)
        return UnknownCommandError(
            "unknown command %r at %s position" % (first.value, ordinal(first.position)),
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=first.value,
            index=first.position,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        )

    divergence = _divergence(words, grammar.slots)
    if divergence is not None:
        expected, found, index = divergence
        message = "%r expected %s, found %s at %s position" % (line, expected, quote(found), ordinal(index))
    else:
        # best effort: nothing pinpointed, so the whole usage stands against the whole line
        expected, found, index = grammar.usage, line, first.position
        message = "%r expected %s, found %r" % (line, expected, found)

    logger.debug("line %r diverges from grammar %r: expected %s, found %r", line, grammar.name, expected, found)
    return MalformedCommandError(
        message,
        title="malformed %s command" % grammar.name,
        code=FaultCode.MALFORMED_COMMAND,
        expected=expected,
        found=found or END_OF_LINE,
        index=index,
        grammar=grammar.name,
        hint="usage: %s" % grammar.usage,
        docs=getdoc(FaultCode.MALFORMED_COMMAND),
    )


__all__ = (
    "diagnose",
)
