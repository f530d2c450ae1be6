"""
Grammar registry behavioral tests.

Scope
- Slots: acceptance of single tokens, categories and usage labels.
- Grammar: construction-time validation, compiled anchored patterns, usage strings.
- GRAMMARS: priority order and read-only registry.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from scrivener.grammars import *


class TestSlots(TestCase):

    def testLiteralIsCaseInsensitive(self):
        self.assertTrue(Literal("quit").accepts("QUIT"))
        self.assertFalse(Literal("quit").accepts("exit"))

    def testLiteralCategoryIsVerbatim(self):
        self.assertEqual(Literal("quit").category, "quit")

    def testLiteralRejectsSpaces(self):
        with self.assertRaises(ValueError):
            Literal("two words")
        with self.assertRaises(ValueError):
            Literal("")

    def testNumberAcceptsDigitsOnly(self):
        self.assertTrue(Number().accepts("42"))
        self.assertFalse(Number().accepts("4a"))

    def testDirectionAcceptsBothMarkers(self):
        self.assertTrue(Direction().accepts(AHEAD))
        self.assertTrue(Direction().accepts(BACK))
        self.assertFalse(Direction().accepts("=>"))

    def testCategories(self):
        self.assertEqual(Word().category, "word")
        self.assertEqual(Number().category, "number")
        self.assertEqual(WordOrNumber().category, "word or number")
        self.assertEqual(Direction().category, "direction")
        self.assertEqual(FreeText().category, "text")

    def testOptionalDefersToInner(self):
        slot = Optional(Number())
        self.assertFalse(slot.required)
        self.assertEqual(slot.category, "number")
        self.assertTrue(slot.accepts("7"))
        self.assertFalse(slot.accepts("seven"))
        self.assertEqual(slot.usage, "[<number>]")

    def testOptionalCannotNest(self):
        with self.assertRaises(ValueError):
            Optional(Optional(Word()))

    def testOptionalRequiresSlot(self):
        with self.assertRaises(TypeError):
            Optional("word")

    def testSlotsCompareByValue(self):
        self.assertEqual(Word(), Word())
        self.assertEqual(Optional(Word()), Optional(Word()))
        self.assertNotEqual(Literal("send"), Literal("print"))


class TestGrammar(TestCase):

    def testRequiresSlots(self):
        with self.assertRaises(ValueError):
            Grammar("empty")

    def testRequiresLeadingLiteral(self):
        with self.assertRaises(ValueError):
            Grammar("bad", Word())

    def testRejectsNonSlots(self):
        with self.assertRaises(TypeError):
            Grammar("bad", Literal("bad"), "(\\S+)")

    def testRejectsBadNames(self):
        with self.assertRaises(ValueError):
            Grammar("Bad Name", Literal("bad"))
        with self.assertRaises(TypeError):
            Grammar(None, Literal("bad"))

    def testRejectsSlotsAfterFreeText(self):
        with self.assertRaises(ValueError):
            Grammar("bad", Literal("bad"), FreeText(), Word())
        with self.assertRaises(ValueError):
            Grammar("bad", Literal("bad"), Optional(FreeText()), Word())

    def testFullmatchIsAnchored(self):
        self.assertIsNotNone(SEND.fullmatch("send a b"))
        self.assertIsNone(SEND.fullmatch("send a b c"))
        self.assertIsNone(SEND.fullmatch("resend a b"))

    def testFullmatchIsCaseInsensitive(self):
        self.assertEqual(SEND.fullmatch("SeNd Alpha beta").groups(), ("Alpha", "beta"))

    def testOptionalGroupIsNoneWhenAbsent(self):
        self.assertEqual(PRINT.fullmatch("print").groups(), (None,))
        self.assertEqual(PRINT.fullmatch("print all").groups(), ("all",))

    def testFreeTextKeepsSpaces(self):
        self.assertEqual(INPUT.fullmatch("input notes hello world").groups(), ("notes", "hello world"))

    def testCursorGroups(self):
        self.assertEqual(CURSOR.fullmatch("cursor c1 target 3 -> 9").groups(), ("c1", "target", "3", "->", "9"))

    def testEndIsTheQuitKeyword(self):
        self.assertEqual(END.keyword, "quit")
        self.assertIsNotNone(END.fullmatch("Quit"))
        self.assertIsNone(END.fullmatch("quit now"))

    def testUsage(self):
        self.assertEqual(INPUT.usage, "input <word> [<text>]")
        self.assertEqual(FORMAT.usage, "format <word> [<word>]")
        self.assertEqual(CURSOR.usage, "cursor <word> <word> <word or number> <direction> <word or number>")
        self.assertEqual(SEND.usage, "send <word> <word>")
        self.assertEqual(PRINT.usage, "print [<word>]")
        self.assertEqual(END.usage, "quit")

    def testRepr(self):
        self.assertEqual(repr(SEND), "Grammar('send', 'send <word> <word>')")


class TestRegistry(TestCase):

    def testPriorityOrder(self):
        self.assertEqual(list(GRAMMARS), ["input", "format", "cursor", "send", "print", "end"])

    def testEntriesAreTheModuleGrammars(self):
        self.assertIs(GRAMMARS["cursor"], CURSOR)
        self.assertIs(GRAMMARS["end"], END)

    def testReadOnly(self):
        with self.assertRaises(TypeError):
            GRAMMARS["extra"] = Grammar("extra", Literal("extra"))

    def testKeywordsAreDistinct(self):
        keywords = [grammar.keyword for grammar in GRAMMARS.values()]
        self.assertEqual(len(keywords), len(set(keywords)))


if __name__ == "__main__":
    unittest.main()
