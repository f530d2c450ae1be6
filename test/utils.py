"""
Tests for the scrivener utilities.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation, finality.
- coalesce(): only Unset is replaced; other falsy values pass through.
- ordinal(): word forms up to ten, numeric suffixes (teens included) beyond.
- quote(): the empty token reads as "end of line".
"""
import copy
import unittest
from unittest import TestCase

from scrivener.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the module singleton on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyPreservesSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(None, str | Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testUnsetWithoutDefaultIsNone(self) -> None:
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self) -> None:
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")


class OrdinalTest(TestCase):

    def testWordForms(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(5), "fifth")
        self.assertEqual(ordinal(10), "tenth")

    def testNumericSuffixes(self) -> None:
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(24), "24th")

    def testTeens(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(113), "113th")

    def testRejectsNonPositive(self) -> None:
        with self.assertRaises(ValueError):
            ordinal(0)

    def testRejectsNonIntegers(self) -> None:
        with self.assertRaises(TypeError):
            ordinal("3")
        with self.assertRaises(TypeError):
            ordinal(True)


class QuoteTest(TestCase):

    def testEmptyIsEndOfLine(self) -> None:
        self.assertEqual(quote(""), END_OF_LINE)
        self.assertEqual(END_OF_LINE, "end of line")

    def testTokenIsQuoted(self) -> None:
        self.assertEqual(quote("now"), "'now'")
        self.assertEqual(quote("->"), "'->'")


if __name__ == '__main__':
    unittest.main()
