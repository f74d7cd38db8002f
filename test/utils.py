"""
Utility tests (Unset sentinel, coalesce, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from dashopt.utils import Unset, UnsetType, coalesce, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyButDistinct(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "x"), "x")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, "x"), 0)
        self.assertIsNone(coalesce(None, "x"))


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual([ordinal(n) for n in (11, 12, 13, 21, 22, 23, 101, 111)],
                         ["11th", "12th", "13th", "21st", "22nd", "23rd", "101st", "111th"])

    def testRejectsNonIntegers(self):
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
