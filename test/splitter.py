"""
List splitter behavioral tests.

Scope
- Validate split() on single and multiple delimiter characters.
- Validate that empty items are preserved and no escaping exists.
- Validate check_items() bounds and fault metadata.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from dashopt import split, check_items
from dashopt.faults import ListLengthError, FaultCode


class TestSplit(TestCase):
    """Behavioral tests for split()."""

    def testSingleDelimiter(self):
        self.assertEqual(split("a,b,c", ","), ["a", "b", "c"])

    def testAnyDelimiterCharacterSplits(self):
        self.assertEqual(split("a,b;c", ",;"), ["a", "b", "c"])

    def testEmptyItemsPreserved(self):
        self.assertEqual(split(",a,,b,", ","), ["", "a", "", "b", ""])

    def testNoDelimiterGivesOneItem(self):
        self.assertEqual(split("abc", ","), ["abc"])
        self.assertEqual(split("", ","), [""])

    def testRegexCharactersAreLiteral(self):
        self.assertEqual(split("a]b^c", "]^"), ["a", "b", "c"])

    def testBackslashIsNotAnEscape(self):
        self.assertEqual(split("a\\,b", ","), ["a\\", "b"])

    def testEmptyDelimitersRejected(self):
        with self.assertRaises(TypeError):
            split("a,b", "")


class TestCheckItems(TestCase):
    """Behavioral tests for check_items()."""

    def testWithinBoundsReturnsItems(self):
        items = ["a", "b"]
        self.assertIs(check_items(items, min=1, max=3), items)

    def testTooMany(self):
        with self.assertRaises(ListLengthError) as context:
            check_items(["a", "b", "c", "d"], max=3)
        self.assertEqual(context.exception.code, FaultCode.LIST_LENGTH)
        self.assertEqual(context.exception.options["count"], 4)
        self.assertEqual(context.exception.message, "list has 4 items, expected at most 3")

    def testTooFew(self):
        with self.assertRaises(ListLengthError) as context:
            check_items(["a"], min=2, max=2)
        self.assertEqual(context.exception.message, "list has 1 item, expected exactly 2")

    def testUnboundedAcceptsAnything(self):
        self.assertEqual(check_items([]), [])


if __name__ == "__main__":
    unittest.main()
