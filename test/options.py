"""
Option definition and action variant tests (construction and value shapes).

Scope
- Validate name parsing (one short, one long, at least one).
- Validate that action variants reject destinations of the wrong shape.
- Validate metadata sanitizing and immutability.

Conventions
- Test method names follow CamelCase per project convention.
- Cross-field consistency is covered by the table tests.
"""
import unittest
from unittest import TestCase

from dashopt import (
    Cell,
    Option,
    SetTrue,
    Toggle,
    Store,
    Append,
    Call,
    CallParse,
    Type,
)


class TestCell(TestCase):
    """Behavioral tests for Cell."""

    def testDefaultsToNone(self):
        self.assertIsNone(Cell().value)

    def testIsMutable(self):
        cell = Cell(1)
        cell.value = 2
        self.assertEqual(cell.value, 2)
        self.assertEqual(repr(cell), "Cell(2)")

    def testHasNoOtherAttributes(self):
        with self.assertRaises(AttributeError):
            Cell().other = 1


class TestActions(TestCase):
    """Behavioral tests for action variants."""

    def testCellActionsRequireCell(self):
        with self.assertRaises(TypeError):
            SetTrue([])
        with self.assertRaises(TypeError):
            Store(None)

    def testAppendRequiresMutableSequence(self):
        self.assertEqual(Append(items := []).target, items)
        with self.assertRaises(TypeError):
            Append(Cell())
        with self.assertRaises(TypeError):
            Append(())

    def testFunctionActionsRequireCallable(self):
        with self.assertRaises(TypeError):
            Call("print")
        with self.assertRaises(TypeError):
            CallParse(None)

    def testValuedFlag(self):
        self.assertTrue(Store(Cell()).valued)
        self.assertTrue(Append([]).valued)
        self.assertTrue(Call(print).valued)
        self.assertFalse(Toggle(Cell()).valued)
        self.assertFalse(CallParse(print).valued)

    def testActionsAreFrozen(self):
        action = Toggle(Cell())
        with self.assertRaises(AttributeError):
            action.target = Cell()


class TestOption(TestCase):
    """Behavioral tests for Option."""

    def testShortAndLongNames(self):
        option = Option("-v", "--verbose", action=SetTrue(Cell()))
        self.assertEqual(option.short, "v")
        self.assertEqual(option.long, "verbose")
        self.assertEqual(option.names, ("-v", "--verbose"))
        self.assertEqual(str(option), "-v/--verbose")

    def testNamesOrderIsNormalized(self):
        option = Option("--verbose", "-v", action=SetTrue(Cell()))
        self.assertEqual(option.names, ("-v", "--verbose"))

    def testSingleName(self):
        self.assertIsNone(Option("--quiet", action=SetTrue(Cell())).short)
        self.assertIsNone(Option("-q", action=SetTrue(Cell())).long)

    def testRequiresAtLeastOneName(self):
        with self.assertRaises(TypeError):
            Option(action=SetTrue(Cell()))

    def testMalformedNamesRejected(self):
        for name in ("v", "-", "--", "-vv", "---v", "--a=b", "--a b"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Option(name, action=SetTrue(Cell()))

    def testTwoShortNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("-v", "-V", action=SetTrue(Cell()))

    def testTwoLongNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("--verbose", "--loud", action=SetTrue(Cell()))

    def testActionMustBeVariant(self):
        with self.assertRaises(TypeError):
            Option("-v", action=print)

    def testNargsShape(self):
        with self.assertRaises(TypeError):
            Option("-o", action=Store(Cell()), nargs=True)
        with self.assertRaises(TypeError):
            Option("-o", action=Store(Cell()), nargs=1.0)

    def testTypeMustBeConversionType(self):
        self.assertIs(Option("-n", action=Store(Cell()), nargs=1, type=6).type, Type.INT)
        with self.assertRaises(TypeError):
            Option("-n", action=Store(Cell()), nargs=1, type=int)

    def testBoundsMustBeNumbers(self):
        with self.assertRaises(TypeError):
            Option("-n", action=Store(Cell()), nargs=1, min="0")
        with self.assertRaises(TypeError):
            Option("-n", action=Store(Cell()), nargs=1, list_max=2.5)

    def testEmptyDelimitersRejected(self):
        with self.assertRaises(ValueError):
            Option("-n", action=Store(Cell()), nargs=1, delimiters="")

    def testCounterMustBeCell(self):
        with self.assertRaises(TypeError):
            Option("-n", action=Append([]), nargs=1, counter=0)

    def testHelpMetadataIsStripped(self):
        option = Option("-o", action=Store(Cell()), nargs=1, metavar=" file ", descr="output path")
        self.assertEqual(option.metavar, "file")
        self.assertEqual(option.descr, "output path")
        self.assertIsNone(Option("-q", action=SetTrue(Cell())).descr)
        with self.assertRaises(ValueError):
            Option("-o", action=Store(Cell()), nargs=1, metavar="  ")

    def testListedFollowsDelimiters(self):
        self.assertTrue(Option("-t", action=Append([]), nargs=1, delimiters=",").listed)
        self.assertFalse(Option("-t", action=Append([]), nargs=1).listed)

    def testFieldsAreReadOnly(self):
        option = Option("-v", action=SetTrue(Cell()))
        with self.assertRaises(AttributeError):
            option.nargs = 1
        with self.assertRaises(AttributeError):
            option.other = 1


if __name__ == "__main__":
    unittest.main()
