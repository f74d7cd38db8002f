"""
Fault model tests (codes, configuration errors, rendering, triggering).

Scope
- Validate FaultCode values and host relabeling through __codes__.
- Validate ConfigError formatting.
- Validate rich rendering of faults and grouped exits.
- Validate trigger() semantics (raise vs. print, exit status).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with Console(color_system=None).
"""
import copy
import io
import sys
import unittest
from unittest import TestCase

from rich.console import Console

from dashopt.faults import (
    ConfigError,
    ConversionError,
    FaultCode,
    ParseExit,
    ParseFault,
    UnknownOptionError,
    trigger,
)


def capture(width=100):
    return Console(file=io.StringIO(), color_system=None, width=width)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 11101)
        self.assertEqual(FaultCode.MISSING_ARGUMENT, 11111)
        self.assertEqual(FaultCode.LIST_LENGTH, 11123)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.OUT_OF_RANGE.normalize(), "11122")

    def testNormalizeHonorsHostLabels(self):
        main = sys.modules["__main__"]
        saved = getattr(main, "__codes__", None)
        main.__codes__ = {FaultCode.OUT_OF_RANGE: "E-RANGE"}
        try:
            self.assertEqual(FaultCode.OUT_OF_RANGE.normalize(), "E-RANGE")
        finally:
            if saved is None:
                del main.__codes__
            else:
                main.__codes__ = saved


class TestConfigError(TestCase):
    """Behavioral tests for ConfigError."""

    def testPlainMessage(self):
        self.assertEqual(str(ConfigError("bad table")), "bad table")

    def testMessageWithOption(self):
        self.assertEqual(str(ConfigError("nargs must be 0", "-v/--verbose")), "option -v/--verbose: nargs must be 0")


class TestParseFault(TestCase):
    """Behavioral tests for ParseFault rendering and replacement."""

    def setUp(self):
        self.fault = UnknownOptionError(
            "unknown option '--nope' at first position",
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="check the spelling",
        )

    def testStrIsMessage(self):
        self.assertEqual(str(self.fault), "unknown option '--nope' at first position")
        self.assertEqual(self.fault.code, FaultCode.UNKNOWN_OPTION)

    def testReplaceMergesOptions(self):
        fault = copy.replace(self.fault, prog="tool", index=1)
        self.assertIsInstance(fault, UnknownOptionError)
        self.assertEqual(fault.options["prog"], "tool")
        self.assertEqual(fault.options["hint"], "check the spelling")
        self.assertNotIn("prog", self.fault.options)

    def testRendering(self):
        console = capture()
        console.print(copy.replace(self.fault, prog="tool", colorful=False))
        output = console.file.getvalue()
        self.assertIn("tool", output)
        self.assertIn("11101", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("unknown option '--nope' at first position", output)
        self.assertIn("check the spelling", output)

    def testFancyRenderingUsesPanel(self):
        console = capture()
        console.print(copy.replace(self.fault, fancy=True))
        self.assertIn("╭", console.file.getvalue())

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnknownOptionError):
            trigger(self.fault)

    def testTriggerPrintsInShell(self):
        console = capture()
        trigger(self.fault, shell=True, console=console)
        self.assertIn("check the spelling", console.file.getvalue())

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


class TestParseExit(TestCase):
    """Behavioral tests for the grouped exit."""

    def setUp(self):
        self.faults = (
            UnknownOptionError("unknown option '-x' at first position", code=FaultCode.UNKNOWN_OPTION),
            ConversionError("value 'abc' is not a valid 32-bit signed integer", code=FaultCode.CONVERSION_FAILED),
        )

    def testIsExceptionGroup(self):
        exit = ParseExit(self.faults)
        self.assertIsInstance(exit, ExceptionGroup)
        self.assertEqual(exit.exceptions, self.faults)
        self.assertTrue(all(isinstance(fault, ParseFault) for fault in exit.exceptions))

    def testRenderingListsEveryFault(self):
        console = capture()
        console.print(ParseExit(self.faults, prog="tool", colorful=False))
        output = console.file.getvalue()
        self.assertIn("Bad Exit", output)
        self.assertIn("unknown option '-x'", output)
        self.assertIn("not a valid 32-bit signed integer", output)

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(ParseExit):
            trigger(ParseExit(self.faults))

    def testTriggerExitsInShell(self):
        console = capture()
        with self.assertRaises(SystemExit) as context:
            trigger(ParseExit(self.faults), shell=True, console=console)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unknown option '-x'", console.file.getvalue())

    def testReportedFaultsAreNotPrintedAgain(self):
        console = capture()
        with self.assertRaises(SystemExit):
            trigger(ParseExit(self.faults), shell=True, console=console, reported=True, status=2)
        self.assertEqual(console.file.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
