"""
dashopt faults (configuration errors, parse faults) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  fault. Codes are grouped by domain so logs and searches stay predictable.
- ConfigError: developer-facing contract error raised while building an option
  table (duplicate names, inconsistent arity/list/type combination, bad bounds).
- ParseFault: base type for user-facing faults found while parsing. A fault
  carries a message plus an options mapping (code, title, hint, and the context
  added by the parser: option, input, token, index, prog).
- ParseExit: groups every fault of one parse for a single, final report.
- trigger(): central entry point to surface a fault (raise, or render in shell mode).

UX goals
- Position-first messages: "unknown option '-x' at second position".
- Short titles, one-sentence bodies, a single clear hint.
- Readable styling, configurable via __styles__ in __main__; fault codes can be
  relabeled via __codes__ in __main__.

Integration
- Converters and splitters raise bare faults (code/title/hint only).
- The parser catches them, adds the token context via copy.replace(...) and
  records them; in shell mode each fault is rendered to stderr through rich.
"""
import copy
import sys
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
    canonical fault codes used by the parser (stable identifiers).

    grouping (by high-level domain)
    - matching (1110x)
      • UNKNOWN_OPTION, UNEXPECTED_VALUE
    - acquisition (1111x)
      • MISSING_ARGUMENT
    - validation (1112x)
      • CONVERSION_FAILED, OUT_OF_RANGE, LIST_LENGTH
    - delegated (1113x)
      • CALLBACK_FAILED

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- matching faults ---
    UNKNOWN_OPTION              = 11101
    UNEXPECTED_VALUE            = 11102

    # --- acquisition faults ---
    MISSING_ARGUMENT            = 11111

    # --- validation faults ---
    CONVERSION_FAILED           = 11121
    OUT_OF_RANGE                = 11122
    LIST_LENGTH                 = 11123

    # --- delegated faults ---
    CALLBACK_FAILED             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConfigError(ValueError):
    """
    Raised when an option table violates its invariants.

    This is a contract check for the developer writing the table, not a
    runtime failure for the end user: it is raised while the table is built,
    before any parsing happens, and is not meant to be recovered from.
    """

    def __init__(self, message, /, option=Unset):
        super().__init__(message)
        self.message = message
        self.option = option

    def __str__(self):
        if self.option is Unset:
            return self.message
        return f"option {self.option}: {self.message}"


def _palette(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class ParseFault(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = _palette({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "dashopt"), "prog-name"),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else code, "code"),
            " | ",
            text(str(self.options.get("title", "parse error")).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseFault): ...
class UnexpectedValueError(ParseFault): ...
class MissingArgumentError(ParseFault): ...
class ConversionError(ParseFault): ...
class RangeError(ParseFault): ...
class ListLengthError(ParseFault): ...
class CallbackError(ParseFault): ...


class ParseExit(ExceptionGroup):
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _palette({
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title (Bad Exit)
        })
        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "dashopt"), "prog-name"),
            " — ",
            text(self.message.title(), "title"),
            " ]"
        )
        renders = [copy.replace(exception, colorful=colorful, fancy=False) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        # faults printed at detection time are not printed twice
        if not self.options.get("reported", False):
            self.options.get("console", console).print(self)
        sys.exit(self.options.get("status", 1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, console, prog, and any context the reporter may
      want to show (option, input, token, index).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ConfigError",
    "ParseFault",
    "UnknownOptionError",
    "UnexpectedValueError",
    "MissingArgumentError",
    "ConversionError",
    "RangeError",
    "ListLengthError",
    "CallbackError",
    "ParseExit",
    "trigger",
)
