"""
dashopt dispatch engine: walks a raw argument vector against an option table.

Overview
- OptionParser(table, ...) holds the runtime flags; parse(argv) does one pass:
  • classify each token (see dashopt.tokens),
  • resolve options against the table (exact short/long match),
  • acquire the option-argument (inline value, cluster remainder or next token),
  • split, convert and range-check it,
  • run the action variant,
  • compact operands to the front of argv (argv[0] is never moved) and
    truncate argv to the adjusted count.
- Faults are recorded, not raised: every fault gets its token context and is
  handed to the reporter (or printed to stderr in shell mode). With halt=True
  the first fault stops the pass. finalize(result) turns the recorded faults
  into a single ParseExit.
- Callbacks steer the pass by returning Abort(code); anything else continues.

Quick example:
    >>> verbose, output = Cell(0), Cell()
    >>> table = init([
    ...     Option("-v", "--verbose", action=Increment(verbose)),
    ...     Option("-o", "--output", action=Store(output), nargs=1),
    ... ])
    >>> argv = ["prog", "-vvo", "out.txt", "in.txt"]
    >>> parse(table, argv)
    ParseResult(argc=2, ok=True, faults=(), exit=None)
    >>> argv, verbose.value, output.value
    (['prog', 'in.txt'], 2, 'out.txt')
"""
import copy
import difflib
import os
from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import NamedTuple

from .converters import convert, check_bounds
from .faults import (
    FaultCode,
    ParseFault,
    UnknownOptionError,
    UnexpectedValueError,
    MissingArgumentError,
    CallbackError,
    ParseExit,
    trigger,
)
from .options import (
    SetTrue,
    SetFalse,
    Toggle,
    Increment,
    Decrement,
    Store,
    Append,
    Call,
    CallVoid,
    CallParse,
)
from .splitter import split, check_items
from .table import OptionTable
from .tokens import Separator, LongOption, ShortCluster, Operand, classify
from .utils import Unset, coalesce, ordinal


class Cursor:
    """
    Per-call position state.

    - index: position of the token being processed in the raw vector.
    - offset: position of the next character inside a short cluster.
    - write: next slot of the operand buffer (compacted into argv).

    CallParse callbacks receive the cursor and consume tokens by moving index
    forward to the last token they used.
    """
    __slots__ = ("index", "offset", "write")

    def __init__(self, index=1, offset=0, write=1):
        self.index = index
        self.offset = offset
        self.write = write

    def __repr__(self):
        return f"Cursor(index={self.index}, offset={self.offset}, write={self.write})"


@dataclass(frozen=True, slots=True)
class Abort:
    """
    Control signal returned by a callback to stop parsing with an exit code.
    """
    code: int = 0


class ParseResult(NamedTuple):
    argc: int
    ok: bool
    faults: tuple
    exit: int | None = None


class _Halt(Exception):
    def __init__(self, code=None):
        super().__init__(code)
        self.code = code


class OptionParser:
    """
    Dispatch engine bound to one option table.

    Runtime flags
    - halt: stop at the first fault instead of collecting all of them.
    - shell: print faults to stderr as they are found and let finalize() exit
      the process instead of raising.
    - fancy/colorful: rendering style of printed faults.
    - reporter: callable receiving every fault at detection time; replaces
      shell printing when given.
    - prog: program name shown in fault headers (defaults to basename(argv[0])).
    - console: rich console used for printing (defaults to stderr).

    A parser keeps per-call state; do not share one instance between threads.
    """

    def __init__(
            self,
            table,
            /,
            *,
            halt=False,
            shell=False,
            fancy=False,
            colorful=True,
            reporter=Unset,
            prog=Unset,
            console=Unset,
    ):
        if not isinstance(table, OptionTable):
            raise TypeError("OptionParser() argument must be an OptionTable")
        if reporter is not Unset and not callable(reporter):
            raise TypeError("OptionParser() 'reporter' must be callable")
        self.table = table
        self.halt = halt
        self.shell = shell
        self.fancy = fancy
        self.colorful = colorful
        self.reporter = reporter
        self.prog = prog
        self.console = console

        self._tokens = ()
        self._faults = []
        self._cursor = Cursor()
        self._argv = []
        self._prog = coalesce(prog, "dashopt")

    def _runtime(self):
        options = {
            "prog": self._prog,
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
        }
        if self.console is not Unset:
            options["console"] = self.console
        return options

    def trigger(self, fault, /, **options):
        """
        Record a fault with its context and report it.

        The fault is stored for the result, handed to the reporter (or printed
        in shell mode) and, with halt enabled, ends the current pass.
        """
        fault = copy.replace(fault, **options, **self._runtime())
        self._faults.append(fault)
        if self.reporter is not Unset:
            self.reporter(fault)
        elif self.shell:
            trigger(fault)
        if self.halt:
            raise _Halt()

    def finalize(self, result, /):
        """
        Surface the faults of a parse result as one grouped ParseExit.

        Returns the result untouched when the parse succeeded. In shell mode
        the faults are printed (unless already printed at detection time) and
        the process exits with status 1; otherwise ParseExit is raised.
        """
        if result.ok:
            return result
        trigger(
            ParseExit(result.faults),
            reported=self.shell and self.reporter is Unset,
            **self._runtime(),
        )

    def parse(self, argv, /):
        """
        Parse argv in place and return a ParseResult.

        argv[0] is the program name and is never examined or moved. Operands
        are compacted to argv[1:] in encounter order and argv is truncated to
        the adjusted count, also when the pass stops early.
        """
        if not isinstance(argv, MutableSequence):
            raise TypeError("parse() argument must be a mutable sequence of strings")

        self._tokens = tokens = tuple(argv)
        self._faults = []
        self._cursor = cursor = Cursor()
        self._argv = argv
        self._prog = coalesce(self.prog, os.path.basename(tokens[0]) if tokens and tokens[0] else "dashopt")

        exit = None
        separated = False
        try:
            while cursor.index < len(tokens):
                token = tokens[cursor.index]
                if separated:
                    self._keep(token)
                else:
                    match classify(token):
                        case Separator():
                            separated = True
                        case LongOption(name, value):
                            self._long(name, value)
                        case ShortCluster(chars):
                            self._cluster(chars)
                        case Operand(text):
                            self._keep(text)
                cursor.index += 1
        except _Halt as halt:
            exit = halt.code

        del argv[cursor.write:]
        return ParseResult(len(argv), not self._faults, tuple(self._faults), exit)

    def _keep(self, token):
        self._argv[self._cursor.write] = token
        self._cursor.write += 1

    def _recognizes(self, token):
        """
        True when token would be handled as an option (or is the separator).

        Unrecognized dash tokens like "-5" can therefore serve as option-arguments.
        """
        match classify(token):
            case Separator():
                return True
            case LongOption(name, _):
                return self.table.long(name) is not None
            case ShortCluster(chars):
                return self.table.short(chars[0]) is not None
        return False

    def _long(self, name, value):
        input = "--" + name
        option = self.table.long(name)
        if option is None:
            suggestions = difflib.get_close_matches(name, self.table.longs.keys(), 3)
            if suggestions:
                hint = "did you mean '--%s'?" % suggestions[0]
            else:
                hint = "check the spelling; long options are matched exactly"
            return self.trigger(UnknownOptionError(
                "unknown option %r at %s position" % (input, ordinal(self._cursor.index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint=hint,
                input=input,
                token=self._tokens[self._cursor.index],
                index=self._cursor.index,
            ))
        self._handle(option, input, value)

    def _cluster(self, chars):
        cursor = self._cursor
        # faults report the cluster token even if a callback moves the cursor
        index = cursor.index
        cursor.offset = 0
        while cursor.offset < len(chars):
            char = chars[cursor.offset]
            cursor.offset += 1
            input = "-" + char
            option = self.table.short(char)

            if option is None:
                self.trigger(UnknownOptionError(
                    "unknown option %r at %s position" % (input, ordinal(index)),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    hint="short options are single characters; write long options with two dashes",
                    input=input,
                    token=self._tokens[index],
                    index=index,
                ))
                continue

            if option.nargs == 0:
                self._handle(option, input, index=index)
                continue

            # the rest of the cluster is the option-argument
            remainder = chars[cursor.offset:] or None
            cursor.offset = len(chars)
            self._handle(option, input, remainder, index=index)
        cursor.offset = 0

    def _handle(self, option, input, inline=None, *, index=Unset):
        """
        Acquire, validate and perform one matched option; faults get the
        option's token context and are triggered here.
        """
        index = coalesce(index, self._cursor.index)
        try:
            if option.nargs == 0:
                if inline is not None:
                    raise UnexpectedValueError(
                        "no option-argument is accepted, got %r" % inline,
                        title="unexpected option-argument",
                        code=FaultCode.UNEXPECTED_VALUE,
                        hint="remove everything from '=' (for example: %s)" % input,
                    )
                self._perform(option)
            elif (text := self._acquire(option, input, inline)) is Unset:
                self._absent(option)
            elif option.listed:
                self._perform(option, self._items(option, text), listed=True)
            else:
                self._perform(option, check_bounds(convert(text, option.type), option.type, option.min, option.max))
        except ParseFault as fault:
            self.trigger(
                type(fault)("%s (option %r at %s position)" % (fault.message, input, ordinal(index)), **fault.options),
                option=option,
                input=input,
                token=self._tokens[index],
                index=index,
            )

    def _acquire(self, option, input, inline):
        """
        Return the option-argument text, or Unset when an optional one is absent.
        """
        if inline is not None:
            return inline

        cursor = self._cursor
        following = cursor.index + 1
        if following < len(self._tokens) and not self._recognizes(self._tokens[following]):
            cursor.index = following
            return self._tokens[following]

        if option.nargs == "?":
            return Unset

        raise MissingArgumentError(
            "option-argument is required",
            title="missing option-argument",
            code=FaultCode.MISSING_ARGUMENT,
            hint="pass a value after the option (for example: %s <%s>)" % (input, coalesce(option.metavar, "value")),
        )

    def _absent(self, option):
        """
        Perform an optional option whose option-argument is absent.

        The default stands in for the value; in list mode it is a sequence of
        items (none when no default is set) checked against the list bounds.
        Without a default, Store and Append leave their destination as is.
        """
        if option.listed:
            items = check_items(list(coalesce(option.default, ())), option.list_min, option.list_max)
            self._perform(option, items, listed=True)
        else:
            self._perform(option, option.default)

    @staticmethod
    def _items(option, text):
        items = check_items(split(text, option.delimiters), option.list_min, option.list_max)
        return [check_bounds(convert(item, option.type), option.type, option.min, option.max) for item in items]

    def _perform(self, option, value=Unset, /, *, listed=False):
        counter = option.counter
        match option.action:
            case SetTrue(cell):
                cell.value = True
            case SetFalse(cell):
                cell.value = False
            case Toggle(cell):
                cell.value = not cell.value
            case Increment(cell):
                cell.value = (cell.value or 0) + 1
            case Decrement(cell):
                cell.value = (cell.value or 0) - 1
            case Store(cell):
                if value is Unset:
                    return
                cell.value = value
                if listed and counter is not Unset:
                    counter.value = len(value)
            case Append(target):
                if value is Unset:
                    return
                if listed:
                    target.extend(value)
                else:
                    target.append(value)
                if counter is not Unset:
                    counter.value = (counter.value or 0) + (len(value) if listed else 1)
            case Call(function):
                if value is Unset:
                    self._call(function)
                elif listed:
                    self._call(function, *value)
                else:
                    self._call(function, value)
            case CallVoid(function):
                self._call(function)
            case CallParse(function):
                self._delegate(function)

    def _call(self, function, *args):
        try:
            result = function(*args)
        except Exception as error:
            raise CallbackError(
                "callback raised %s: %s" % (type(error).__name__, error),
                title="callback failed",
                code=FaultCode.CALLBACK_FAILED,
                hint="check the value passed to the option",
                error=error,
            ) from error
        if isinstance(result, Abort):
            raise _Halt(result.code)

    def _delegate(self, function):
        cursor = self._cursor
        start = cursor.index
        try:
            result = function(self._tokens, cursor)
        except Exception as error:
            cursor.index = start
            raise CallbackError(
                "callback raised %s: %s" % (type(error).__name__, error),
                title="callback failed",
                code=FaultCode.CALLBACK_FAILED,
                hint="check the tokens following the option",
                error=error,
            ) from error
        if not isinstance(cursor.index, int) or not start <= cursor.index < len(self._tokens):
            moved, cursor.index = cursor.index, start
            raise CallbackError(
                "callback moved the cursor to %r, outside of %d..%d" % (moved, start, len(self._tokens) - 1),
                title="callback failed",
                code=FaultCode.CALLBACK_FAILED,
                hint="set cursor.index to the last token consumed",
            )
        if isinstance(result, Abort):
            raise _Halt(result.code)


def parse(table, argv, /, **options):
    """
    Parse argv against table with a throwaway OptionParser(table, **options).
    """
    return OptionParser(table, **options).parse(argv)


__all__ = (
    "Cursor",
    "Abort",
    "ParseResult",
    "OptionParser",
    "parse",
)
