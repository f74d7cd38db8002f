r"""
dashopt option definitions and action variants.

Overview
- Cell
  • Mutable one-value box. Flag, counter and store actions write into a Cell,
    so the caller keeps a typed handle on every destination.

- Actions (tagged variants; each carries the destination shape it needs)
  • SetTrue(cell) / SetFalse(cell): write a fixed boolean.
  • Toggle(cell): flip the current boolean.
  • Increment(cell) / Decrement(cell): count repeated flags (unset counts as 0).
  • Store(cell): write the converted option-argument, overwriting prior values.
  • Append(sequence): append the converted option-argument to a mutable sequence.
  • Call(function): function(value), or function(*items) in list mode.
  • CallVoid(function): function(), e.g. print a version and stop.
  • CallParse(function): function(tokens, cursor); the callback consumes raw
    tokens itself by moving cursor.index forward.

- Option
  • One option definition: names ("-x" and/or "--xyz"), action, arity (nargs),
    conversion type, bounds, list mode and help metadata.

Metadata (sanitized on construction)
- names: one short ("-x") and/or one long ("--name") spelling; at least one.
- nargs: 0, 1 or "?" (optional option-argument).
- type: a dashopt.converters.Type member (STR keeps the raw text).
- min/max: length bounds for STR, numeric bounds otherwise.
- delimiters: characters separating list items; switches on list mode.
- list_min/list_max: accepted item count in list mode.
- counter: Cell updated with the number of stored or appended items.
- default: value used when an optional option-argument is absent; a list or
  tuple of items in list mode. Without a default an absent option-argument
  leaves Store and Append destinations untouched, calls Call with no
  argument (no items in list mode) and still checks list_min.
- metavar/descr: shown by the help renderer only.

Only value shapes are checked here (TypeError/ValueError). Cross-field
consistency (arity vs. action, bounds vs. type, ...) is validated when the
option is registered in an OptionTable.

Quick example:
    >>> verbose = Cell(0)
    >>> Option("-v", "--verbose", action=Increment(verbose), descr="more output")
    option(names=('-v', '--verbose'), action=Increment(target=Cell(0)), nargs=0, ...)
"""
import re
from collections.abc import MutableSequence
from dataclasses import dataclass

from .converters import Type
from .utils import Unset, UnsetType, coalesce


class Cell:
    """
    Mutable single-value destination.

    >>> cell = Cell(False)
    >>> cell.value = True
    """
    __slots__ = ("value",)

    def __init__(self, value=None):
        self.value = value

    def __repr__(self):
        return f"Cell({self.value!r})"

    def __rich_repr__(self):
        yield self.value


class Action:
    """
    Base of every action variant.

    valued tells whether the action consumes an option-argument; it drives the
    arity checks of the option table.
    """
    __slots__ = ()
    valued = False


@dataclass(frozen=True, slots=True)
class _CellAction(Action):
    target: Cell

    def __post_init__(self):
        if not isinstance(self.target, Cell):
            raise TypeError(f"{type(self).__name__} target must be a Cell")


@dataclass(frozen=True, slots=True)
class SetTrue(_CellAction):
    pass


@dataclass(frozen=True, slots=True)
class SetFalse(_CellAction):
    pass


@dataclass(frozen=True, slots=True)
class Toggle(_CellAction):
    pass


@dataclass(frozen=True, slots=True)
class Increment(_CellAction):
    pass


@dataclass(frozen=True, slots=True)
class Decrement(_CellAction):
    pass


@dataclass(frozen=True, slots=True)
class Store(_CellAction):
    valued = True


@dataclass(frozen=True, slots=True)
class Append(Action):
    target: MutableSequence
    valued = True

    def __post_init__(self):
        if not isinstance(self.target, MutableSequence):
            raise TypeError("Append target must be a mutable sequence")


@dataclass(frozen=True, slots=True)
class _FunctionAction(Action):
    function: object

    def __post_init__(self):
        if not callable(self.function):
            raise TypeError(f"{type(self).__name__} function must be callable")


@dataclass(frozen=True, slots=True)
class Call(_FunctionAction):
    valued = True


@dataclass(frozen=True, slots=True)
class CallVoid(_FunctionAction):
    pass


@dataclass(frozen=True, slots=True)
class CallParse(_FunctionAction):
    pass


def _sanitize_names(names, /):
    """
    Internal: split shell-style spellings into (short, long).

    - short: "-x", where x is any single character except "-" and whitespace.
    - long: "--name", where name is non-empty, does not start with "-" and
      contains neither "=" nor whitespace.
    """
    short = long = None
    if not names:
        raise TypeError("option must specify at least one name")

    for name in names:
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        if re.fullmatch(r"-[^\s-]", name):
            if short is not None:
                raise ValueError("option can have at most one short name")
            short = name[1]
        elif re.fullmatch(r"--[^\s=-][^\s=]*", name):
            if long is not None:
                raise ValueError("option can have at most one long name")
            long = name[2:]
        else:
            raise ValueError(f"option name {name!r} must be of the form -x or --name")
    return short, long


def _sanitize_metadata(metadata, /):
    """
    Internal: validate value shapes and normalize them in place.
    """
    if not isinstance(metadata["action"], Action):
        raise TypeError("option 'action' must be an action variant (SetTrue, Store, Call, ...)")

    if isinstance(nargs := metadata["nargs"], bool) or not isinstance(nargs, int | str):
        raise TypeError("option 'nargs' must be 0, 1 or '?'")

    try:
        metadata["type"] = Type(metadata["type"])
    except (ValueError, TypeError):
        raise TypeError("option 'type' must be a conversion Type") from None

    for name in ("min", "max"):
        if isinstance(bound := metadata[name], bool) or not isinstance(bound, int | float | UnsetType):
            raise TypeError(f"option {name!r} must be a number")

    for name in ("list_min", "list_max"):
        if isinstance(bound := metadata[name], bool) or not isinstance(bound, int | UnsetType):
            raise TypeError(f"option {name!r} must be an integer")

    if not isinstance(delimiters := metadata["delimiters"], str | UnsetType):
        raise TypeError("option 'delimiters' must be a string")
    elif isinstance(delimiters, str) and not delimiters:
        raise ValueError("option 'delimiters' cannot be empty")

    if not isinstance(metadata["counter"], Cell | UnsetType):
        raise TypeError("option 'counter' must be a Cell")

    for name in ("metavar", "descr"):
        if not isinstance(text := metadata[name], str | UnsetType):
            raise TypeError(f"option {name!r} must be a string")
        elif isinstance(text, str) and not (text := text.strip()):
            raise ValueError(f"option {name!r} cannot be empty")
        metadata[name] = coalesce(text)


class Option:
    """
    One command-line option definition.

    Instances are immutable; every field is exposed as a read-only property.
    """

    __fields__ = (
        "short",
        "long",
        "action",
        "nargs",
        "type",
        "min",
        "max",
        "default",
        "delimiters",
        "list_min",
        "list_max",
        "counter",
        "metavar",
        "descr",
    )
    __slots__ = tuple("_" + name for name in __fields__)

    def __init__(
            self,
            *names,
            action,
            nargs=0,
            type=Type.STR,
            min=Unset,
            max=Unset,
            default=Unset,
            delimiters=Unset,
            list_min=Unset,
            list_max=Unset,
            counter=Unset,
            metavar=Unset,
            descr=Unset,
    ):
        short, long = _sanitize_names(names)
        metadata = {
            "short": short,
            "long": long,
            "action": action,
            "nargs": nargs,
            "type": type,
            "min": min,
            "max": max,
            "default": default,
            "delimiters": delimiters,
            "list_min": list_min,
            "list_max": list_max,
            "counter": counter,
            "metavar": metavar,
            "descr": descr,
        }
        _sanitize_metadata(metadata)

        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"option attribute {name!r} is read-only")

    @property
    def names(self):
        """
        Shell-style spellings, short first ("-v", "--verbose").
        """
        names = ()
        if self._short is not None:
            names += ("-" + self._short,)
        if self._long is not None:
            names += ("--" + self._long,)
        return names

    @property
    def listed(self):
        """
        True when the option splits its option-argument into list items.
        """
        return self._delimiters is not Unset

    def __str__(self):
        return "/".join(self.names)

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "names", self.names
        for name in self.__fields__[2:]:
            yield name, getattr(self, name)


def _readonly(name):
    return property(lambda self: object.__getattribute__(self, "_" + name), doc=f"read-only {name!r} field")

for _name in Option.__fields__:
    setattr(Option, _name, _readonly(_name))
del _name


__all__ = (
    "Cell",
    "Action",
    "SetTrue",
    "SetFalse",
    "Toggle",
    "Increment",
    "Decrement",
    "Store",
    "Append",
    "Call",
    "CallVoid",
    "CallParse",
    "Option",
)
