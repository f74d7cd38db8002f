"""
dashopt option table: the read-only registry a parser resolves tokens against.

OptionTable(options, validate=__debug__)
- Collects Option definitions from any iterable and indexes them by short
  character and long name.
- With validation on (the default unless Python runs with -O) every definition
  is checked for internal consistency and name collisions, and a ConfigError is
  raised for the first violation found. With validation off only the indexes
  are built; on a collision the last definition wins.

init(options, validate=__debug__) is the same constructor under its
registration name.
"""
import math
from types import MappingProxyType

from .converters import Type
from .faults import ConfigError
from .options import Option, Store, Append
from .utils import Unset

_ARITIES = (0, 1, "?")


def _check_arity(option, /):
    if option.nargs not in _ARITIES:
        raise ConfigError("nargs must be 0, 1 or '?', got %r" % (option.nargs,), option)

    action = option.action
    if isinstance(action, Store | Append) and option.nargs == 0:
        raise ConfigError("%s requires an option-argument (nargs 1 or '?')" % type(action).__name__, option)
    if not action.valued and option.nargs != 0:
        raise ConfigError("%s takes no option-argument (nargs must be 0)" % type(action).__name__, option)

    if option.nargs == 0:
        if option.type is not Type.STR:
            raise ConfigError("conversion type given for an option without option-argument", option)
        if option.min is not Unset or option.max is not Unset:
            raise ConfigError("bounds given for an option without option-argument", option)

    if option.default is not Unset and option.nargs != "?":
        raise ConfigError("default is only used with an optional option-argument (nargs '?')", option)


def _check_bounds(option, /):
    for bound in (option.min, option.max):
        if bound is Unset:
            continue
        if option.type is Type.STR and (not isinstance(bound, int) or bound < 0):
            raise ConfigError("string length bounds must be non-negative integers, got %r" % bound, option)
        if isinstance(bound, float) and math.isnan(bound):
            raise ConfigError("bounds cannot be nan", option)

    if option.min is not Unset and option.max is not Unset and option.min > option.max:
        raise ConfigError("min (%s) is greater than max (%s)" % (option.min, option.max), option)


def _check_list(option, /):
    if option.listed:
        if option.nargs == 0 or not option.action.valued:
            raise ConfigError("list mode needs an action taking an option-argument", option)
    elif option.list_min is not Unset or option.list_max is not Unset:
        raise ConfigError("list bounds given without delimiters", option)

    for bound in (option.list_min, option.list_max):
        if bound is not Unset and bound < 0:
            raise ConfigError("list bounds must be non-negative, got %d" % bound, option)

    if option.list_min is not Unset and option.list_max is not Unset and option.list_min > option.list_max:
        raise ConfigError("list_min (%d) is greater than list_max (%d)" % (option.list_min, option.list_max), option)

    if option.listed and option.default is not Unset and not isinstance(option.default, list | tuple):
        raise ConfigError("default of a list-mode option must be a list or tuple of items", option)

    if option.counter is not Unset:
        if not (isinstance(option.action, Append) or (isinstance(option.action, Store) and option.listed)):
            raise ConfigError("counter is only updated by Append or by Store in list mode", option)


class OptionTable:
    """
    Immutable, indexed collection of option definitions.

    >>> table = OptionTable([Option("-v", "--verbose", action=Increment(Cell(0)))])
    >>> table.short("v") is table.long("verbose")
    True
    """

    __slots__ = ("_options", "_shorts", "_longs")

    def __init__(self, options, /, *, validate=__debug__):
        options = tuple(options)
        shorts = {}
        longs = {}

        for option in options:
            if validate:
                if not isinstance(option, Option):
                    raise ConfigError("table entries must be Option definitions, got %r" % type(option).__name__)
                _check_arity(option)
                _check_bounds(option)
                _check_list(option)
                if option.short is not None and option.short in shorts:
                    raise ConfigError("short name '-%s' is already used by %s" % (option.short, shorts[option.short]), option)
                if option.long is not None and option.long in longs:
                    raise ConfigError("long name '--%s' is already used by %s" % (option.long, longs[option.long]), option)

            if option.short is not None:
                shorts[option.short] = option
            if option.long is not None:
                longs[option.long] = option

        object.__setattr__(self, "_options", options)
        object.__setattr__(self, "_shorts", MappingProxyType(shorts))
        object.__setattr__(self, "_longs", MappingProxyType(longs))

    def __setattr__(self, name, value, /):
        raise AttributeError("option tables are read-only")

    @property
    def options(self):
        return self._options

    @property
    def shorts(self):
        return self._shorts

    @property
    def longs(self):
        return self._longs

    def short(self, char, /):
        """
        Return the definition whose short name is char, or None.
        """
        return self._shorts.get(char)

    def long(self, name, /):
        """
        Return the definition whose long name is name, or None.
        """
        return self._longs.get(name)

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "OptionTable(%s)" % ", ".join(map(str, self._options))


init = OptionTable


__all__ = (
    "OptionTable",
    "init",
)
