"""
dashopt list splitting for list-mode options.

An option with delimiters set takes one option-argument and splits it into
items on any of the delimiter characters. There is no escaping syntax, and empty
items between consecutive delimiters are kept as empty strings (they convert
trivially for Type.STR and fail for numeric types).

The item count is checked against the option's list bounds right after
splitting, before any item is converted.
"""
import functools
import re

from .faults import ListLengthError, FaultCode
from .utils import Unset


@functools.cache
def _pattern(delimiters, /):
    return re.compile("[%s]" % "".join(map(re.escape, delimiters)))


def split(text, delimiters, /):
    """
    Split text on any character found in delimiters.

    >>> split("a,b;;c", ",;")
    ['a', 'b', '', 'c']
    """
    if not isinstance(text, str):
        raise TypeError("split() first argument must be a string")
    if not isinstance(delimiters, str) or not delimiters:
        raise TypeError("split() second argument must be a non-empty string")
    return _pattern(delimiters).split(text)


def check_items(items, /, min=Unset, max=Unset):
    """
    Validate the number of split items against (min, max); Unset bounds are open.
    """
    count = len(items)
    if (min is not Unset and count < min) or (max is not Unset and count > max):
        if min is not Unset and max is not Unset:
            expected = "between %d and %d" % (min, max) if min != max else "exactly %d" % min
        elif min is not Unset:
            expected = "at least %d" % min
        else:
            expected = "at most %d" % max
        raise ListLengthError(
            "list has %d item%s, expected %s" % (count, "" if count == 1 else "s", expected),
            title="wrong number of list items",
            code=FaultCode.LIST_LENGTH,
            hint="provide %s item%s" % (expected, "" if expected.endswith(" 1") else "s"),
            count=count,
        )
    return items


__all__ = (
    "split",
    "check_items",
)
