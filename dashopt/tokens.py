"""
dashopt token classification.

classify(token) inspects one raw argument and returns one of:
- Separator()               for "--" exactly
- LongOption(name, value)   for "--name" or "--name=value" (value may be "")
- ShortCluster(chars)       for "-abc" (one option character per char)
- Operand(text)             for anything else, including a bare "-"

The classifier is stateless: once a Separator has been seen, the parser stops
calling it and treats every remaining token as an Operand.
"""
from typing import NamedTuple


class Separator(NamedTuple):
    pass


class LongOption(NamedTuple):
    name: str
    value: str | None = None


class ShortCluster(NamedTuple):
    chars: str


class Operand(NamedTuple):
    text: str


def classify(token, /):
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")

    if token == "--":
        return Separator()

    if token.startswith("--"):
        name, equals, value = token[2:].partition("=")
        return LongOption(name, value if equals else None)

    if token.startswith("-") and len(token) > 1:
        return ShortCluster(token[1:])

    return Operand(token)


__all__ = (
    "Separator",
    "LongOption",
    "ShortCluster",
    "Operand",
    "classify",
)
