"""
Naming helpers used to derive builder method names and human readable descriptions from validator names.
"""
import re

_CAMEL_OR_PASCAL_CASE = re.compile(r"^[A-Za-z][a-z0-9]*(?:[A-Z][a-z0-9]*)*$")
_WORD = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]")


def is_camel_or_pascal_case(name: str) -> bool:
    """
    Returns True if `name` is written in camelCase or PascalCase, e.g. ``isEven`` or ``IsEven``.
    Underscores, whitespace and leading digits are rejected.
    """
    return _CAMEL_OR_PASCAL_CASE.fullmatch(name) is not None


def split_words(name: str) -> list[str]:
    """
    Splits a camel or Pascal case name into its lower-cased words:
    ``isEven`` -> ``["is", "even"]``
    """
    return [word.lower() for word in _WORD.findall(name)]


def to_snake_case(name: str) -> str:
    """``isEven`` -> ``is_even``"""
    return "_".join(split_words(name))


def to_description(name: str) -> str:
    """``isEven`` -> ``is even``"""
    return " ".join(split_words(name))
