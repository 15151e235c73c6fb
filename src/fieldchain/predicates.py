"""
Contains the default predicate library the builder uses for its built-in checks.
All predicates take the raw field value and treat a missing (``None``) or non-string value as failing.
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

_INT = re.compile(r"^[-+]?[0-9]+$")
_INT_NO_LEADING_ZEROES = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
_FLOAT = re.compile(r"^[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?$")
_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})


def is_integer(
    value: Any,
    min: Optional[int] = None,  # pylint: disable=redefined-builtin
    max: Optional[int] = None,  # pylint: disable=redefined-builtin
    allow_leading_zeroes: bool = True,
) -> bool:
    """
    Returns True if `value` is a string representing an integer, optionally within ``[min, max]``.
    """
    if not isinstance(value, str):
        return False
    pattern = _INT if allow_leading_zeroes else _INT_NO_LEADING_ZEROES
    if pattern.fullmatch(value) is None:
        return False
    number = int(value)
    if min is not None and number < min:
        return False
    if max is not None and number > max:
        return False
    return True


def is_float(value: Any) -> bool:
    """
    Returns True if `value` is a string representing a decimal number, e.g. ``"1"``, ``"-.5"`` or ``"1e3"``.
    """
    return isinstance(value, str) and _FLOAT.fullmatch(value) is not None


def is_boolean(value: Any) -> bool:
    """Accepts ``"true"``, ``"false"``, ``"1"`` and ``"0"``"""
    return isinstance(value, str) and value in _BOOLEAN_STRINGS


def contains(value: Any, needle: str) -> bool:
    return isinstance(value, str) and needle in value


@dataclass(frozen=True)
class PredicateLibrary:
    """
    The predicates a `ChainBuilder` maps its built-in checks onto. Inject another instance to change how e.g.
    integers are recognized.
    """

    is_integer: Callable[..., bool] = is_integer
    is_float: Callable[[Any], bool] = is_float
    is_boolean: Callable[[Any], bool] = is_boolean
    contains: Callable[[Any, str], bool] = contains


DEFAULT_PREDICATES = PredicateLibrary()
