"""Turn arbitrary values into diagnostic strings for assertion messages."""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import singledispatch
from typing import Any

logger = logging.getLogger(__name__)

_PRIMITIVES = (bool, int, float, complex, str, bytes, Decimal, Fraction, Enum, type(None))


@singledispatch
def format_value(value: Any) -> str | None:
    """User-extensible formatter.

    Register a formatter for your own type without touching this module::

        @format_value.register(Point)
        def _(p: Point) -> str:
            return f"({p.x}, {p.y})"

    The default implementation returns None, meaning "not registered".
    """
    return None


def _defines(value: Any, attr: str) -> bool:
    # First class in the MRO that defines attr must not be object itself.
    for klass in type(value).__mro__:
        if attr in vars(klass):
            return klass is not object
    return False


def _from_registry(value: Any) -> str | None:
    if format_value.dispatch(type(value)) is format_value.dispatch(object):
        return None
    return format_value(value)


def _from_primitive(value: Any) -> str | None:
    if isinstance(value, _PRIMITIVES):
        return repr(value)
    return None


def _from_text_protocol(value: Any) -> str | None:
    if _defines(value, "__str__"):
        return str(value)
    if _defines(value, "__repr__"):
        return repr(value)
    return None


def _from_format_protocol(value: Any) -> str | None:
    if _defines(value, "__format__"):
        return format(value, "")
    return None


_STRATEGIES = (
    _from_registry,
    _from_primitive,
    _from_text_protocol,
    _from_format_protocol,
)


def try_format(value: Any) -> str | None:
    """Return a diagnostic string for value, or None if it has no representation.

    Strategies are tried in a fixed order: registered formatter, built-in
    primitive conversion, the type's own ``__str__``/``__repr__``, the
    type's own ``__format__``. A strategy that raises is skipped.
    """
    for strategy in _STRATEGIES:
        try:
            text = strategy(value)
        except Exception as e:
            logger.debug(f"{strategy.__name__} failed for {type(value).__name__}: {e}")
            continue
        if text is not None:
            return text
    return None
