"""Runtime classification of JSON values into schema primitive kinds."""
from __future__ import annotations

import math
import numbers
from typing import Any, Mapping


class _Undefined:
    """Marker for a payload value that is absent rather than ``null``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def what_is(value: Any) -> str:
    """Return the schema kind name describing ``value``.

    Integral numbers (including ``5.0``) classify as ``integer``; NaN and the
    infinities get their own kinds so they never satisfy a numeric schema.
    """
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number):
            return "not-a-number"
        if math.isinf(number):
            return "unknown-number"
        return "integer" if number.is_integer() else "number"
    if callable(value):
        return "function"
    return "object"


def is_plain_object(value: Any) -> bool:
    return isinstance(value, Mapping)
