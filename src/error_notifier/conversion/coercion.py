"""String coercion rules shared by the CSV and text renderers."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Mapping

from ..payloads import Fault, Message
from .json_codec import dumps_compact


def _number_text(value: float) -> str:
    """Shortest round-trip spelling with JavaScript's switch to exponent form."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    point = len(digits) + exponent

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        text = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return sign + text


def to_text(value: Any) -> str:
    """Generic string coercion: ``true``/``false``/``null``, integral floats without ``.0``."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return _number_text(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Message):
        return value.text
    if isinstance(value, Fault):
        return f"{value.error_type}: {value.message}"
    if isinstance(value, (Mapping, list, tuple)):
        return dumps_compact(value)
    return str(value)


def is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def cell_text(value: Any) -> str:
    """Text of a table cell: absent values are empty, nested values are JSON."""

    if value is None:
        return ""
    if is_nested(value):
        return dumps_compact(value)
    return to_text(value)


__all__ = ["cell_text", "is_nested", "to_text"]
