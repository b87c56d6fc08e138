"""Checked fixed-width integer arithmetic for the curve engine.

Python ints never overflow, so the u64/u128 widths the curve is defined over
are enforced explicitly here. Every helper raises the matching ``CurveError``
instead of wrapping or truncating:

- results above the width limit raise ``CurveOverflowError``,
- results below zero raise ``CurveUnderflowError``,
- division by zero raises ``CurveOverflowError`` (a checked division that
  cannot produce a value).

Intermediates of multiply-then-divide steps are computed at u128 and only
narrowed back to u64 through ``to_u64`` after the range has been confirmed.
"""

from __future__ import annotations

from .errors import CurveOverflowError, CurveUnderflowError, InvalidPrecisionError

U16_MAX: int = (1 << 16) - 1
U32_MAX: int = (1 << 32) - 1
U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1

BPS_DENOM: int = 10_000
DEFAULT_PRECISION: int = 1_000_000


def require_uint(name: str, value: int, limit: int = U64_MAX) -> int:
    """Validate that *value* is a plain int in ``[0, limit]``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise CurveUnderflowError(f"{name} must be non-negative: {value}")
    if value > limit:
        raise CurveOverflowError(f"{name} exceeds {limit.bit_length()}-bit range: {value}")
    return value


def checked_add(a: int, b: int, *, limit: int = U64_MAX) -> int:
    result = a + b
    if result > limit:
        raise CurveOverflowError(f"addition overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    result = a - b
    if result < 0:
        raise CurveUnderflowError(f"subtraction underflow: {a} - {b}")
    return result


def checked_mul(a: int, b: int, *, limit: int = U128_MAX) -> int:
    result = a * b
    if result > limit:
        raise CurveOverflowError(f"multiplication overflow: {a} * {b}")
    return result


def checked_div(a: int, b: int) -> int:
    """Floor division; a zero divisor is reported as overflow."""
    if b == 0:
        raise CurveOverflowError(f"division by zero: {a} / 0")
    return a // b


def mul_div(a: int, b: int, denominator: int) -> int:
    """``floor(a * b / denominator)`` with a u128 intermediate."""
    return checked_div(checked_mul(a, b), denominator)


def to_u64(value: int) -> int:
    """Narrow a u128 intermediate back to u64, failing instead of truncating."""
    if value > U64_MAX:
        raise CurveOverflowError(f"value does not fit in u64: {value}")
    return value


def pow10_precision(digits: int) -> int:
    """``10**digits`` as a u32 precision factor."""
    if not isinstance(digits, int) or isinstance(digits, bool):
        raise InvalidPrecisionError("precision digits must be an int")
    if not (0 <= digits <= 0xFF):
        raise InvalidPrecisionError(f"precision digits must be in [0, 255]: {digits}")
    precision = 10**digits
    if precision > U32_MAX:
        raise InvalidPrecisionError(f"10**{digits} does not fit in u32")
    return precision
