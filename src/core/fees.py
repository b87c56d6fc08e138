"""
Swap fee kernels (deterministic, integer-only).

The fee is charged on the input side before it reaches the curve:

    effective_in = floor(amount_in * (10_000 - fee_bps) / 10_000)
    fee          = amount_in - effective_in

Floor rounding on ``effective_in`` means any rounding remainder is counted as
fee, never as priced input.
"""

from __future__ import annotations

from .curve.errors import InvalidFeeAmountError
from .curve.math import BPS_DENOM, U64_MAX, checked_div, checked_mul, checked_sub, require_uint, to_u64


def validate_fee_bps(fee_bps: int) -> int:
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise TypeError("fee_bps must be an int")
    if not (0 <= fee_bps <= BPS_DENOM):
        raise InvalidFeeAmountError(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")
    return fee_bps


def amount_after_fee(amount: int, fee_bps: int) -> int:
    """Return the fee-deducted (priced) part of ``amount``."""
    require_uint("amount", amount, U64_MAX)
    validate_fee_bps(fee_bps)
    return to_u64(checked_div(checked_mul(amount, BPS_DENOM - fee_bps), BPS_DENOM))


def split_fee(amount: int, fee_bps: int) -> tuple[int, int]:
    """Split ``amount`` into ``(effective_in, fee)``."""
    effective = amount_after_fee(amount, fee_bps)
    return effective, checked_sub(amount, effective)
