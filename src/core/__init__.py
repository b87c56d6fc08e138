"""
Core AMM algorithms
"""

# `curve` must load before `fees`: the curve engine imports the fee kernels.
from .curve import (
    ConstantProduct,
    LiquidityPair,
    DepositOutcome,
    WithdrawOutcome,
    SwapOutcome,
    SpotPrice,
    TokenAmounts,
)
from .fees import amount_after_fee, split_fee, validate_fee_bps

__all__ = [
    "ConstantProduct",
    "LiquidityPair",
    "DepositOutcome",
    "WithdrawOutcome",
    "SwapOutcome",
    "SpotPrice",
    "TokenAmounts",
    "amount_after_fee",
    "split_fee",
    "validate_fee_bps",
]
