"""`curve`: integer-only constant-product (x * y = k) pool curve.

- pure calculators over u64 balances with checked u128 intermediates
  (``calculators``),
- a stateful ``ConstantProduct`` that applies one swap / deposit / withdraw
  to the numbers it was built from,
- a flat ``CurveError`` taxonomy (``errors``).

The curve never moves assets; callers apply the returned outcome amounts to
their own ledger after a successful call.
"""

from .errors import (
    AmmError,
    CurveError,
    CurveErrorKind,
    CurveOverflowError,
    CurveUnderflowError,
    InsufficientBalanceError,
    InvalidFeeAmountError,
    InvalidPrecisionError,
    SlippageLimitExceededError,
    ZeroBalanceError,
)
from .types import (
    CurveState,
    DepositOutcome,
    LiquidityPair,
    SpotPrice,
    SwapOutcome,
    TokenAmounts,
    WithdrawOutcome,
)
from .calculators import (
    deposit_amounts,
    invariant,
    new_balance_after_swap,
    new_x_after_y_swap,
    new_y_after_x_swap,
    spot_price_x,
    spot_price_y,
    swap_delta,
    withdraw_amounts,
    x_delta_from_y_swap,
    y_delta_from_x_swap,
)
from .engine import ConstantProduct

__all__ = [
    "ConstantProduct",
    "invariant",
    "spot_price_x",
    "spot_price_y",
    "deposit_amounts",
    "withdraw_amounts",
    "new_balance_after_swap",
    "new_x_after_y_swap",
    "new_y_after_x_swap",
    "swap_delta",
    "x_delta_from_y_swap",
    "y_delta_from_x_swap",
    "LiquidityPair",
    "TokenAmounts",
    "SpotPrice",
    "SwapOutcome",
    "DepositOutcome",
    "WithdrawOutcome",
    "CurveState",
    "AmmError",
    "CurveError",
    "CurveErrorKind",
    "ZeroBalanceError",
    "InvalidPrecisionError",
    "CurveOverflowError",
    "CurveUnderflowError",
    "InvalidFeeAmountError",
    "InsufficientBalanceError",
    "SlippageLimitExceededError",
]
