"""Value objects for the constant-product curve.

All types are frozen dataclasses; amounts are integers in the asset's smallest
unit. ``X``/``Y`` name the two pool assets in the order the pool was created.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@unique
class LiquidityPair(Enum):
    """The asset being paid into the pool by a swap."""

    TOKEN_X = "x"
    TOKEN_Y = "y"

    @property
    def opposite(self) -> "LiquidityPair":
        return LiquidityPair.TOKEN_Y if self is LiquidityPair.TOKEN_X else LiquidityPair.TOKEN_X


@dataclass(frozen=True)
class TokenAmounts:
    token_x: int
    token_y: int


@dataclass(frozen=True)
class SpotPrice:
    """Price of one asset in the other, scaled by ``precision``."""

    amount: int
    precision: int


@dataclass(frozen=True)
class SwapOutcome:
    deposited: int
    withdrawn: int
    fee: int


@dataclass(frozen=True)
class DepositOutcome:
    deposited_x: int
    deposited_y: int
    minted_shares: int


@dataclass(frozen=True)
class WithdrawOutcome:
    withdrawn_x: int
    withdrawn_y: int
    burned_shares: int


@dataclass(frozen=True)
class CurveState:
    """Point-in-time copy of the numbers held by a ``ConstantProduct``."""

    balance_x: int
    balance_y: int
    total_shares: int
    fee_bps: int
    precision: int
