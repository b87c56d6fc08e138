"""Stateful constant-product curve.

``ConstantProduct`` holds the four numbers describing a pool (two reserves,
share supply, fee) plus a precision constant. It is built from the caller's
source of truth at the start of an operation, mutated by exactly one
operation, read back, and discarded.

Each operation validates and computes everything first and assigns last, so a
raised ``CurveError`` never leaves a half-applied state behind.

The ``*_unsafe`` variants skip slippage gates and exist for callers that have
already checked bounds themselves; the plain methods are the default path.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..fees import split_fee, validate_fee_bps
from . import calculators
from .errors import InsufficientBalanceError, SlippageLimitExceededError, ZeroBalanceError
from .math import DEFAULT_PRECISION, checked_add, checked_sub, pow10_precision, require_uint
from .types import (
    CurveState,
    DepositOutcome,
    LiquidityPair,
    SpotPrice,
    SwapOutcome,
    WithdrawOutcome,
)


def _require_positive(name: str, value: int) -> None:
    require_uint(name, value)
    if value == 0:
        raise ZeroBalanceError(f"{name} must be non-zero")


class ConstantProduct:
    """Constant-product (x * y = k) pool curve over u64 balances."""

    __slots__ = ("_balance_x", "_balance_y", "_total_shares", "_fee_bps", "_precision")

    def __init__(
        self,
        balance_x: int,
        balance_y: int,
        existing_shares: int = 0,
        fee_bps: int = 0,
        precision_digits: Optional[int] = None,
    ) -> None:
        _require_positive("balance_x", balance_x)
        _require_positive("balance_y", balance_y)
        require_uint("existing_shares", existing_shares)
        validate_fee_bps(fee_bps)

        precision = DEFAULT_PRECISION if precision_digits is None else pow10_precision(precision_digits)

        self._balance_x = balance_x
        self._balance_y = balance_y
        # A pool seeded with reserves but no share count starts with max(x, y)
        # shares, which keeps rounding loss on the first ratio deposit small.
        self._total_shares = existing_shares if existing_shares > 0 else max(balance_x, balance_y)
        self._fee_bps = fee_bps
        self._precision = precision

    @classmethod
    def bootstrap(
        cls,
        amount_x: int,
        amount_y: int,
        fee_bps: int = 0,
        precision_digits: Optional[int] = None,
    ) -> Tuple["ConstantProduct", DepositOutcome]:
        """
        First deposit into an empty pool.

        The whole of both amounts is taken and ``max(amount_x, amount_y)``
        shares are minted; there is no ratio to respect yet.
        """
        curve = cls(amount_x, amount_y, 0, fee_bps, precision_digits)
        return curve, DepositOutcome(
            deposited_x=amount_x,
            deposited_y=amount_y,
            minted_shares=curve.total_shares,
        )

    # -- Read access ---------------------------------------------------------

    @property
    def balance_x(self) -> int:
        return self._balance_x

    @property
    def balance_y(self) -> int:
        return self._balance_y

    @property
    def total_shares(self) -> int:
        return self._total_shares

    @property
    def fee_bps(self) -> int:
        return self._fee_bps

    @property
    def precision(self) -> int:
        return self._precision

    def snapshot(self) -> CurveState:
        return CurveState(
            balance_x=self._balance_x,
            balance_y=self._balance_y,
            total_shares=self._total_shares,
            fee_bps=self._fee_bps,
            precision=self._precision,
        )

    def invariant(self) -> int:
        return calculators.invariant(self._balance_x, self._balance_y)

    def spot_price_x(self) -> SpotPrice:
        return calculators.spot_price_x(self._balance_x, self._balance_y, self._precision)

    def spot_price_y(self) -> SpotPrice:
        return calculators.spot_price_y(self._balance_x, self._balance_y, self._precision)

    # -- Swaps ---------------------------------------------------------------

    def _quote_swap(self, pair: LiquidityPair, amount_in: int) -> Tuple[SwapOutcome, int, int]:
        if not isinstance(pair, LiquidityPair):
            raise TypeError(f"pair must be a LiquidityPair, got {type(pair).__name__}")
        _require_positive("amount_in", amount_in)

        effective_in, fee = split_fee(amount_in, self._fee_bps)

        # Only the fee-deducted amount is credited to the input reserve.
        if pair is LiquidityPair.TOKEN_X:
            new_x = checked_add(self._balance_x, effective_in)
            new_y = calculators.new_y_after_x_swap(self._balance_x, self._balance_y, effective_in)
            withdrawn = checked_sub(self._balance_y, new_y)
        else:
            new_y = checked_add(self._balance_y, effective_in)
            new_x = calculators.new_x_after_y_swap(self._balance_x, self._balance_y, effective_in)
            withdrawn = checked_sub(self._balance_x, new_x)

        return SwapOutcome(deposited=amount_in, withdrawn=withdrawn, fee=fee), new_x, new_y

    def quote_swap(self, pair: LiquidityPair, amount_in: int) -> SwapOutcome:
        """Outcome ``swap`` would produce, without changing any balance."""
        outcome, _, _ = self._quote_swap(pair, amount_in)
        return outcome

    def swap(self, pair: LiquidityPair, amount_in: int, min_amount_out: int) -> SwapOutcome:
        """
        Pay ``amount_in`` of ``pair`` into the pool and take the other asset out.

        Raises ``SlippageLimitExceededError`` (leaving the pool untouched) when
        the payout is below ``min_amount_out``.
        """
        require_uint("min_amount_out", min_amount_out)
        outcome, new_x, new_y = self._quote_swap(pair, amount_in)
        if outcome.withdrawn < min_amount_out:
            raise SlippageLimitExceededError(
                f"swap output {outcome.withdrawn} < min_amount_out {min_amount_out}"
            )
        self._balance_x, self._balance_y = new_x, new_y
        return outcome

    def swap_unsafe(self, pair: LiquidityPair, amount_in: int) -> SwapOutcome:
        """``swap`` without the minimum-output check."""
        outcome, new_x, new_y = self._quote_swap(pair, amount_in)
        self._balance_x, self._balance_y = new_x, new_y
        return outcome

    # -- Liquidity -----------------------------------------------------------

    def deposit_liquidity(self, shares_to_mint: int, max_x: int, max_y: int) -> DepositOutcome:
        """
        Mint ``shares_to_mint`` shares against a proportional deposit of both
        assets, bounded above by ``max_x`` / ``max_y``.
        """
        _require_positive("shares_to_mint", shares_to_mint)
        require_uint("max_x", max_x)
        require_uint("max_y", max_y)

        amounts = calculators.deposit_amounts(
            self._balance_x,
            self._balance_y,
            self._total_shares,
            shares_to_mint,
            self._precision,
        )
        if amounts.token_x > max_x or amounts.token_y > max_y:
            raise SlippageLimitExceededError(
                f"deposit ({amounts.token_x}, {amounts.token_y}) exceeds max ({max_x}, {max_y})"
            )
        return self.deposit_liquidity_unsafe(amounts.token_x, amounts.token_y, shares_to_mint)

    def deposit_liquidity_unsafe(self, amount_x: int, amount_y: int, shares_to_mint: int) -> DepositOutcome:
        """Add exactly the given amounts and shares; no ratio or slippage checks."""
        _require_positive("shares_to_mint", shares_to_mint)
        require_uint("amount_x", amount_x)
        require_uint("amount_y", amount_y)

        new_x = checked_add(self._balance_x, amount_x)
        new_y = checked_add(self._balance_y, amount_y)
        new_shares = checked_add(self._total_shares, shares_to_mint)

        self._balance_x, self._balance_y, self._total_shares = new_x, new_y, new_shares
        return DepositOutcome(deposited_x=amount_x, deposited_y=amount_y, minted_shares=shares_to_mint)

    def withdraw_liquidity(self, shares_to_burn: int, min_x: int, min_y: int) -> WithdrawOutcome:
        """
        Burn ``shares_to_burn`` shares for a proportional part of both
        reserves, bounded below by ``min_x`` / ``min_y``.
        """
        _require_positive("shares_to_burn", shares_to_burn)
        require_uint("min_x", min_x)
        require_uint("min_y", min_y)

        amounts = calculators.withdraw_amounts(
            self._balance_x,
            self._balance_y,
            self._total_shares,
            shares_to_burn,
            self._precision,
        )
        if amounts.token_x < min_x or amounts.token_y < min_y:
            raise SlippageLimitExceededError(
                f"withdraw ({amounts.token_x}, {amounts.token_y}) below min ({min_x}, {min_y})"
            )
        return self.withdraw_liquidity_unsafe(amounts.token_x, amounts.token_y, shares_to_burn)

    def withdraw_liquidity_unsafe(self, amount_x: int, amount_y: int, shares_to_burn: int) -> WithdrawOutcome:
        """Remove exactly the given amounts and shares; no slippage checks."""
        _require_positive("shares_to_burn", shares_to_burn)
        require_uint("amount_x", amount_x)
        require_uint("amount_y", amount_y)

        if amount_x > self._balance_x or amount_y > self._balance_y:
            raise InsufficientBalanceError(
                f"withdraw ({amount_x}, {amount_y}) exceeds reserves ({self._balance_x}, {self._balance_y})"
            )
        new_shares = checked_sub(self._total_shares, shares_to_burn)

        self._balance_x = self._balance_x - amount_x
        self._balance_y = self._balance_y - amount_y
        self._total_shares = new_shares
        return WithdrawOutcome(withdrawn_x=amount_x, withdrawn_y=amount_y, burned_shares=shares_to_burn)

    def __repr__(self) -> str:
        return (
            f"ConstantProduct(balance_x={self._balance_x}, balance_y={self._balance_y}, "
            f"total_shares={self._total_shares}, fee_bps={self._fee_bps}, precision={self._precision})"
        )
