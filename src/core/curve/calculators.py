"""Pure constant-product calculators.

Every function is stateless, operates on plain Python ints and enforces the
u64 (balances, shares) / u128 (intermediates) widths through ``.math``.

Rounding rules:
- Ratio steps (``deposit_amounts`` / ``withdraw_amounts`` / spot prices) use
  floor division scaled by ``precision``.
- ``new_balance_after_swap`` rounds the post-swap opposite balance *up*, so
  the payout is rounded down and ``new_in * new_out >= k`` always holds.
"""

from __future__ import annotations

from .errors import ZeroBalanceError
from .math import (
    U128_MAX,
    U32_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    mul_div,
    require_uint,
    to_u64,
)
from .types import SpotPrice, TokenAmounts


def _require_non_zero(**balances: int) -> None:
    for name, value in balances.items():
        require_uint(name, value)
        if value == 0:
            raise ZeroBalanceError(f"{name} must be non-zero")


def _ceil_div(numerator: int, denominator: int) -> int:
    return checked_div(numerator + denominator - 1, denominator)


# -- Invariant and prices ----------------------------------------------------

def invariant(balance_x: int, balance_y: int) -> int:
    """K = x * y as a u128."""
    _require_non_zero(balance_x=balance_x, balance_y=balance_y)
    return checked_mul(balance_x, balance_y)


def spot_price_x(balance_x: int, balance_y: int, precision: int) -> SpotPrice:
    """Price of X in Y, ``x * precision / y``."""
    _require_non_zero(balance_x=balance_x, balance_y=balance_y)
    require_uint("precision", precision, U32_MAX)
    return SpotPrice(amount=mul_div(balance_x, precision, balance_y), precision=precision)


def spot_price_y(balance_x: int, balance_y: int, precision: int) -> SpotPrice:
    """Price of Y in X; ``spot_price_x`` with the balances swapped."""
    return spot_price_x(balance_y, balance_x, precision)


# -- Liquidity ---------------------------------------------------------------

def deposit_amounts(
    balance_x: int,
    balance_y: int,
    total_shares: int,
    shares_to_mint: int,
    precision: int,
) -> TokenAmounts:
    """
    Amounts of X and Y required to mint ``shares_to_mint`` new shares.

        ratio     = (total_shares + shares_to_mint) * precision / total_shares
        deposit_i = balance_i * ratio / precision - balance_i
    """
    for name, v in (
        ("balance_x", balance_x),
        ("balance_y", balance_y),
        ("total_shares", total_shares),
        ("shares_to_mint", shares_to_mint),
    ):
        require_uint(name, v)
    require_uint("precision", precision, U32_MAX)

    ratio = mul_div(checked_add(total_shares, shares_to_mint, limit=U128_MAX), precision, total_shares)
    deposit_x = checked_sub(mul_div(balance_x, ratio, precision), balance_x)
    deposit_y = checked_sub(mul_div(balance_y, ratio, precision), balance_y)
    return TokenAmounts(token_x=to_u64(deposit_x), token_y=to_u64(deposit_y))


def withdraw_amounts(
    balance_x: int,
    balance_y: int,
    total_shares: int,
    shares_to_burn: int,
    precision: int,
) -> TokenAmounts:
    """
    Amounts of X and Y released by burning ``shares_to_burn`` shares.

        ratio      = (total_shares - shares_to_burn) * precision / total_shares
        withdraw_i = balance_i - balance_i * ratio / precision
    """
    for name, v in (
        ("balance_x", balance_x),
        ("balance_y", balance_y),
        ("total_shares", total_shares),
        ("shares_to_burn", shares_to_burn),
    ):
        require_uint(name, v)
    require_uint("precision", precision, U32_MAX)

    ratio = mul_div(checked_sub(total_shares, shares_to_burn), precision, total_shares)
    withdraw_x = checked_sub(balance_x, mul_div(balance_x, ratio, precision))
    withdraw_y = checked_sub(balance_y, mul_div(balance_y, ratio, precision))
    return TokenAmounts(token_x=to_u64(withdraw_x), token_y=to_u64(withdraw_y))


# -- Swaps -------------------------------------------------------------------

def new_balance_after_swap(balance_out: int, balance_in: int, amount_in: int) -> int:
    """
    Post-swap balance of the asset paid out when ``amount_in`` is added to
    the ``balance_in`` side: ``ceil(k / (balance_in + amount_in))``.

    This is rounded up, not floored: ``new_balance_after_swap(30, 20, 7)`` is
    23 where ``600 // 27`` would give 22. Keeping the extra unit in the pool
    makes the payout round down, so ``k`` never shrinks across a swap. When
    the division is exact both roundings agree.
    """
    k = invariant(balance_out, balance_in)
    require_uint("amount_in", amount_in)
    return to_u64(_ceil_div(k, checked_add(balance_in, amount_in, limit=U128_MAX)))


def swap_delta(balance_out: int, balance_in: int, amount_in: int) -> int:
    """Amount paid out of ``balance_out`` for ``amount_in`` on the other side."""
    return checked_sub(balance_out, new_balance_after_swap(balance_out, balance_in, amount_in))


def new_x_after_y_swap(balance_x: int, balance_y: int, amount_y: int) -> int:
    return new_balance_after_swap(balance_x, balance_y, amount_y)


def new_y_after_x_swap(balance_x: int, balance_y: int, amount_x: int) -> int:
    return new_balance_after_swap(balance_y, balance_x, amount_x)


def x_delta_from_y_swap(balance_x: int, balance_y: int, amount_y: int) -> int:
    return swap_delta(balance_x, balance_y, amount_y)


def y_delta_from_x_swap(balance_x: int, balance_y: int, amount_x: int) -> int:
    return swap_delta(balance_y, balance_x, amount_x)
