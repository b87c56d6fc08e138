# [TESTER] v1

from __future__ import annotations

import pytest

from src.core.curve import (
    CurveOverflowError,
    CurveUnderflowError,
    SpotPrice,
    TokenAmounts,
    ZeroBalanceError,
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
from src.core.curve.math import (
    U32_MAX,
    U64_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    pow10_precision,
    require_uint,
    to_u64,
)
from src.core.curve.errors import InvalidPrecisionError

P = 1_000_000


def test_invariant_is_product() -> None:
    assert invariant(20, 30) == 600


def test_invariant_fits_u128_for_max_balances() -> None:
    assert invariant(U64_MAX, U64_MAX) == U64_MAX * U64_MAX


def test_invariant_rejects_zero_balance() -> None:
    with pytest.raises(ZeroBalanceError):
        invariant(0, 5)


def test_invariant_rejects_balance_above_u64() -> None:
    with pytest.raises(CurveOverflowError):
        invariant(U64_MAX + 1, 1)


def test_spot_prices() -> None:
    assert spot_price_x(10, 20, P) == SpotPrice(amount=500_000, precision=P)
    assert spot_price_y(10, 20, P) == SpotPrice(amount=2_000_000, precision=P)


def test_spot_price_rejects_zero_balance() -> None:
    with pytest.raises(ZeroBalanceError):
        spot_price_y(10, 0, P)


def test_spot_price_rejects_precision_above_u32() -> None:
    with pytest.raises(CurveOverflowError):
        spot_price_x(10, 20, U32_MAX + 1)


def test_deposit_amounts_double_the_pool() -> None:
    assert deposit_amounts(30, 30, 30, 30, P) == TokenAmounts(token_x=30, token_y=30)


def test_deposit_amounts_follow_reserve_ratio() -> None:
    assert deposit_amounts(100, 50, 100, 10, P) == TokenAmounts(token_x=10, token_y=5)


def test_deposit_amounts_with_no_shares_is_overflow() -> None:
    # ratio divides by total_shares
    with pytest.raises(CurveOverflowError):
        deposit_amounts(100, 50, 0, 10, P)


def test_withdraw_amounts_half() -> None:
    assert withdraw_amounts(60, 60, 60, 30, P) == TokenAmounts(token_x=30, token_y=30)


def test_withdraw_amounts_everything() -> None:
    assert withdraw_amounts(100, 50, 100, 100, P) == TokenAmounts(token_x=100, token_y=50)


def test_withdraw_amounts_burning_more_than_supply() -> None:
    with pytest.raises(CurveUnderflowError):
        withdraw_amounts(100, 50, 100, 101, P)


def test_new_balance_after_swap_exact() -> None:
    assert new_balance_after_swap(30, 20, 5) == 24
    assert swap_delta(30, 20, 5) == 6


def test_new_balance_after_swap_rounds_up() -> None:
    # 100 / 13 = 7.69..; the pool keeps 8
    assert new_balance_after_swap(10, 10, 3) == 8
    assert swap_delta(10, 10, 3) == 2
    # 600 / 27 = 22.2..; flooring would pay out one unit too many
    assert new_balance_after_swap(30, 20, 7) == 23
    assert swap_delta(30, 20, 7) == 7


def test_zero_input_pays_nothing() -> None:
    assert swap_delta(30, 20, 0) == 0


def test_directional_helpers_pick_argument_order() -> None:
    # balance_x = 20, balance_y = 30
    assert new_y_after_x_swap(20, 30, 5) == 24
    assert y_delta_from_x_swap(20, 30, 5) == 6
    assert new_x_after_y_swap(20, 30, 10) == 15
    assert x_delta_from_y_swap(20, 30, 10) == 5


class TestCheckedMath:
    def test_require_uint_rejects_bool_and_float(self):
        with pytest.raises(TypeError):
            require_uint("v", True)
        with pytest.raises(TypeError):
            require_uint("v", 1.0)  # type: ignore[arg-type]

    def test_require_uint_bounds(self):
        assert require_uint("v", U64_MAX) == U64_MAX
        with pytest.raises(CurveUnderflowError):
            require_uint("v", -1)
        with pytest.raises(CurveOverflowError):
            require_uint("v", U64_MAX + 1)

    def test_add_sub_mul_div(self):
        assert checked_add(1, 2) == 3
        with pytest.raises(CurveOverflowError):
            checked_add(U64_MAX, 1)
        with pytest.raises(CurveUnderflowError):
            checked_sub(1, 2)
        with pytest.raises(CurveOverflowError):
            checked_mul(1 << 64, 1 << 64)
        with pytest.raises(CurveOverflowError):
            checked_div(1, 0)
        assert checked_div(7, 2) == 3

    def test_to_u64_never_truncates(self):
        assert to_u64(U64_MAX) == U64_MAX
        with pytest.raises(CurveOverflowError):
            to_u64(U64_MAX + 1)

    @pytest.mark.parametrize("digits,expected", [(0, 1), (6, 1_000_000), (9, 1_000_000_000)])
    def test_pow10_precision(self, digits, expected):
        assert pow10_precision(digits) == expected

    @pytest.mark.parametrize("digits", [10, 300, -1, "6"])
    def test_pow10_precision_rejects(self, digits):
        with pytest.raises(InvalidPrecisionError):
            pow10_precision(digits)
