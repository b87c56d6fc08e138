# [TESTER] v1

from __future__ import annotations

import pytest

from src.core.curve import InvalidFeeAmountError
from src.core.fees import amount_after_fee, split_fee, validate_fee_bps


def test_fee_floors_priced_input() -> None:
    # 5 * 0.99 = 4.95 -> 4 priced, 1 fee
    assert amount_after_fee(5, 100) == 4
    assert split_fee(5, 100) == (4, 1)


def test_typical_fee() -> None:
    assert split_fee(10_000, 30) == (9_970, 30)


def test_zero_fee_is_identity() -> None:
    assert split_fee(12_345, 0) == (12_345, 0)


def test_full_fee_takes_everything() -> None:
    assert split_fee(12_345, 10_000) == (0, 12_345)


@pytest.mark.parametrize("fee_bps", [-1, 10_001])
def test_fee_out_of_range(fee_bps: int) -> None:
    with pytest.raises(InvalidFeeAmountError):
        validate_fee_bps(fee_bps)


def test_fee_must_be_int() -> None:
    with pytest.raises(TypeError):
        validate_fee_bps(30.0)  # type: ignore[arg-type]
