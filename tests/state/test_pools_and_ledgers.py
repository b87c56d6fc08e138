# [TESTER] v1

from __future__ import annotations

import pytest

from src.core.curve import InsufficientBalanceError, InvalidFeeAmountError, InvalidPrecisionError, LiquidityPair
from src.core.curve.errors import PoolGuardError
from src.state import BalanceTable, LPTable, PoolConfig, PoolState, compute_pool_id, compute_vault_authority


def test_pool_id_is_deterministic_per_seed() -> None:
    assert compute_pool_id(1) == compute_pool_id(1)
    assert compute_pool_id(1) != compute_pool_id(2)
    assert compute_pool_id(1).startswith("0x") and len(compute_pool_id(1)) == 66


@pytest.mark.parametrize("seed", [-1, 1 << 64, True, "1"])
def test_pool_id_rejects_non_u64_seed(seed) -> None:
    with pytest.raises(ValueError):
        compute_pool_id(seed)


def test_vault_authority_differs_from_pool_id() -> None:
    pid = compute_pool_id(7)
    assert compute_vault_authority(pid) != pid
    assert compute_vault_authority(pid) == compute_vault_authority(pid)


class TestPoolConfig:
    def test_valid(self):
        cfg = PoolConfig(seed=1, mint_x="X", mint_y="Y", fee_bps=30)
        assert cfg.authority is None and cfg.locked is False
        assert cfg.precision_digits == 6

    def test_same_mints_rejected(self):
        with pytest.raises(ValueError, match="differ"):
            PoolConfig(seed=1, mint_x="X", mint_y="X", fee_bps=30)

    def test_empty_mint_rejected(self):
        with pytest.raises(ValueError):
            PoolConfig(seed=1, mint_x="", mint_y="Y", fee_bps=30)

    def test_fee_rejected(self):
        with pytest.raises(InvalidFeeAmountError):
            PoolConfig(seed=1, mint_x="X", mint_y="Y", fee_bps=10_001)

    def test_precision_rejected(self):
        with pytest.raises(InvalidPrecisionError):
            PoolConfig(seed=1, mint_x="X", mint_y="Y", fee_bps=30, precision_digits=12)


def test_pool_state_checks_id_against_seed() -> None:
    cfg = PoolConfig(seed=1, mint_x="X", mint_y="Y", fee_bps=30)
    state = PoolState(pool_id=compute_pool_id(1), config=cfg)
    assert state.vault_authority == compute_vault_authority(state.pool_id)
    with pytest.raises(ValueError):
        PoolState(pool_id=compute_pool_id(2), config=cfg)


class TestBalanceTable:
    def test_credit_debit_transfer(self):
        t = BalanceTable()
        t.credit("alice", "X", 100)
        t.transfer("X", "alice", "bob", 40)
        assert t.get("alice", "X") == 60
        assert t.get("bob", "X") == 40
        assert t.total_supply("X") == 100

    def test_zero_balances_are_dropped(self):
        t = BalanceTable()
        t.credit("alice", "X", 5)
        t.debit("alice", "X", 5)
        assert t.get_all_balances() == {}

    def test_overdraw_rejected(self):
        t = BalanceTable()
        t.credit("alice", "X", 5)
        with pytest.raises(InsufficientBalanceError):
            t.transfer("X", "alice", "bob", 6)
        assert t.get("alice", "X") == 5
        assert t.get("bob", "X") == 0

    def test_negative_set_rejected(self):
        with pytest.raises(ValueError):
            BalanceTable().set("alice", "X", -1)


class TestLPTable:
    def test_mint_and_burn(self):
        lp = LPTable()
        lp.mint("alice", "pool", 10)
        lp.mint("bob", "pool", 5)
        lp.burn("alice", "pool", 4)
        assert lp.get("alice", "pool") == 6
        assert lp.pool_total("pool") == 11

    def test_burn_everything_removes_entry(self):
        lp = LPTable()
        lp.mint("alice", "pool", 10)
        lp.burn("alice", "pool", 10)
        assert lp.get_all_balances() == {}

    def test_burn_more_than_held(self):
        lp = LPTable()
        lp.mint("alice", "pool", 10)
        with pytest.raises(InsufficientBalanceError):
            lp.burn("alice", "pool", 11)
        assert lp.get("alice", "pool") == 10


def test_mint_for_pair() -> None:
    cfg = PoolConfig(seed=1, mint_x="X", mint_y="Y", fee_bps=30)
    assert cfg.mint_for(LiquidityPair.TOKEN_X) == "X"
    assert cfg.mint_for(LiquidityPair.TOKEN_Y) == "Y"
    assert cfg.mint_for(LiquidityPair.TOKEN_X.opposite) == "Y"


def test_config_errors_are_pool_guard_errors() -> None:
    with pytest.raises(PoolGuardError) as exc_info:
        PoolConfig(seed=1, mint_x="X", mint_y="X", fee_bps=30)
    assert exc_info.value.code == "InvalidPoolConfig"
