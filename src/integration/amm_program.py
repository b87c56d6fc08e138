"""
In-memory pool host around the constant-product curve (imperative shell).

`AmmProgram` plays the role of the on-chain instruction handlers:
- keeps pool configs, token balances (wallets + vaults) and LP holdings,
- checks lock / expiration / authority / non-zero preconditions,
- builds a `ConstantProduct` from the current vault balances, runs exactly one
  curve operation, and only on success moves tokens and mints/burns LP.

Reserves are always read from the vault accounts, so the swap fee (which the
curve leaves out of its priced input) stays in the vault and is priced in from
the next operation on.

Every read-compute-apply sequence on a pool runs under that pool's lock;
token movements additionally take the ledger lock because wallets are shared
across pools. Lock order is always pool lock, then ledger lock.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from ..core.curve import ConstantProduct, DepositOutcome, LiquidityPair, SwapOutcome, TokenAmounts, WithdrawOutcome
from ..core.curve.errors import (
    AmmError,
    InsufficientBalanceError,
    PoolExistsError,
    PoolNotFoundError,
)
from ..state.balances import Amount, BalanceTable, MintId, PubKey
from ..state.lp import LPTable
from ..state.pools import PoolConfig, PoolState, compute_pool_id
from .config import AmmConfig
from .guards import (
    require_non_zero,
    require_not_expired,
    require_not_locked,
    require_update_authority,
    require_valid_fee,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def _system_clock() -> int:
    return int(time.time())


@unique
class InstructionKind(Enum):
    INITIALIZE = "initialize"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    SWAP = "swap"
    LOCK = "lock"
    UNLOCK = "unlock"


@dataclass(frozen=True)
class Instruction:
    """One program call. Fields not used by `kind` keep their defaults."""

    kind: InstructionKind
    signer: PubKey
    pool_id: str = ""
    # initialize
    seed: int = 0
    mint_x: MintId = ""
    mint_y: MintId = ""
    fee_bps: Optional[int] = None
    authority: Optional[PubKey] = None
    # deposit / withdraw
    shares: int = 0
    max_x: int = 0
    max_y: int = 0
    min_x: int = 0
    min_y: int = 0
    # swap
    pair: LiquidityPair = LiquidityPair.TOKEN_X
    amount_in: int = 0
    min_amount_out: int = 0
    # deposit / withdraw / swap
    expiration: int = 0


@dataclass(frozen=True)
class ProgramResult:
    ok: bool
    outcome: Any = None
    error: Optional[str] = None
    message: Optional[str] = None


class AmmProgram:
    """Constant-product pools over an in-memory ledger."""

    def __init__(self, config: AmmConfig = AmmConfig(), *, clock: Optional[Clock] = None) -> None:
        self.config = config
        self.balances = BalanceTable()
        self.lp_balances = LPTable()
        self._clock: Clock = clock or _system_clock
        self._pools: Dict[str, PoolState] = {}
        self._pool_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._ledger_lock = threading.RLock()

    # -- Pool registry -------------------------------------------------------

    @contextmanager
    def _locked_pool(self, pool_id: str) -> Iterator[PoolState]:
        with self._registry_lock:
            pool_lock = self._pool_locks.get(pool_id)
        if pool_lock is None:
            raise PoolNotFoundError(f"unknown pool: {pool_id}")
        with pool_lock:
            yield self._pools[pool_id]

    def pool(self, pool_id: str) -> PoolState:
        """Copy of the current pool record."""
        with self._locked_pool(pool_id) as pool:
            return replace(pool, config=replace(pool.config))

    def pool_ids(self) -> Tuple[str, ...]:
        with self._registry_lock:
            return tuple(sorted(self._pools))

    def reserves(self, pool_id: str) -> TokenAmounts:
        with self._locked_pool(pool_id) as pool:
            return self._read_reserves(pool)

    def _read_reserves(self, pool: PoolState) -> TokenAmounts:
        vault = pool.vault_authority
        with self._ledger_lock:
            return TokenAmounts(
                token_x=self.balances.get(vault, pool.config.mint_x),
                token_y=self.balances.get(vault, pool.config.mint_y),
            )

    def _curve(self, pool: PoolState, reserves: TokenAmounts) -> ConstantProduct:
        return ConstantProduct(
            reserves.token_x,
            reserves.token_y,
            pool.lp_supply,
            pool.config.fee_bps,
            pool.config.precision_digits,
        )

    def _require_not_expired(self, expiration: int) -> None:
        if self.config.enforce_expiration:
            require_not_expired(expiration, self._clock())

    def _require_funds(self, owner: PubKey, *debits: Tuple[MintId, Amount]) -> None:
        for mint, amount in debits:
            held = self.balances.get(owner, mint)
            if held < amount:
                raise InsufficientBalanceError(f"{owner} holds {held} of {mint}, needs {amount}")

    # -- Instructions --------------------------------------------------------

    def mint_to(self, owner: PubKey, mint: MintId, amount: Amount) -> None:
        """Credit tokens to a wallet (faucet for tests and demos)."""
        require_non_zero(amount)
        with self._ledger_lock:
            self.balances.credit(owner, mint, amount)

    def initialize(
        self,
        *,
        seed: int,
        mint_x: MintId,
        mint_y: MintId,
        fee_bps: Optional[int] = None,
        authority: Optional[PubKey] = None,
    ) -> str:
        fee = self.config.default_fee_bps if fee_bps is None else fee_bps
        require_valid_fee(fee)
        pool_id = compute_pool_id(seed)
        config = PoolConfig(
            seed=seed,
            mint_x=mint_x,
            mint_y=mint_y,
            fee_bps=fee,
            authority=authority,
            precision_digits=self.config.precision_digits,
        )
        with self._registry_lock:
            if pool_id in self._pools:
                raise PoolExistsError(f"pool already exists for seed {seed}")
            self._pools[pool_id] = PoolState(pool_id=pool_id, config=config, created_at=self._clock())
            self._pool_locks[pool_id] = threading.Lock()

        logger.info("pool %s created: mints=(%s, %s) fee_bps=%d", pool_id, mint_x, mint_y, fee)
        return pool_id

    def deposit(
        self,
        pool_id: str,
        owner: PubKey,
        *,
        shares: int,
        max_x: int,
        max_y: int,
        expiration: int,
    ) -> DepositOutcome:
        """
        Deposit both assets for `shares` new LP shares.

        An empty pool (no LP supply, both vaults empty) takes `max_x` and
        `max_y` as-is and mints `max(max_x, max_y)` shares; otherwise the
        curve computes the proportional amounts and checks them against the
        maximums.
        """
        with self._locked_pool(pool_id) as pool:
            require_not_locked(pool.config)
            self._require_not_expired(expiration)
            require_non_zero(shares, max_x, max_y)

            reserves = self._read_reserves(pool)
            if pool.lp_supply == 0 and reserves.token_x == 0 and reserves.token_y == 0:
                _, outcome = ConstantProduct.bootstrap(
                    max_x, max_y, pool.config.fee_bps, pool.config.precision_digits
                )
            else:
                outcome = self._curve(pool, reserves).deposit_liquidity(shares, max_x, max_y)
                # A ratio that floors to zero would mint shares for nothing.
                require_non_zero(outcome.deposited_x, outcome.deposited_y)

            mint_x, mint_y = pool.config.mint_x, pool.config.mint_y
            vault = pool.vault_authority
            with self._ledger_lock:
                self._require_funds(owner, (mint_x, outcome.deposited_x), (mint_y, outcome.deposited_y))
                self.balances.transfer(mint_x, owner, vault, outcome.deposited_x)
                self.balances.transfer(mint_y, owner, vault, outcome.deposited_y)
                self.lp_balances.mint(owner, pool_id, outcome.minted_shares)
                pool.lp_supply += outcome.minted_shares

        logger.debug(
            "deposit pool=%s owner=%s x=%d y=%d minted=%d",
            pool_id, owner, outcome.deposited_x, outcome.deposited_y, outcome.minted_shares,
        )
        return outcome

    def withdraw(
        self,
        pool_id: str,
        owner: PubKey,
        *,
        shares: int,
        min_x: int,
        min_y: int,
        expiration: int,
    ) -> WithdrawOutcome:
        """Burn `shares` LP shares for a proportional part of both vaults."""
        with self._locked_pool(pool_id) as pool:
            require_not_locked(pool.config)
            self._require_not_expired(expiration)
            require_non_zero(shares)

            held = self.lp_balances.get(owner, pool_id)
            if held < shares:
                raise InsufficientBalanceError(f"{owner} holds {held} LP shares, needs {shares}")

            reserves = self._read_reserves(pool)
            outcome = self._curve(pool, reserves).withdraw_liquidity(shares, min_x, min_y)

            vault = pool.vault_authority
            with self._ledger_lock:
                self.lp_balances.burn(owner, pool_id, outcome.burned_shares)
                self.balances.transfer(pool.config.mint_x, vault, owner, outcome.withdrawn_x)
                self.balances.transfer(pool.config.mint_y, vault, owner, outcome.withdrawn_y)
                pool.lp_supply -= outcome.burned_shares

        logger.debug(
            "withdraw pool=%s owner=%s x=%d y=%d burned=%d",
            pool_id, owner, outcome.withdrawn_x, outcome.withdrawn_y, outcome.burned_shares,
        )
        return outcome

    def quote_swap(self, pool_id: str, pair: LiquidityPair, amount_in: int) -> SwapOutcome:
        with self._locked_pool(pool_id) as pool:
            return self._curve(pool, self._read_reserves(pool)).quote_swap(pair, amount_in)

    def swap(
        self,
        pool_id: str,
        owner: PubKey,
        *,
        pair: LiquidityPair,
        amount_in: int,
        min_amount_out: int,
        expiration: int,
    ) -> SwapOutcome:
        """Pay `amount_in` of `pair` into the pool; receive the other asset."""
        with self._locked_pool(pool_id) as pool:
            require_non_zero(amount_in)
            require_not_locked(pool.config)
            self._require_not_expired(expiration)

            curve = self._curve(pool, self._read_reserves(pool))
            outcome = curve.swap(pair, amount_in, min_amount_out)
            require_non_zero(outcome.deposited, outcome.withdrawn)

            mint_in, mint_out = pool.config.mint_for(pair), pool.config.mint_for(pair.opposite)
            vault = pool.vault_authority
            with self._ledger_lock:
                self._require_funds(owner, (mint_in, outcome.deposited))
                self.balances.transfer(mint_in, owner, vault, outcome.deposited)
                self.balances.transfer(mint_out, vault, owner, outcome.withdrawn)

        logger.debug(
            "swap pool=%s owner=%s in=%d %s out=%d %s fee=%d",
            pool_id, owner, outcome.deposited, mint_in, outcome.withdrawn, mint_out, outcome.fee,
        )
        return outcome

    def lock(self, pool_id: str, signer: PubKey) -> None:
        self._set_locked(pool_id, signer, True)

    def unlock(self, pool_id: str, signer: PubKey) -> None:
        self._set_locked(pool_id, signer, False)

    def _set_locked(self, pool_id: str, signer: PubKey, locked: bool) -> None:
        with self._locked_pool(pool_id) as pool:
            require_update_authority(pool.config, signer)
            pool.config.locked = locked
        logger.info("pool %s %s by %s", pool_id, "locked" if locked else "unlocked", signer)

    # -- Dispatch ------------------------------------------------------------

    def _dispatch(self, ix: Instruction) -> Any:
        if ix.kind is InstructionKind.INITIALIZE:
            return self.initialize(
                seed=ix.seed, mint_x=ix.mint_x, mint_y=ix.mint_y, fee_bps=ix.fee_bps, authority=ix.authority
            )
        if ix.kind is InstructionKind.DEPOSIT:
            return self.deposit(
                ix.pool_id, ix.signer, shares=ix.shares, max_x=ix.max_x, max_y=ix.max_y, expiration=ix.expiration
            )
        if ix.kind is InstructionKind.WITHDRAW:
            return self.withdraw(
                ix.pool_id, ix.signer, shares=ix.shares, min_x=ix.min_x, min_y=ix.min_y, expiration=ix.expiration
            )
        if ix.kind is InstructionKind.SWAP:
            return self.swap(
                ix.pool_id,
                ix.signer,
                pair=ix.pair,
                amount_in=ix.amount_in,
                min_amount_out=ix.min_amount_out,
                expiration=ix.expiration,
            )
        if ix.kind is InstructionKind.LOCK:
            return self.lock(ix.pool_id, ix.signer)
        if ix.kind is InstructionKind.UNLOCK:
            return self.unlock(ix.pool_id, ix.signer)
        raise ValueError(f"unknown instruction kind: {ix.kind}")

    def process(self, ix: Instruction) -> ProgramResult:
        """
        Run one instruction and report the result instead of raising.

        Only `AmmError`s become rejections; anything else propagates.
        """
        try:
            outcome = self._dispatch(ix)
        except AmmError as exc:
            logger.warning("rejected %s on pool %s: %s: %s", ix.kind.value, ix.pool_id or "-", exc.code, exc)
            return ProgramResult(ok=False, error=exc.code, message=str(exc))
        return ProgramResult(ok=True, outcome=outcome)
