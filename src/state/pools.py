"""
Pool configuration and state for constant-product pools.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional

from ..core.curve.errors import InvalidPoolConfigError
from ..core.curve.types import LiquidityPair
from ..core.fees import validate_fee_bps
from ..core.curve.math import U64_MAX, pow10_precision
from .balances import MintId, PubKey

POOL_ID_DOMAIN = b"CPAmmPool"
VAULT_AUTHORITY_DOMAIN = b"CPAmmVaultAuthority"
DEFAULT_PRECISION_DIGITS = 6


def compute_pool_id(seed: int) -> str:
    """
    Deterministically compute a pool_id from the pool's creation seed.

        pool_id = H("CPAmmPool" || le_u64(seed))
    """
    if not isinstance(seed, int) or isinstance(seed, bool) or not (0 <= seed <= U64_MAX):
        raise InvalidPoolConfigError(f"seed must be a u64: {seed!r}")
    return "0x" + hashlib.sha256(POOL_ID_DOMAIN + seed.to_bytes(8, "little")).hexdigest()


def compute_vault_authority(pool_id: str) -> PubKey:
    """Owner key of the pool's two vault accounts."""
    return "0x" + hashlib.sha256(VAULT_AUTHORITY_DOMAIN + pool_id.encode("utf-8")).hexdigest()


@dataclass
class PoolConfig:
    """
    Per-pool configuration.

    Attributes:
        seed: Creation seed (u64); determines pool_id
        mint_x: Mint of asset X
        mint_y: Mint of asset Y
        fee_bps: Swap fee in basis points (0-10000)
        authority: Optional key allowed to lock/unlock the pool
        locked: When True, deposit/withdraw/swap are rejected
        precision_digits: Digits of the ratio precision handed to the curve
    """
    seed: int
    mint_x: MintId
    mint_y: MintId
    fee_bps: int
    authority: Optional[PubKey] = None
    locked: bool = False
    precision_digits: int = DEFAULT_PRECISION_DIGITS

    def __post_init__(self):
        compute_pool_id(self.seed)
        if not self.mint_x or not self.mint_y:
            raise InvalidPoolConfigError("mints must be non-empty")
        if self.mint_x == self.mint_y:
            raise InvalidPoolConfigError(f"pool mints must differ: {self.mint_x}")
        validate_fee_bps(self.fee_bps)
        pow10_precision(self.precision_digits)

    def mint_for(self, pair: LiquidityPair) -> MintId:
        """Mint of the asset `pair` names."""
        return self.mint_x if pair is LiquidityPair.TOKEN_X else self.mint_y


@dataclass
class PoolState:
    """
    Pool record held by the host.

    Reserves are not stored here: they are the balances of the two vault
    accounts owned by `vault_authority`.
    """
    pool_id: str
    config: PoolConfig
    lp_supply: int = 0
    created_at: int = 0

    def __post_init__(self):
        if self.pool_id != compute_pool_id(self.config.seed):
            raise InvalidPoolConfigError(f"pool_id does not match seed {self.config.seed}")
        if self.lp_supply < 0:
            raise InvalidPoolConfigError(f"LP supply must be non-negative: {self.lp_supply}")

    @property
    def vault_authority(self) -> PubKey:
        return compute_vault_authority(self.pool_id)

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:16]}..., "
            f"mints=({self.config.mint_x}, {self.config.mint_y}), "
            f"fee_bps={self.config.fee_bps}, lp_supply={self.lp_supply}, "
            f"locked={self.config.locked})"
        )
