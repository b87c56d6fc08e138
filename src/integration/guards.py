"""
Pool-level preconditions checked by the host before it touches the curve.

Each function returns None when the condition holds and raises a typed error
otherwise. None of them depend on curve math.
"""

from __future__ import annotations

from typing import Optional

from ..core.curve.errors import (
    InvalidAuthorityError,
    NoAuthoritySetError,
    PoolLockedError,
    RequestExpiredError,
    ZeroBalanceError,
)
from ..core.fees import validate_fee_bps
from ..state.pools import PoolConfig


def require_non_zero(*values: int) -> None:
    if any(v == 0 for v in values):
        raise ZeroBalanceError(f"amounts must be non-zero: {values}")


def require_not_locked(config: PoolConfig) -> None:
    if config.locked:
        raise PoolLockedError(f"pool with seed {config.seed} is locked")


def require_not_expired(expiration: int, now: int) -> None:
    """Reject requests whose deadline (unix seconds) is already in the past."""
    if now > expiration:
        raise RequestExpiredError(f"request expired at {expiration} (now {now})")


def require_update_authority(config: PoolConfig, signer: Optional[str]) -> None:
    """
    Only the configured authority may change a pool's config.

    A pool created without an authority can never be changed.
    """
    if config.authority is None:
        raise NoAuthoritySetError(f"pool with seed {config.seed} has no update authority")
    if signer != config.authority:
        raise InvalidAuthorityError(f"{signer!r} is not the pool authority")


def require_valid_fee(fee_bps: int) -> None:
    validate_fee_bps(fee_bps)
