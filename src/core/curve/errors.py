"""Exception types for the constant-product curve and the pool program.

Every curve failure carries a ``kind`` (``CurveErrorKind``) so callers that
prefer result objects can report a stable string instead of a class name.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class CurveErrorKind(Enum):
    ZERO_BALANCE = "ZeroBalance"
    INVALID_PRECISION = "InvalidPrecision"
    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    INVALID_FEE_AMOUNT = "InvalidFeeAmount"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    SLIPPAGE_LIMIT_EXCEEDED = "SlippageLimitExceeded"


class AmmError(Exception):
    """Base class for every error raised by this package."""

    code: str = "AmmError"


class CurveError(AmmError):
    """Raised when a curve calculation or operation cannot be completed."""

    kind: CurveErrorKind

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.kind.value


class ZeroBalanceError(CurveError):
    kind = CurveErrorKind.ZERO_BALANCE


class InvalidPrecisionError(CurveError):
    kind = CurveErrorKind.INVALID_PRECISION


class CurveOverflowError(CurveError):
    kind = CurveErrorKind.OVERFLOW


class CurveUnderflowError(CurveError):
    kind = CurveErrorKind.UNDERFLOW


class InvalidFeeAmountError(CurveError):
    kind = CurveErrorKind.INVALID_FEE_AMOUNT


class InsufficientBalanceError(CurveError):
    kind = CurveErrorKind.INSUFFICIENT_BALANCE


class SlippageLimitExceededError(CurveError):
    kind = CurveErrorKind.SLIPPAGE_LIMIT_EXCEEDED


class PoolGuardError(AmmError):
    """Raised when a pool-level precondition (lock, expiry, authority) fails."""

    code = "PoolGuard"


class PoolLockedError(PoolGuardError):
    code = "PoolLocked"


class RequestExpiredError(PoolGuardError):
    code = "RequestExpired"


class InvalidAuthorityError(PoolGuardError):
    code = "InvalidAuthority"


class NoAuthoritySetError(PoolGuardError):
    code = "NoAuthoritySet"


class PoolNotFoundError(PoolGuardError):
    code = "PoolNotFound"


class PoolExistsError(PoolGuardError):
    code = "PoolExists"


class InvalidPoolConfigError(PoolGuardError, ValueError):
    code = "InvalidPoolConfig"
