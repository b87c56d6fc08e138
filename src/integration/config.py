"""
Host configuration for the in-memory pool program.

Values come from (lowest to highest priority) dataclass defaults, a YAML file
(`AmmConfig.from_yaml`) and environment variables (`AmmConfig.from_env`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ..core.fees import validate_fee_bps
from ..core.curve.math import pow10_precision


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an int, got {raw!r}") from exc


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class AmmConfig:
    """
    Runtime config for `AmmProgram`.

    `precision_digits` is handed to the curve for ratio arithmetic (10**6 by
    default). `default_fee_bps` applies to `initialize` calls that omit a fee.
    With `enforce_expiration` off, request deadlines are not checked (useful
    for offline replays).
    """

    precision_digits: int = 6
    default_fee_bps: int = 30
    enforce_expiration: bool = True

    def __post_init__(self) -> None:
        pow10_precision(self.precision_digits)
        validate_fee_bps(self.default_fee_bps)
        if not isinstance(self.enforce_expiration, bool):
            raise TypeError("enforce_expiration must be a bool")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base: Optional["AmmConfig"] = None) -> "AmmConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown AmmConfig keys: {', '.join(unknown)}")
        return replace(base or cls(), **dict(data))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "AmmConfig":
        obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if obj is None:
            return cls()
        if not isinstance(obj, Mapping):
            raise TypeError("AMM config YAML must be a mapping")
        return cls.from_mapping(obj)

    @classmethod
    def from_env(cls, base: Optional["AmmConfig"] = None) -> "AmmConfig":
        base = base or cls()
        return cls(
            precision_digits=_env_int("AMM_PRECISION_DIGITS", base.precision_digits),
            default_fee_bps=_env_int("AMM_DEFAULT_FEE_BPS", base.default_fee_bps),
            enforce_expiration=_env_bool("AMM_ENFORCE_EXPIRATION", default=base.enforce_expiration),
        )
