# [TESTER] v1

from __future__ import annotations

import pytest

from src.core.curve import InvalidFeeAmountError, InvalidPrecisionError
from src.integration.config import AmmConfig


def test_defaults() -> None:
    cfg = AmmConfig()
    assert (cfg.precision_digits, cfg.default_fee_bps, cfg.enforce_expiration) == (6, 30, True)


def test_invalid_values_rejected() -> None:
    with pytest.raises(InvalidPrecisionError):
        AmmConfig(precision_digits=10)
    with pytest.raises(InvalidFeeAmountError):
        AmmConfig(default_fee_bps=10_001)
    with pytest.raises(TypeError):
        AmmConfig(enforce_expiration="yes")  # type: ignore[arg-type]


def test_from_yaml(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("precision_digits: 4\ndefault_fee_bps: 5\nenforce_expiration: false\n", encoding="utf-8")
    assert AmmConfig.from_yaml(path) == AmmConfig(precision_digits=4, default_fee_bps=5, enforce_expiration=False)


def test_from_yaml_empty_file(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("", encoding="utf-8")
    assert AmmConfig.from_yaml(path) == AmmConfig()


def test_from_yaml_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("fee: 30\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown AmmConfig keys: fee"):
        AmmConfig.from_yaml(path)


def test_from_yaml_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        AmmConfig.from_yaml(path)


def test_from_env_overrides_base(monkeypatch) -> None:
    monkeypatch.setenv("AMM_PRECISION_DIGITS", "3")
    monkeypatch.setenv("AMM_ENFORCE_EXPIRATION", "off")
    monkeypatch.delenv("AMM_DEFAULT_FEE_BPS", raising=False)
    cfg = AmmConfig.from_env(AmmConfig(default_fee_bps=50))
    assert cfg == AmmConfig(precision_digits=3, default_fee_bps=50, enforce_expiration=False)


def test_from_env_rejects_non_int(monkeypatch) -> None:
    monkeypatch.setenv("AMM_DEFAULT_FEE_BPS", "thirty")
    with pytest.raises(ValueError, match="AMM_DEFAULT_FEE_BPS"):
        AmmConfig.from_env()


def test_unrecognised_bool_keeps_default(monkeypatch) -> None:
    monkeypatch.setenv("AMM_ENFORCE_EXPIRATION", "maybe")
    assert AmmConfig.from_env().enforce_expiration is True
