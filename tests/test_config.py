"""
Test suite for configuration module

Tests defaults, environment overrides and validation of MoneyTransferConfig.
"""

import pytest
from pydantic import ValidationError

from money_transfer import config as config_module
from money_transfer.config import MoneyTransferConfig, get_config, reload_config


class TestMoneyTransferConfig:
    """Test MoneyTransferConfig settings"""

    def test_defaults(self, monkeypatch):
        """Test default values"""
        for name in ("DECIMAL_PRECISION", "ROUNDING", "DEFAULT_CURRENCY", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(f"MONEY_TRANSFER_{name}", raising=False)
        settings = MoneyTransferConfig(_env_file=None)
        assert settings.decimal_precision == 28
        assert settings.rounding == "ROUND_HALF_UP"
        assert settings.default_currency == "USD"
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file is None

    def test_environment_override(self, monkeypatch):
        """Test MONEY_TRANSFER_ prefixed variables are read"""
        monkeypatch.setenv("MONEY_TRANSFER_ROUNDING", "round_half_even")
        monkeypatch.setenv("MONEY_TRANSFER_LOG_FORMAT", "TEXT")
        monkeypatch.setenv("MONEY_TRANSFER_DECIMAL_PRECISION", "34")
        settings = MoneyTransferConfig(_env_file=None)
        assert settings.rounding == "ROUND_HALF_EVEN"
        assert settings.log_format == "text"
        assert settings.decimal_precision == 34

    def test_invalid_values(self):
        """Test validation of rounding, format and precision"""
        with pytest.raises(ValidationError):
            MoneyTransferConfig(_env_file=None, rounding="ROUND_SIDEWAYS")
        with pytest.raises(ValidationError):
            MoneyTransferConfig(_env_file=None, rounding="getcontext")
        with pytest.raises(ValidationError):
            MoneyTransferConfig(_env_file=None, log_format="xml")
        with pytest.raises(ValidationError):
            MoneyTransferConfig(_env_file=None, decimal_precision=0)

    def test_reload_config(self, monkeypatch):
        """Test reload_config replaces the global instance"""
        original = get_config()
        try:
            monkeypatch.setenv("MONEY_TRANSFER_DEFAULT_CURRENCY", "JPY")
            reloaded = reload_config()
            assert reloaded is get_config()
            assert reloaded.default_currency == "JPY"
        finally:
            config_module.config = original
        assert get_config() is original

    def test_default_currency_normalized(self):
        """Test the default currency code is upper-cased and checked"""
        assert MoneyTransferConfig(_env_file=None, default_currency=" jpy").default_currency == "JPY"
        with pytest.raises(ValidationError):
            MoneyTransferConfig(_env_file=None, default_currency="US")
