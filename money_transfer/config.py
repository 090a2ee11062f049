"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

import decimal
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MoneyTransferConfig(BaseSettings):
    """Money transfer configuration"""
    
    # Decimal arithmetic
    decimal_precision: int = 28  # Significant digits for the global decimal context
    rounding: str = "ROUND_HALF_UP"  # Used when rescaling to currency digits
    default_currency: str = "USD"
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout
    
    @field_validator("rounding")
    @classmethod
    def _known_rounding(cls, value: str) -> str:
        value = value.upper()
        if not value.startswith("ROUND_") or not hasattr(decimal, value):
            raise ValueError(f"Unknown rounding mode: {value}")
        return value
    
    @field_validator("default_currency")
    @classmethod
    def _currency_code(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError(f"Invalid currency code: {value}")
        return value
    
    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value
    
    @field_validator("decimal_precision")
    @classmethod
    def _positive_precision(cls, value: int) -> int:
        if value < 1:
            raise ValueError("decimal_precision must be positive")
        return value
    
    model_config = SettingsConfigDict(
        env_prefix="MONEY_TRANSFER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global configuration instance
config = MoneyTransferConfig()


def get_config() -> MoneyTransferConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> MoneyTransferConfig:
    """Reload configuration from environment"""
    global config
    config = MoneyTransferConfig()
    return config
