"""
Configuration Management Module

Provides centralized configuration using pydantic-settings. Every field has
a default, so the application runs without any environment variables.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class PocketBankConfig(BaseSettings):
    """Pocket Bank configuration"""

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    # Business rules configuration
    annual_interest_rate: str = "0.05"
    days_in_year: int = 365
    initial_exchange_rate: str = "1.0"
    max_day_count: int = 2 ** 32 - 1

    class Config:
        env_prefix = "POCKET_BANK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = PocketBankConfig()


def get_config() -> PocketBankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> PocketBankConfig:
    """Reload configuration from environment"""
    global config
    config = PocketBankConfig()
    return config
