"""
Test suite for configuration module

Tests defaults and environment overrides of the pydantic-settings config.
"""

import pytest
from decimal import Decimal

from pocket_bank import config as config_module
from pocket_bank.config import PocketBankConfig, get_config, reload_config
from pocket_bank.session import Session


@pytest.fixture
def restore_config():
    yield
    reload_config()


class TestPocketBankConfig:
    """Test configuration defaults and overrides"""

    def test_defaults(self, monkeypatch):
        for name in ["LOG_LEVEL", "LOG_FORMAT", "LOG_FILE", "ANNUAL_INTEREST_RATE",
                     "DAYS_IN_YEAR", "INITIAL_EXCHANGE_RATE", "MAX_DAY_COUNT"]:
            monkeypatch.delenv(f"POCKET_BANK_{name}", raising=False)

        config = PocketBankConfig()

        assert config.log_level == "WARNING"
        assert config.log_format == "json"
        assert config.log_file is None
        assert Decimal(config.annual_interest_rate) == Decimal('0.05')
        assert config.days_in_year == 365
        assert Decimal(config.initial_exchange_rate) == Decimal('1.0')
        assert config.max_day_count == 4294967295

    def test_environment_override(self, monkeypatch, restore_config):
        monkeypatch.setenv("POCKET_BANK_ANNUAL_INTEREST_RATE", "0.12")
        monkeypatch.setenv("POCKET_BANK_LOG_LEVEL", "debug")

        config = reload_config()

        assert config is get_config()
        assert config is config_module.config
        assert config.annual_interest_rate == "0.12"
        assert config.log_level == "debug"

    def test_session_uses_initial_rate(self, monkeypatch):
        monkeypatch.setenv("POCKET_BANK_INITIAL_EXCHANGE_RATE", "2.5")

        session = Session(prompt=lambda _: "", output=lambda _="": None,
                          config=PocketBankConfig())

        assert session.rates.rate_of("EUR") == Decimal('2.5')
        assert session.rates.rate_of("PHP") == Decimal('1')
