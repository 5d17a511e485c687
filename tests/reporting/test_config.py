"""Tests for ReportingConfig."""

from decimal import Decimal

import pytest

from ledger_modules.reporting.config import ReportingConfig


class TestReportingConfig:

    def test_defaults(self):
        config = ReportingConfig.with_defaults()
        assert config.entity_name == "Company"
        assert config.default_currency == "USD"
        assert config.display_precision == 2
        assert config.include_zero_balances is True
        assert config.include_current_earnings is True
        assert config.balance_tolerance == Decimal("0.01")

    def test_from_dict(self):
        config = ReportingConfig.from_dict(
            {"entity_name": "Demo Company Inc.", "display_precision": 0, "balance_tolerance": 0.5}
        )
        assert config.entity_name == "Demo Company Inc."
        assert config.display_precision == 0
        assert config.balance_tolerance == Decimal("0.5")

    def test_unknown_key_rejected(self):
        with pytest.raises(TypeError):
            ReportingConfig.from_dict({"fiscal_year_end": "12-31"})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"display_precision": -1},
            {"default_currency": "DOLLARS"},
            {"balance_tolerance": Decimal("0")},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ReportingConfig(**kwargs)

    def test_frozen(self):
        config = ReportingConfig()
        with pytest.raises(AttributeError):
            config.entity_name = "Other"
