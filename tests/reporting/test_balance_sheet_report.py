"""
Integration tests for Balance Sheet and single-account balance.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from ledger_kernel.domain.values import AccountType
from ledger_kernel.exceptions import AccountNotFoundError, TenantAccessError
from ledger_kernel.services.account_service import AccountService
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import CURRENT_EARNINGS_NAME


@pytest.fixture
def books(client, chart, post):
    """Capital, an equipment purchase on credit, a sale and rent."""
    post(
        client.client_id,
        [(chart["1000"], "10000.00", "DEBIT"), (chart["3000"], "10000.00", "CREDIT")],
        transaction_date=date(2025, 1, 1),
    )
    post(
        client.client_id,
        [(chart["1500"], "3000.00", "DEBIT"), (chart["2100"], "3000.00", "CREDIT")],
        transaction_date=date(2025, 1, 5),
    )
    post(
        client.client_id,
        [(chart["1000"], "800.00", "DEBIT"), (chart["4000"], "800.00", "CREDIT")],
        transaction_date=date(2025, 1, 20),
    )
    post(
        client.client_id,
        [(chart["6000"], "500.00", "DEBIT"), (chart["1000"], "500.00", "CREDIT")],
        transaction_date=date(2025, 1, 31),
    )


class TestBalanceSheetIntegration:

    def test_totals(self, reporting_service, client, books):
        report = reporting_service.balance_sheet(client.client_id, as_of=date(2025, 12, 31))
        assert report.totals.assets == Decimal("13300.00")
        assert report.totals.liabilities == Decimal("3000.00")
        assert report.totals.equity == Decimal("10300.00")
        assert report.totals.liabilities_and_equity == Decimal("13300.00")
        assert report.is_balanced

    def test_current_earnings_line(self, reporting_service, client, books):
        report = reporting_service.balance_sheet(client.client_id, as_of=date(2025, 12, 31))
        earnings = next(l for l in report.equity if l.name == CURRENT_EARNINGS_NAME)
        assert earnings.amount == Decimal("300.00")

    def test_only_balance_sheet_accounts(self, reporting_service, client, books):
        report = reporting_service.balance_sheet(client.client_id, as_of=date(2025, 12, 31))
        assert [l.code for l in report.assets] == ["1000", "1100", "1200", "1500"]
        assert [l.code for l in report.liabilities] == ["2000", "2100"]
        assert [l.code for l in report.equity] == ["3000", "3100", None]

    def test_as_of(self, reporting_service, client, books):
        report = reporting_service.balance_sheet(client.client_id, as_of=date(2025, 1, 1))
        assert report.totals.assets == Decimal("10000.00")
        assert report.is_balanced

    def test_without_current_earnings(self, session, deterministic_clock, client, books):
        service = ReportingService(
            session, clock=deterministic_clock,
            config=ReportingConfig(include_current_earnings=False),
        )
        report = service.balance_sheet(client.client_id, as_of=date(2025, 12, 31))
        assert report.totals.equity == Decimal("10000.00")
        assert report.is_balanced is False

    def test_to_dict(self, reporting_service, client, books):
        result = reporting_service.to_dict(
            reporting_service.balance_sheet(client.client_id, as_of=date(2025, 12, 31))
        )
        assert result["totals"]["liabilitiesAndEquity"] == "13300.00"
        assert result["totals"]["balanced"] is True
        assert result["asOf"] == "2025-12-31"


class TestAccountBalance:

    def test_all_time_balance(self, reporting_service, client, chart, books):
        result = reporting_service.account_balance(client.client_id, chart["1000"].account_id)
        assert result.account_code == "1000"
        assert result.account_name == "Cash"
        assert result.account_type == AccountType.ASSET
        assert result.balance == Decimal("10300.00")

    def test_credit_normal_balance(self, reporting_service, client, chart, books):
        result = reporting_service.account_balance(client.client_id, chart["2100"].account_id)
        assert result.balance == Decimal("3000.00")

    def test_untouched_account(self, reporting_service, client, chart):
        result = reporting_service.account_balance(client.client_id, chart["1100"].account_id)
        assert result.balance == Decimal("0")

    def test_inactive_account_still_reported(self, session, reporting_service, client, chart, books):
        AccountService(session).deactivate_account(client.client_id, chart["6000"].account_id)
        result = reporting_service.account_balance(client.client_id, chart["6000"].account_id)
        assert result.balance == Decimal("500.00")

    def test_missing_account(self, reporting_service, client):
        with pytest.raises(AccountNotFoundError):
            reporting_service.account_balance(client.client_id, uuid4())

    def test_foreign_account(self, reporting_service, chart, other_client):
        with pytest.raises(TenantAccessError):
            reporting_service.account_balance(other_client.client_id, chart["1000"].account_id)

    def test_to_dict_shape(self, reporting_service, client, chart, books):
        result = reporting_service.to_dict(
            reporting_service.account_balance(client.client_id, chart["1000"].account_id)
        )
        assert result == {
            "accountId": str(chart["1000"].account_id),
            "accountCode": "1000",
            "accountName": "Cash",
            "accountType": "ASSET",
            "balance": "10300.00",
        }
