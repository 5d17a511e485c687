"""
Integration tests for Trial Balance report generation.

Uses the real store with transactions posted through PostingService.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from ledger_kernel.services.account_service import AccountService


class TestTrialBalanceIntegration:
    """Integration tests for trial balance generation."""

    def test_fresh_chart_is_all_zero(self, reporting_service, client, chart):
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        assert len(report.balances) == 15
        assert report.total_debits == Decimal("0")
        assert report.is_balanced is True

    def test_posted_entry_appears(self, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["1000"], "10000.00", "DEBIT"), (chart["3000"], "10000.00", "CREDIT")],
            transaction_date=date(2025, 1, 1),
        )
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))

        lines = {l.code: l for l in report.balances}
        assert lines["1000"].debit_balance == Decimal("10000.00")
        assert lines["1000"].credit_balance == Decimal("0")
        assert lines["3000"].credit_balance == Decimal("10000.00")
        assert report.is_balanced is True

    def test_multiple_entries_aggregate(self, reporting_service, client, chart, post):
        for _ in range(3):
            post(
                client.client_id,
                [(chart["1000"], "5000.00", "DEBIT"), (chart["4000"], "5000.00", "CREDIT")],
            )
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        assert report.total_debits == Decimal("15000.00")
        assert report.total_credits == Decimal("15000.00")

    def test_ordered_by_type_then_code(self, reporting_service, client, chart):
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        assert [l.code for l in report.balances] == [
            "1000", "1100", "1200", "1500",
            "2000", "2100",
            "3000", "3100",
            "4000", "4100",
            "5000", "6000", "6100", "6200", "6300",
        ]

    def test_as_of_excludes_later_transactions(self, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["1000"], "10.00", "DEBIT"), (chart["4000"], "10.00", "CREDIT")],
            transaction_date=date(2025, 3, 1),
        )
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 2, 28))
        assert report.total_debits == Decimal("0")

    def test_as_of_is_inclusive(self, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["1000"], "10.00", "DEBIT"), (chart["4000"], "10.00", "CREDIT")],
            transaction_date=date(2025, 3, 1),
        )
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 3, 1))
        assert report.total_debits == Decimal("10.00")

    def test_default_as_of_is_clock_today(self, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["1000"], "10.00", "DEBIT"), (chart["4000"], "10.00", "CREDIT")],
            transaction_date=date(2025, 3, 1),
        )
        report = reporting_service.trial_balance(client.client_id)
        assert report.as_of == date(2024, 1, 1)
        assert report.total_debits == Decimal("0")

    def test_inactive_account_excluded(self, session, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["6300"], "40.00", "DEBIT"), (chart["1000"], "40.00", "CREDIT")],
        )
        AccountService(session).deactivate_account(client.client_id, chart["6300"].account_id)
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        assert "6300" not in [l.code for l in report.balances]

    def test_metadata(self, reporting_service, client, chart):
        report = reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        assert report.metadata.client_id == client.client_id
        assert report.metadata.generated_at == "2024-01-01T12:00:00+00:00"
        assert report.metadata.currency == "USD"

    def test_to_dict(self, reporting_service, client, chart, post):
        post(
            client.client_id,
            [(chart["1000"], "10000", "DEBIT"), (chart["3000"], "10000", "CREDIT")],
        )
        result = reporting_service.to_dict(
            reporting_service.trial_balance(client.client_id, as_of=date(2025, 12, 31))
        )
        assert result["totals"] == {"debits": "10000.00", "credits": "10000.00", "balanced": True}
        cash = next(b for b in result["balances"] if b["code"] == "1000")
        assert cash["debitBalance"] == "10000.00"
        assert cash["accountType"] == "ASSET"
