"""
LedgerSelector: per-account activity aggregation (no stored balances).
"""

from datetime import date
from decimal import Decimal

import pytest

from ledger_kernel.domain.values import AccountType
from ledger_kernel.exceptions import TenantAccessError
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_kernel.services.account_service import AccountService


@pytest.fixture
def ledger(session) -> LedgerSelector:
    return LedgerSelector(session)


@pytest.fixture
def activity_data(client, chart, post):
    post(
        client.client_id,
        [(chart["1000"], "1000.00", "DEBIT"), (chart["3000"], "1000.00", "CREDIT")],
        transaction_date=date(2025, 1, 1),
    )
    post(
        client.client_id,
        [(chart["6000"], "300.00", "DEBIT"), (chart["1000"], "300.00", "CREDIT")],
        transaction_date=date(2025, 2, 1),
    )


class TestActivity:

    def test_every_active_account_listed(self, ledger, client, chart, activity_data):
        rows = ledger.activity(client.client_id)
        assert len(rows) == 15
        assert [r.account_code for r in rows] == sorted(chart)

    def test_totals_per_side(self, ledger, client, activity_data):
        cash = next(r for r in ledger.activity(client.client_id) if r.account_code == "1000")
        assert cash.debit_total == Decimal("1000.00")
        assert cash.credit_total == Decimal("300.00")
        assert cash.account_type == AccountType.ASSET

    def test_untouched_account_has_zero_totals(self, ledger, client, activity_data):
        ar = next(r for r in ledger.activity(client.client_id) if r.account_code == "1100")
        assert ar.debit_total == Decimal("0")
        assert ar.credit_total == Decimal("0")

    def test_as_of_cutoff(self, ledger, client, activity_data):
        rows = ledger.activity(client.client_id, end_date=date(2025, 1, 31))
        cash = next(r for r in rows if r.account_code == "1000")
        assert cash.credit_total == Decimal("0")

    def test_window(self, ledger, client, activity_data):
        rows = ledger.activity(
            client.client_id,
            account_types=[AccountType.EXPENSE],
            start_date=date(2025, 2, 1),
            end_date=date(2025, 2, 28),
        )
        assert {r.account_type for r in rows} == {AccountType.EXPENSE}
        rent = next(r for r in rows if r.account_code == "6000")
        assert rent.debit_total == Decimal("300.00")

    def test_inactive_excluded(self, session, ledger, client, chart, activity_data):
        AccountService(session).deactivate_account(client.client_id, chart["6000"].account_id)
        codes = [r.account_code for r in ledger.activity(client.client_id)]
        assert "6000" not in codes
        all_codes = [r.account_code for r in ledger.activity(client.client_id, active_only=False)]
        assert "6000" in all_codes

    def test_other_tenant_entries_not_counted(self, ledger, other_client, other_chart, activity_data):
        rows = ledger.activity(other_client.client_id)
        assert all(r.debit_total == 0 and r.credit_total == 0 for r in rows)


class TestAccountActivity:

    def test_inactive_account_still_answered(self, session, ledger, client, chart, activity_data):
        AccountService(session).deactivate_account(client.client_id, chart["6000"].account_id)
        row = ledger.account_activity(client.client_id, chart["6000"].account_id)
        assert row.debit_total == Decimal("300.00")

    def test_foreign_account_denied(self, ledger, chart, other_client):
        with pytest.raises(TenantAccessError):
            ledger.account_activity(other_client.client_id, chart["1000"].account_id)


class TestAccountOwnership:

    def test_owned_activity(self, session, client, chart, other_chart):
        AccountService(session).deactivate_account(client.client_id, chart["6300"].account_id)
        owned = AccountSelector(session).owned_activity(
            client.client_id,
            [
                chart["1000"].account_id,
                chart["6300"].account_id,
                other_chart["1000"].account_id,
            ],
        )
        assert owned == {chart["1000"].account_id: True, chart["6300"].account_id: False}

    def test_owned_activity_of_nothing(self, session, client):
        assert AccountSelector(session).owned_activity(client.client_id, []) == {}
