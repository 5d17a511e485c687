"""
Structured logging: record layout, ledger event trails, context binding.
"""

import json
import logging
import threading
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from ledger_kernel.domain.values import AccountType
from ledger_kernel.exceptions import UnbalancedTransactionError, UnknownAccountError
from ledger_kernel.logging_config import (
    LogContext,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def json_log():
    """Configure the ledger handler on a buffer; returns a reader of parsed lines."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    def _read() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return _read


def _one(records: list[dict], message: str) -> dict:
    matching = [r for r in records if r["message"] == message]
    assert len(matching) == 1, [r["message"] for r in records]
    return matching[0]


class TestRecordLayout:

    def test_tenant_and_transaction_always_present(self, json_log):
        get_logger("services.account").info("account_created")

        record = _one(json_log(), "account_created")
        assert record["logger"] == "ledger_kernel.services.account"
        assert record["level"] == "INFO"
        assert record["client_id"] is None
        assert record["transaction_id"] is None
        assert "correlation_id" not in record
        assert "traceback" not in record

    def test_extra_fills_unbound_tenant(self, json_log):
        get_logger("services.account").warning(
            "account_code_conflict", extra={"client_id": "tenant-a", "account_code": "1000"},
        )
        record = _one(json_log(), "account_code_conflict")
        assert record["client_id"] == "tenant-a"
        assert record["account_code"] == "1000"

    def test_bound_tenant_wins_over_extra(self, json_log):
        with LogContext.bind(client_id="tenant-a"):
            get_logger("test").info("chart_of_accounts_seeded", extra={"client_id": "tenant-b"})
        assert _one(json_log(), "chart_of_accounts_seeded")["client_id"] == "tenant-a"

    def test_ledger_values_serialised(self, json_log):
        account_id = uuid4()
        get_logger("test").info(
            "balance_validated",
            extra={
                "account_id": account_id,
                "total_debits": Decimal("250.00"),
                "transaction_date": date(2025, 1, 15),
                "account_type": AccountType.REVENUE,
            },
        )
        record = _one(json_log(), "balance_validated")
        assert record["account_id"] == str(account_id)
        assert record["total_debits"] == "250.00"
        assert record["transaction_date"] == "2025-01-15"
        assert record["account_type"] == "REVENUE"

    def test_ledger_error_flattened_without_traceback(self, json_log):
        try:
            raise UnbalancedTransactionError(debits="100.00", credits="99.00")
        except UnbalancedTransactionError:
            get_logger("test").warning("transaction_rejected", exc_info=True)

        record = _one(json_log(), "transaction_rejected")
        assert record["exc_type"] == "UnbalancedTransactionError"
        assert record["exc_code"] == "UNBALANCED"
        assert record["exc_debits"] == "100.00"
        assert record["exc_credits"] == "99.00"
        assert "traceback" not in record

    def test_unexpected_error_keeps_traceback(self, json_log):
        try:
            raise RuntimeError("connection reset")
        except RuntimeError:
            get_logger("test").error("transaction_post_failed", exc_info=True)

        record = _one(json_log(), "transaction_post_failed")
        assert record["exc_type"] == "RuntimeError"
        assert record["exc_message"] == "connection reset"
        assert "exc_code" not in record
        assert "RuntimeError: connection reset" in record["traceback"]

    def test_below_level_dropped(self):
        stream = StringIO()
        configure_logging(level="WARNING", stream=stream)
        get_logger("test").info("transaction_posted")
        get_logger("test").warning("transaction_rejected")
        messages = [json.loads(line)["message"] for line in stream.getvalue().splitlines()]
        assert messages == ["transaction_rejected"]


class TestPostingTrail:

    def test_posted_record(self, client, chart, post, json_log):
        posted = post(
            client.client_id,
            [(chart["1000"], "250.00", "DEBIT"), (chart["4000"], "250.00", "CREDIT")],
        )

        records = json_log()
        started = _one(records, "transaction_post_started")
        done = _one(records, "transaction_posted")
        assert started["client_id"] == done["client_id"] == str(client.client_id)
        assert started["transaction_id"] is None
        assert done["transaction_id"] == str(posted.transaction_id)
        assert done["correlation_id"] == started["correlation_id"]
        assert done["total_debits"] == "250.00"
        assert done["entry_count"] == 2

    def test_rejected_record(self, client, chart, post, json_log):
        with pytest.raises(UnbalancedTransactionError):
            post(client.client_id, [(chart["1000"], "100", "DEBIT"), (chart["4000"], "99", "CREDIT")])

        rejected = _one(json_log(), "transaction_rejected")
        assert rejected["level"] == "WARNING"
        assert rejected["client_id"] == str(client.client_id)
        assert rejected["transaction_id"] is None
        assert rejected["reason_code"] == rejected["exc_code"] == "UNBALANCED"
        assert (rejected["exc_debits"], rejected["exc_credits"]) == ("100.00", "99.00")
        assert "traceback" not in rejected

    def test_unknown_accounts_listed(self, client, chart, other_chart, post, json_log):
        foreign = other_chart["1000"].account_id
        with pytest.raises(UnknownAccountError):
            post(client.client_id, [(foreign, "5.00", "DEBIT"), (chart["4000"], "5.00", "CREDIT")])

        rejected = _one(json_log(), "transaction_rejected")
        assert rejected["exc_code"] == "UNKNOWN_ACCOUNT"
        assert rejected["exc_account_ids"] == [str(foreign)]

    def test_context_released_after_post(self, client, chart, post, json_log):
        post(client.client_id, [(chart["1000"], "1.00", "DEBIT"), (chart["4000"], "1.00", "CREDIT")])
        assert LogContext.get_all() == {}


class TestLogContext:

    def test_bind_nests_and_restores(self):
        with LogContext.bind(client_id="tenant-a", correlation_id="req-1"):
            with LogContext.bind(transaction_id="txn-1"):
                assert LogContext.get_all() == {
                    "client_id": "tenant-a",
                    "correlation_id": "req-1",
                    "transaction_id": "txn-1",
                }
            assert "transaction_id" not in LogContext.get_all()
        assert LogContext.get_all() == {}

    def test_restored_when_block_raises(self):
        with pytest.raises(UnbalancedTransactionError):
            with LogContext.bind(client_id="tenant-a"):
                raise UnbalancedTransactionError(debits="1.00", credits="2.00")
        assert LogContext.get_all() == {}

    def test_ids_stored_as_strings(self):
        client_id = uuid4()
        LogContext.set(client_id=client_id, actor_id=None)
        assert LogContext.get_all() == {"client_id": str(client_id)}

    def test_unknown_field_refused(self):
        with pytest.raises(ValueError):
            LogContext.set(tenant="tenant-a")

    def test_threads_do_not_share_bindings(self):
        seen = {}
        LogContext.set(client_id="tenant-a")

        worker = threading.Thread(target=lambda: seen.update(LogContext.get_all()))
        worker.start()
        worker.join()

        assert seen == {}
        assert LogContext.get_all() == {"client_id": "tenant-a"}


class TestConfigureLogging:

    def test_only_first_call_attaches(self):
        configure_logging(stream=StringIO())
        configure_logging(stream=StringIO(), level="DEBUG")
        root = logging.getLogger("ledger_kernel")
        assert len(root.handlers) == 1
        assert root.level == logging.INFO
        assert root.propagate is False

    def test_reset_allows_reconfiguration(self):
        configure_logging(stream=StringIO())
        reset_logging()
        assert logging.getLogger("ledger_kernel").handlers == []
        configure_logging(stream=StringIO(), level="ERROR")
        assert logging.getLogger("ledger_kernel").level == logging.ERROR
