#!/usr/bin/env python3
"""
Seed the database with a demo client and a handful of business transactions.

Creates the schema, creates "Demo Company Inc.", seeds the standard chart
of accounts, posts the demo transactions through PostingService, and
prints the resulting trial balance.

Usage:
    python3 scripts/seed_data.py
    python3 scripts/seed_data.py --database-url sqlite:///ledger.db
    python3 scripts/seed_data.py --config path/to/ledger.yaml --drop
"""

import argparse
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------
DEMO_CLIENT = {
    "name": "Demo Company Inc.",
    "email": "demo@example.com",
    "phone": "555-0100",
    "address": "123 Demo Street, Demo City, DC 12345",
}

# (date, description, reference, [(account code, side, amount), ...])
DEMO_TRANSACTIONS = [
    (
        date(2025, 1, 1), "Initial capital investment", "INV-001",
        [("1000", "DEBIT", "10000.00"), ("3000", "CREDIT", "10000.00")],
    ),
    (
        date(2025, 1, 5), "Office equipment purchase", "PO-1001",
        [("1500", "DEBIT", "2500.00"), ("1000", "CREDIT", "2500.00")],
    ),
    (
        date(2025, 1, 10), "Inventory bought on account", "BILL-2001",
        [("1200", "DEBIT", "1800.00"), ("2000", "CREDIT", "1800.00")],
    ),
    (
        date(2025, 1, 15), "Consulting services invoiced", "INV-002",
        [("1100", "DEBIT", "3200.00"), ("4100", "CREDIT", "3200.00")],
    ),
    (
        date(2025, 1, 20), "Cash sale of goods", "RCPT-3001",
        [
            ("1000", "DEBIT", "1500.00"),
            ("4000", "CREDIT", "1500.00"),
            ("5000", "DEBIT", "900.00"),
            ("1200", "CREDIT", "900.00"),
        ],
    ),
    (
        date(2025, 1, 31), "January rent", "RENT-JAN",
        [("6000", "DEBIT", "1200.00"), ("1000", "CREDIT", "1200.00")],
    ),
    (
        date(2025, 1, 31), "January utilities", "UTIL-JAN",
        [("6100", "DEBIT", "185.40"), ("1000", "CREDIT", "185.40")],
    ),
]


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the ledger with demo data")
    parser.add_argument("--config", help="Settings YAML (default: LEDGER_CONFIG or packaged defaults)")
    parser.add_argument("--database-url", help="Override the configured database url")
    parser.add_argument("--drop", action="store_true", help="Drop all tables before seeding")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from ledger_config import get_active_settings, load_chart_of_accounts
    from ledger_kernel.db.engine import LedgerDatabase
    from ledger_kernel.domain.clock import SystemClock
    from ledger_kernel.domain.dtos import ProposedEntry, ProposedTransaction
    from ledger_kernel.exceptions import LedgerKernelError
    from ledger_kernel.logging_config import configure_logging
    from ledger_kernel.services.account_service import AccountService
    from ledger_kernel.services.client_service import ClientService
    from ledger_kernel.services.posting_service import PostingService
    from ledger_modules.reporting.config import ReportingConfig
    from ledger_modules.reporting.service import ReportingService

    settings = get_active_settings(args.config)
    configure_logging(level=settings.log_level)

    # -----------------------------------------------------------------
    # 1. Connect + schema
    # -----------------------------------------------------------------
    print()
    print("  [1/5] Connecting to the database...")
    url = args.database_url or settings.database_url
    db = LedgerDatabase.from_url(
        url,
        echo=settings.echo,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
    )

    print("  [2/5] Creating schema...")
    if args.drop:
        db.drop_tables()
    db.create_tables()

    session = db.session()
    try:
        # -------------------------------------------------------------
        # 3. Client + chart of accounts
        # -------------------------------------------------------------
        print(f"  [3/5] Creating client {DEMO_CLIENT['name']!r} and chart of accounts...")
        client = ClientService(session).create_client(**DEMO_CLIENT)
        chart = load_chart_of_accounts(settings.chart_of_accounts)
        accounts = AccountService(session).seed_chart_of_accounts(
            client.client_id, [a.as_dict() for a in chart],
        )
        session.commit()
        by_code = {a.code: a.account_id for a in accounts}
        print(f"        {len(accounts)} accounts created")

        # -------------------------------------------------------------
        # 4. Demo transactions
        # -------------------------------------------------------------
        print(f"  [4/5] Posting {len(DEMO_TRANSACTIONS)} transactions...")
        posting = PostingService.from_settings(session, settings)
        for txn_date, description, reference, lines in DEMO_TRANSACTIONS:
            proposal = ProposedTransaction(
                transaction_date=txn_date,
                description=description,
                reference=reference,
                entries=tuple(
                    ProposedEntry(account_id=by_code[code], amount=Decimal(amount), side=side)
                    for code, side, amount in lines
                ),
            )
            posted = posting.post_transaction(client.client_id, proposal)
            print(f"        {reference:<10} {description:<32} {posted.total_debits:>10}")

        # -------------------------------------------------------------
        # 5. Trial balance
        # -------------------------------------------------------------
        print("  [5/5] Trial balance as of 2025-01-31:")
        reporting = ReportingService(
            session,
            clock=SystemClock(),
            config=ReportingConfig.from_dict(settings.reporting),
        )
        report = reporting.trial_balance(client.client_id, as_of=date(2025, 1, 31))
        for line in report.balances:
            print(
                f"        {line.code:<6} {line.name:<24} "
                f"{line.debit_balance:>10} {line.credit_balance:>10}"
            )
        print(
            f"        {'':<6} {'TOTAL':<24} "
            f"{report.total_debits:>10} {report.total_credits:>10}"
            f"   {'BALANCED' if report.is_balanced else 'UNBALANCED'}"
        )
    except LedgerKernelError as exc:
        session.rollback()
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()
        db.dispose()

    print()
    print(f"  Client id: {client.client_id}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
