"""
Reporting Module Service (``ledger_modules.reporting.service``).

Responsibility
--------------
Orchestrates report generation -- trial balance, income statement,
balance sheet and the single-account balance -- by bridging the kernel
``LedgerSelector`` to the pure transformation functions in
``statements.py``.  This is a **read-only** service.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``ReportingService`` is the sole public
entry point for report generation.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the ledger.
* Tenant-scoped -- every query filters on the requesting client.
* Only active accounts appear on statements.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.

Failure modes
-------------
* Invalid report parameters (end_date < start_date) -> ``ValueError``
  raised before query execution.
* ``AccountNotFoundError`` / ``TenantAccessError`` from
  ``account_balance``.
* Selector query failure -> exception propagates (read-only, nothing to
  roll back).
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.balance import evaluate_account_balance
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.values import AccountType
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    AccountBalanceResult,
    BalanceSheetReport,
    IncomeStatementReport,
    ReportMetadata,
    ReportPeriod,
    ReportType,
    TrialBalanceReport,
)
from ledger_modules.reporting.statements import (
    build_balance_sheet,
    build_income_statement,
    build_trial_balance,
    render_to_dict,
)

logger = get_logger("modules.reporting.service")

BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
INCOME_STATEMENT_TYPES = (AccountType.REVENUE, AccountType.EXPENSE)


class ReportingService:
    """
    Report generation service.

    Contract
    --------
    * Every public method returns a typed report DTO.
    * All methods are **read-only**.
    * ``as_of`` defaults to today according to the injected clock.

    Guarantees
    ----------
    * Report generation delegates to pure transformation functions in
      ``statements.py``; no financial logic lives in this class.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(session)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _build_metadata(self, report_type: ReportType, client_id: UUID) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        return ReportMetadata(
            report_type=report_type,
            client_id=client_id,
            entity_name=self._config.entity_name,
            currency=self._config.default_currency,
            generated_at=self._clock.now().isoformat(),
        )

    # =========================================================================
    # Public API
    # =========================================================================

    def trial_balance(
        self,
        client_id: UUID,
        as_of: date | None = None,
    ) -> TrialBalanceReport:
        """
        Generate a trial balance.

        Args:
            client_id: Requesting tenant.
            as_of: Include transactions dated on or before this day.

        Returns:
            TrialBalanceReport with column totals and the balanced flag.
        """
        as_of = as_of or self._clock.today()
        rows = self._ledger.activity(client_id, end_date=as_of)

        report = build_trial_balance(
            rows,
            self._config,
            self._build_metadata(ReportType.TRIAL_BALANCE, client_id),
            as_of,
        )

        logger.info(
            "trial_balance_generated",
            extra={
                "client_id": str(client_id),
                "as_of_date": as_of.isoformat(),
                "line_count": len(report.balances),
                "is_balanced": report.is_balanced,
            },
        )
        return report

    def income_statement(
        self,
        client_id: UUID,
        start_date: date,
        end_date: date,
    ) -> IncomeStatementReport:
        """
        Generate an income statement for an inclusive date window.

        Raises:
            ValueError: If end_date is before start_date.
        """
        if start_date is None or end_date is None:
            raise ValueError("start_date and end_date are both required")
        if end_date < start_date:
            raise ValueError(
                f"end_date {end_date.isoformat()} is before start_date "
                f"{start_date.isoformat()}"
            )

        rows = self._ledger.activity(
            client_id,
            account_types=INCOME_STATEMENT_TYPES,
            start_date=start_date,
            end_date=end_date,
        )

        report = build_income_statement(
            rows,
            self._config,
            self._build_metadata(ReportType.INCOME_STATEMENT, client_id),
            ReportPeriod(start_date=start_date, end_date=end_date),
        )

        logger.info(
            "income_statement_generated",
            extra={
                "client_id": str(client_id),
                "period_start": start_date.isoformat(),
                "period_end": end_date.isoformat(),
                "net_income": str(report.net_income),
            },
        )
        return report

    def balance_sheet(
        self,
        client_id: UUID,
        as_of: date | None = None,
    ) -> BalanceSheetReport:
        """
        Generate a balance sheet.

        Args:
            client_id: Requesting tenant.
            as_of: Include transactions dated on or before this day.

        Returns:
            BalanceSheetReport with A = L + E verification.
        """
        as_of = as_of or self._clock.today()
        rows = self._ledger.activity(
            client_id,
            account_types=BALANCE_SHEET_TYPES,
            end_date=as_of,
        )

        earnings_rows = []
        if self._config.include_current_earnings:
            earnings_rows = self._ledger.activity(
                client_id,
                account_types=INCOME_STATEMENT_TYPES,
                end_date=as_of,
            )

        report = build_balance_sheet(
            rows,
            self._config,
            self._build_metadata(ReportType.BALANCE_SHEET, client_id),
            as_of,
            earnings_rows,
        )

        logger.info(
            "balance_sheet_generated",
            extra={
                "client_id": str(client_id),
                "as_of_date": as_of.isoformat(),
                "total_assets": str(report.totals.assets),
                "total_l_and_e": str(report.totals.liabilities_and_equity),
                "is_balanced": report.is_balanced,
            },
        )
        return report

    def account_balance(
        self,
        client_id: UUID,
        account_id: UUID | str,
    ) -> AccountBalanceResult:
        """
        All-time balance of one account, signed by its normal polarity.

        Raises:
            AccountNotFoundError: No such account.
            TenantAccessError: The account belongs to another tenant.
        """
        row = self._ledger.account_activity(client_id, account_id)
        return AccountBalanceResult(
            account_id=row.account_id,
            account_code=row.account_code,
            account_name=row.account_name,
            account_type=row.account_type,
            balance=evaluate_account_balance(row.account_type, row.entries),
        )

    def to_dict(self, report: object) -> dict:
        """Render a report as a camelCase dict with fixed-point money strings."""
        return render_to_dict(report, self._config.display_precision)
