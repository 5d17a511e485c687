"""
Financial Reporting Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing report outputs: trial
balance, income statement, balance sheet and the single-account balance.

The field layout of each report mirrors its rendered dictionary:
``render_to_dict`` turns field names into camelCase keys, so a report's
``totals`` field becomes the ``"totals"`` object of the output.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``ReportingService`` and returned to callers.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.  Values are
  unrounded; rounding happens in ``render_to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ledger_kernel.domain.values import AccountType


class ReportType(str, Enum):
    """Types of ledger reports."""

    TRIAL_BALANCE = "trial_balance"
    INCOME_STATEMENT = "income_statement"
    BALANCE_SHEET = "balance_sheet"


# =========================================================================
# Report Metadata (common to all statements)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every statement."""

    report_type: ReportType
    client_id: UUID
    entity_name: str
    currency: str
    generated_at: str  # ISO format timestamp from injected clock


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date window of a period report."""

    start_date: date
    end_date: date


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class TrialBalanceLine:
    """
    One account in the trial balance.

    The signed balance appears in exactly one column; the other is zero.
    """

    account_id: UUID
    code: str
    name: str
    account_type: AccountType
    debit_balance: Decimal
    credit_balance: Decimal


@dataclass(frozen=True)
class TrialBalanceTotals:
    debits: Decimal
    credits: Decimal
    balanced: bool


@dataclass(frozen=True)
class TrialBalanceReport:
    """Complete trial balance report."""

    metadata: ReportMetadata
    as_of: date
    balances: tuple[TrialBalanceLine, ...]
    totals: TrialBalanceTotals

    @property
    def total_debits(self) -> Decimal:
        return self.totals.debits

    @property
    def total_credits(self) -> Decimal:
        return self.totals.credits

    @property
    def is_balanced(self) -> bool:
        return self.totals.balanced


# =========================================================================
# Income Statement
# =========================================================================


@dataclass(frozen=True)
class IncomeStatementLine:
    """Absolute activity of one revenue or expense account in the period."""

    account_id: UUID
    code: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeStatementTotals:
    revenue: Decimal
    expense: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class IncomeStatementReport:
    """
    Single-step income statement.

    Revenue - Expenses = Net Income (positive for profit).
    """

    metadata: ReportMetadata
    period: ReportPeriod
    revenues: tuple[IncomeStatementLine, ...]
    expenses: tuple[IncomeStatementLine, ...]
    totals: IncomeStatementTotals

    @property
    def net_income(self) -> Decimal:
        return self.totals.net_income


# =========================================================================
# Balance Sheet
# =========================================================================


@dataclass(frozen=True)
class BalanceSheetLine:
    """
    One account on the balance sheet, signed by its own normal polarity.

    The synthetic current-earnings line has no account id or code.
    """

    account_id: UUID | None
    code: str | None
    name: str
    amount: Decimal


@dataclass(frozen=True)
class BalanceSheetTotals:
    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    liabilities_and_equity: Decimal
    balanced: bool


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Unclassified balance sheet.

    Assets = Liabilities + Equity is reported, not enforced.
    """

    metadata: ReportMetadata
    as_of: date
    assets: tuple[BalanceSheetLine, ...]
    liabilities: tuple[BalanceSheetLine, ...]
    equity: tuple[BalanceSheetLine, ...]
    totals: BalanceSheetTotals

    @property
    def is_balanced(self) -> bool:
        return self.totals.balanced


# =========================================================================
# Single account
# =========================================================================


@dataclass(frozen=True)
class AccountBalanceResult:
    """All-time balance of one account, signed by its normal polarity."""

    account_id: UUID
    account_code: str
    account_name: str
    account_type: AccountType
    balance: Decimal
