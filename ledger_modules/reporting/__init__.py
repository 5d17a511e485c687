"""
Ledger Reporting Module (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that generates reports from the ledger: trial balance,
single-step income statement, balance sheet and single-account balance.

Architecture position
---------------------
**Modules layer** -- pure read-only service.  Does NOT post transactions.
All statement arithmetic is implemented as pure functions in
``statements.py``.

Invariants enforced
-------------------
* No transactions are created by this module (read-only guarantee).
* Statement computations derive entirely from ledger entries -- there
  are no stored balances.
"""

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    AccountBalanceResult,
    BalanceSheetLine,
    BalanceSheetReport,
    BalanceSheetTotals,
    IncomeStatementLine,
    IncomeStatementReport,
    IncomeStatementTotals,
    ReportMetadata,
    ReportPeriod,
    ReportType,
    TrialBalanceLine,
    TrialBalanceReport,
    TrialBalanceTotals,
)
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import render_to_dict

__all__ = [
    # Service
    "ReportingService",
    "render_to_dict",
    # Config
    "ReportingConfig",
    # Models
    "ReportType",
    "ReportMetadata",
    "ReportPeriod",
    "TrialBalanceLine",
    "TrialBalanceTotals",
    "TrialBalanceReport",
    "IncomeStatementLine",
    "IncomeStatementTotals",
    "IncomeStatementReport",
    "BalanceSheetLine",
    "BalanceSheetTotals",
    "BalanceSheetReport",
    "AccountBalanceResult",
]
