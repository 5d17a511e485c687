"""
Pure statement transformation functions.

These functions transform per-account activity into structured reports.
ZERO I/O. ZERO side effects.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the ledger_kernel/domain/ purity convention:
- No database access
- No clock access (generation time arrives inside ReportMetadata)
- Deterministic: same inputs always produce same outputs

Every per-account figure comes from the kernel balance evaluator; nothing
here re-implements debit/credit polarity.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ledger_kernel.db.types import format_money
from ledger_kernel.domain.balance import (
    evaluate_account_balance,
    evaluate_balance,
    normal_balance_for,
)
from ledger_kernel.domain.values import AccountType, NormalBalance
from ledger_kernel.selectors.ledger_selector import AccountActivity
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheetLine,
    BalanceSheetReport,
    BalanceSheetTotals,
    IncomeStatementLine,
    IncomeStatementReport,
    IncomeStatementTotals,
    ReportMetadata,
    ReportPeriod,
    TrialBalanceLine,
    TrialBalanceReport,
    TrialBalanceTotals,
)

ZERO = Decimal("0")

CURRENT_EARNINGS_NAME = "Current Year Earnings"


# =========================================================================
# Helpers
# =========================================================================


def display_order(rows: Iterable[AccountActivity]) -> list[AccountActivity]:
    """
    Sort accounts by type (declaration order of AccountType), then code.

    Codes compare as strings, so "1000" < "200".
    """
    return sorted(rows, key=lambda r: (r.account_type.sort_key, r.account_code))


def split_into_columns(
    balance: Decimal,
    normal_balance: NormalBalance,
) -> tuple[Decimal, Decimal]:
    """
    Place a signed balance into (debit, credit) columns.

    A positive balance sits in the account's normal column; a negative one
    sits, as its magnitude, in the opposite column.  The other column is zero.
    """
    match normal_balance:
        case NormalBalance.DEBIT:
            return (balance, ZERO) if balance >= 0 else (ZERO, -balance)
        case NormalBalance.CREDIT:
            return (ZERO, balance) if balance >= 0 else (-balance, ZERO)
    raise ValueError(f"Unmapped normal balance: {normal_balance!r}")


def _within(diff: Decimal, tolerance: Decimal) -> bool:
    return abs(diff) < tolerance


def compute_current_earnings(rows: Iterable[AccountActivity]) -> Decimal:
    """
    Cumulative revenue minus expense, each by its own normal polarity.

    Rows of other types are ignored.
    """
    earnings = ZERO
    for row in rows:
        match row.account_type:
            case AccountType.REVENUE:
                earnings += evaluate_account_balance(row.account_type, row.entries)
            case AccountType.EXPENSE:
                earnings -= evaluate_account_balance(row.account_type, row.entries)
            case AccountType.ASSET | AccountType.LIABILITY | AccountType.EQUITY:
                continue
    return earnings


# =========================================================================
# 1. TRIAL BALANCE
# =========================================================================


def build_trial_balance(
    rows: Iterable[AccountActivity],
    config: ReportingConfig,
    metadata: ReportMetadata,
    as_of: date,
) -> TrialBalanceReport:
    """Build a trial balance from every account's activity up to ``as_of``."""
    lines: list[TrialBalanceLine] = []
    for row in display_order(rows):
        balance = evaluate_account_balance(row.account_type, row.entries)
        if not config.include_zero_balances and balance == ZERO:
            continue

        debit, credit = split_into_columns(balance, normal_balance_for(row.account_type))
        lines.append(
            TrialBalanceLine(
                account_id=row.account_id,
                code=row.account_code,
                name=row.account_name,
                account_type=row.account_type,
                debit_balance=debit,
                credit_balance=credit,
            )
        )

    total_debits = sum((line.debit_balance for line in lines), ZERO)
    total_credits = sum((line.credit_balance for line in lines), ZERO)

    return TrialBalanceReport(
        metadata=metadata,
        as_of=as_of,
        balances=tuple(lines),
        totals=TrialBalanceTotals(
            debits=total_debits,
            credits=total_credits,
            balanced=_within(total_debits - total_credits, config.balance_tolerance),
        ),
    )


# =========================================================================
# 2. INCOME STATEMENT
# =========================================================================


def build_income_statement(
    rows: Iterable[AccountActivity],
    config: ReportingConfig,
    metadata: ReportMetadata,
    period: ReportPeriod,
) -> IncomeStatementReport:
    """
    Build a single-step income statement from activity inside ``period``.

    Each line is |credits - debits| for the window.  Rows that are neither
    REVENUE nor EXPENSE are ignored.
    """
    revenues: list[IncomeStatementLine] = []
    expenses: list[IncomeStatementLine] = []

    for row in display_order(rows):
        amount = abs(evaluate_balance(NormalBalance.CREDIT, row.entries))
        if not config.include_zero_balances and amount == ZERO:
            continue

        line = IncomeStatementLine(
            account_id=row.account_id,
            code=row.account_code,
            name=row.account_name,
            amount=amount,
        )
        match row.account_type:
            case AccountType.REVENUE:
                revenues.append(line)
            case AccountType.EXPENSE:
                expenses.append(line)
            case AccountType.ASSET | AccountType.LIABILITY | AccountType.EQUITY:
                continue

    total_revenue = sum((line.amount for line in revenues), ZERO)
    total_expense = sum((line.amount for line in expenses), ZERO)

    return IncomeStatementReport(
        metadata=metadata,
        period=period,
        revenues=tuple(revenues),
        expenses=tuple(expenses),
        totals=IncomeStatementTotals(
            revenue=total_revenue,
            expense=total_expense,
            net_income=total_revenue - total_expense,
        ),
    )


# =========================================================================
# 3. BALANCE SHEET
# =========================================================================


def build_balance_sheet(
    rows: Iterable[AccountActivity],
    config: ReportingConfig,
    metadata: ReportMetadata,
    as_of: date,
    earnings_rows: Iterable[AccountActivity] = (),
) -> BalanceSheetReport:
    """
    Build a balance sheet from activity up to ``as_of``.

    ``rows`` supplies the ASSET, LIABILITY and EQUITY accounts.
    ``earnings_rows`` supplies the REVENUE and EXPENSE accounts; when
    ``config.include_current_earnings`` is set, their net result is shown as
    a synthetic equity line so that an un-closed ledger still satisfies
    A = L + E.
    """
    sections: dict[AccountType, list[BalanceSheetLine]] = {
        AccountType.ASSET: [],
        AccountType.LIABILITY: [],
        AccountType.EQUITY: [],
    }

    for row in display_order(rows):
        if row.account_type not in sections:
            continue
        balance = evaluate_account_balance(row.account_type, row.entries)
        if not config.include_zero_balances and balance == ZERO:
            continue
        sections[row.account_type].append(
            BalanceSheetLine(
                account_id=row.account_id,
                code=row.account_code,
                name=row.account_name,
                amount=balance,
            )
        )

    if config.include_current_earnings:
        earnings = compute_current_earnings(earnings_rows)
        if config.include_zero_balances or earnings != ZERO:
            sections[AccountType.EQUITY].append(
                BalanceSheetLine(
                    account_id=None,
                    code=None,
                    name=CURRENT_EARNINGS_NAME,
                    amount=earnings,
                )
            )

    total_assets = sum((line.amount for line in sections[AccountType.ASSET]), ZERO)
    total_liabilities = sum((line.amount for line in sections[AccountType.LIABILITY]), ZERO)
    total_equity = sum((line.amount for line in sections[AccountType.EQUITY]), ZERO)
    total_l_and_e = total_liabilities + total_equity

    return BalanceSheetReport(
        metadata=metadata,
        as_of=as_of,
        assets=tuple(sections[AccountType.ASSET]),
        liabilities=tuple(sections[AccountType.LIABILITY]),
        equity=tuple(sections[AccountType.EQUITY]),
        totals=BalanceSheetTotals(
            assets=total_assets,
            liabilities=total_liabilities,
            equity=total_equity,
            liabilities_and_equity=total_l_and_e,
            balanced=_within(total_assets - total_l_and_e, config.balance_tolerance),
        ),
    )


# =========================================================================
# 4. RENDERER (dict/JSON output)
# =========================================================================


def to_camel_case(name: str) -> str:
    """``net_income`` -> ``netIncome``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def render_to_dict(
    obj: object,
    precision: int = 2,
) -> dict | list | str | int | bool | None:
    """
    Convert any report dataclass to a plain dict for JSON serialization.

    Handles:
    - Decimal -> fixed-point string rounded to ``precision`` ("10000.00")
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts with camelCase keys
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, Decimal):
        return format_money(obj, precision)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item, precision) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v, precision) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            to_camel_case(f.name): render_to_dict(getattr(obj, f.name), precision)
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int)):
        return obj
    return str(obj)
