"""
Balance -- the pure balance evaluator.

Responsibility:
    Maps a sequence of (amount, side) pairs and an account's normal-balance
    polarity to one signed Decimal balance.  Used by the single-account
    balance query and by every financial statement.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Callers filter the
    entry set (by account, by as-of cutoff, by date window) before calling.

Invariants enforced:
    - Exact Decimal accumulation.  Nothing is rounded here; rounding to two
      places happens only when a report is rendered.
    - Exhaustive matching on AccountType and EntrySide: an unmapped member
      raises instead of being silently skipped.

Sign convention:
    DEBIT-normal (ASSET, EXPENSE):               +debit  -credit
    CREDIT-normal (LIABILITY, EQUITY, REVENUE):  +credit -debit
    A positive result means the account carries its expected balance.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ledger_kernel.domain.values import AccountType, EntrySide, NormalBalance

ZERO = Decimal("0")


def normal_balance_for(account_type: AccountType) -> NormalBalance:
    """Return the side on which ``account_type`` increases."""
    match AccountType(account_type):
        case AccountType.ASSET | AccountType.EXPENSE:
            return NormalBalance.DEBIT
        case AccountType.LIABILITY | AccountType.EQUITY | AccountType.REVENUE:
            return NormalBalance.CREDIT
    raise ValueError(f"Unmapped account type: {account_type!r}")


def _signed(amount: Decimal, side: EntrySide, normal: NormalBalance) -> Decimal:
    match EntrySide(side):
        case EntrySide.DEBIT:
            return amount if normal == NormalBalance.DEBIT else -amount
        case EntrySide.CREDIT:
            return amount if normal == NormalBalance.CREDIT else -amount
    raise ValueError(f"Unmapped entry side: {side!r}")


def evaluate_balance(
    normal_balance: NormalBalance,
    entries: Iterable[tuple[Decimal, EntrySide]],
) -> Decimal:
    """
    Compute the signed balance of one account.

    Args:
        normal_balance: The account's polarity.
        entries: (amount, side) pairs; amounts are positive Decimals.

    Returns:
        The balance, positive when the account has its normal direction.
    """
    balance = ZERO
    for amount, side in entries:
        balance += _signed(amount, side, normal_balance)
    return balance


def evaluate_account_balance(
    account_type: AccountType,
    entries: Iterable[tuple[Decimal, EntrySide]],
) -> Decimal:
    """Shorthand for ``evaluate_balance(normal_balance_for(type), entries)``."""
    return evaluate_balance(normal_balance_for(account_type), entries)


def side_totals(
    entries: Iterable[tuple[Decimal, EntrySide]],
) -> tuple[Decimal, Decimal]:
    """Return ``(sum of debits, sum of credits)``."""
    debits = ZERO
    credits = ZERO
    for amount, side in entries:
        match EntrySide(side):
            case EntrySide.DEBIT:
                debits += amount
            case EntrySide.CREDIT:
                credits += amount
            case _:
                raise ValueError(f"Unmapped entry side: {side!r}")
    return debits, credits
