"""
Validation -- pure admission checks for proposed transactions.

Responsibility:
    Implements the checks that need no database: structure (entry count,
    amounts, sides, description), tenant-ownership comparison of the
    referenced account ids against the ids the tenant actually owns, and the
    fundamental double-entry invariant (sum of debits = sum of credits).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  The
    TransactionAdmissionValidator service runs these in order, doing the one
    tenant-scoped account lookup between the structural and balance checks.

Invariants enforced:
    - At least two entries; every amount > 0 and expressible in minor units;
      every side DEBIT or CREDIT.
    - Every referenced account is owned by the requesting tenant, otherwise
      the WHOLE transaction is rejected.
    - Every referenced account is active.
    - |debits - credits| <= tolerance.  Amounts are exact minor units, so the
      default tolerance is 0: debits must equal credits exactly.

Failure modes:
    - InvalidStructureError (INVALID_STRUCTURE)
    - UnknownAccountError (UNKNOWN_ACCOUNT)
    - InactiveAccountError (ACCOUNT_INACTIVE)
    - UnbalancedTransactionError (UNBALANCED), carrying both totals.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping
from uuid import UUID

from ledger_kernel.db.types import MONEY_DECIMAL_PLACES, format_money, to_decimal, to_minor_units
from ledger_kernel.domain.balance import side_totals
from ledger_kernel.domain.dtos import AdmittedEntry, AdmittedTransaction, ProposedTransaction
from ledger_kernel.domain.values import EntrySide
from ledger_kernel.exceptions import (
    InactiveAccountError,
    InvalidStructureError,
    UnbalancedTransactionError,
    UnknownAccountError,
)

DEFAULT_BALANCE_TOLERANCE = Decimal("0")
MIN_ENTRIES = 2


def _coerce_side(value: object, index: int) -> EntrySide:
    if isinstance(value, EntrySide):
        return value
    if isinstance(value, str):
        try:
            return EntrySide(value.strip().upper())
        except ValueError:
            pass
    raise InvalidStructureError(f"side must be DEBIT or CREDIT, got {value!r}", index)


def _coerce_amount(value: object, index: int) -> Decimal:
    try:
        amount = to_decimal(value)  # type: ignore[arg-type]
    except ValueError as exc:
        raise InvalidStructureError(str(exc), index) from exc
    if amount <= 0:
        raise InvalidStructureError(f"amount must be positive, got {amount}", index)
    try:
        to_minor_units(amount, MONEY_DECIMAL_PLACES)
    except ValueError as exc:
        raise InvalidStructureError(str(exc), index) from exc
    return amount


def _coerce_account_id(value: object, index: int) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise InvalidStructureError(f"account id is not a UUID: {value!r}", index) from exc


def validate_structure(proposal: ProposedTransaction) -> AdmittedTransaction:
    """
    Checks 1 and 2: entry count, then each entry's amount and side.

    Returns the proposal coerced into an AdmittedTransaction whose totals are
    filled in; the balance has NOT been checked yet.

    Raises:
        InvalidStructureError: On the first structural problem found.
    """
    entries = tuple(proposal.entries or ())
    if len(entries) < MIN_ENTRIES:
        raise InvalidStructureError(
            f"at least {MIN_ENTRIES} entries required, got {len(entries)}"
        )

    admitted: list[AdmittedEntry] = []
    for index, entry in enumerate(entries):
        amount = _coerce_amount(entry.amount, index)
        side = _coerce_side(entry.side, index)
        account_id = _coerce_account_id(entry.account_id, index)
        admitted.append(AdmittedEntry(account_id=account_id, amount=amount, side=side))

    if not isinstance(proposal.transaction_date, date):
        raise InvalidStructureError(
            f"transaction date must be a date, got {proposal.transaction_date!r}"
        )

    description = (proposal.description or "").strip()
    if not description:
        raise InvalidStructureError("description must not be empty")

    reference = proposal.reference.strip() if proposal.reference else None

    debits, credits = side_totals((e.amount, e.side) for e in admitted)
    return AdmittedTransaction(
        transaction_date=proposal.transaction_date,
        description=description,
        entries=tuple(admitted),
        reference=reference or None,
        total_debits=debits,
        total_credits=credits,
    )


def validate_account_ownership(
    requested: Iterable[UUID],
    owned: Iterable[UUID],
) -> None:
    """
    Check 3: every requested account id must be among the tenant's accounts.

    ``owned`` is the result of a tenant-scoped lookup of ``requested``; an id
    that is missing there is either nonexistent or foreign, and the two are
    deliberately indistinguishable to the caller.

    Raises:
        UnknownAccountError: Listing the unresolved ids, sorted.
    """
    owned_set = set(owned)
    missing = sorted({str(a) for a in requested if a not in owned_set})
    if missing:
        raise UnknownAccountError(missing)


def validate_accounts_active(activity: Mapping[UUID, bool]) -> None:
    """
    Check 3b: none of the (owned) accounts may be deactivated.

    ``activity`` maps account id to its is_active flag.

    Raises:
        InactiveAccountError: Listing the inactive ids, sorted.
    """
    inactive = sorted(str(a) for a, is_active in activity.items() if not is_active)
    if inactive:
        raise InactiveAccountError(inactive)


def is_balanced(
    debits: Decimal,
    credits: Decimal,
    tolerance: Decimal = DEFAULT_BALANCE_TOLERANCE,
) -> bool:
    """True when the two sums differ by no more than ``tolerance``."""
    return abs(debits - credits) <= tolerance


def validate_balance(
    admitted: AdmittedTransaction,
    tolerance: Decimal = DEFAULT_BALANCE_TOLERANCE,
) -> None:
    """
    Check 4: the double-entry invariant.

    Raises:
        UnbalancedTransactionError: With both computed totals.
    """
    if not is_balanced(admitted.total_debits, admitted.total_credits, tolerance):
        raise UnbalancedTransactionError(
            debits=format_money(admitted.total_debits),
            credits=format_money(admitted.total_credits),
        )
