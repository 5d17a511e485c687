"""
Values -- closed enumerations of the ledger domain.

Responsibility:
    Defines the account types, the entry sides, and the normal-balance
    polarity that every other layer matches on.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Imported by models/, selectors/,
    services/ and reporting.

Invariants enforced:
    - The account type and entry side sets are closed.  Code that matches on
      them does so exhaustively and raises on an unmapped member, so adding a
      member is a deliberate decision rather than a silently ignored string.
"""

from enum import Enum


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts.

    Declaration order is the report display order.
    """

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    @property
    def sort_key(self) -> int:
        return _ACCOUNT_TYPE_ORDER[self]

    @classmethod
    def parse(cls, value: "AccountType | str") -> "AccountType":
        """Accept a member or its name in any case; ValueError otherwise."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


_ACCOUNT_TYPE_ORDER: dict[AccountType, int] = {
    t: i for i, t in enumerate(AccountType)
}


class EntrySide(str, Enum):
    """Which side of the transaction a ledger entry is on.

    Amount is always positive; side determines sign convention.
    """

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class NormalBalance(str, Enum):
    """Side on which an account's balance increases."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
