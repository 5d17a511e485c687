"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the ledger (HTTP handlers, CLI scripts, tests) must be able to
tell a malformed transaction from an unbalanced one from a store failure
without parsing message strings.  Every exception here therefore:

  1. Is a TYPED class (catch by type, not message)
  2. Carries a CODE class attribute (machine-readable, API-safe)
  3. Stores its context as attributes (not only in the message)

Example:
    try:
        posting.post_transaction(client_id, proposal)
    except UnbalancedTransactionError as e:
        return {"error": e.code, "debits": e.debits, "credits": e.credits}

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- TransactionError
    |   +-- InvalidStructureError
    |   +-- UnknownAccountError
    |   +-- InactiveAccountError
    |   +-- UnbalancedTransactionError
    |   +-- WriteFailureError
    |
    +-- NotFoundError
    |   +-- ClientNotFoundError
    |   +-- AccountNotFoundError
    |   +-- TransactionNotFoundError
    |
    +-- TenantAccessError
    |
    +-- AccountError
        +-- DuplicateAccountCodeError
        +-- ImmutableAccountFieldError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                 | When Raised
-------------|----------------------|-------------------------------------------
Transaction  | INVALID_STRUCTURE    | < 2 entries, amount <= 0, bad side value
             | UNKNOWN_ACCOUNT      | Entry account missing or owned by another
             |                      | tenant
             | ACCOUNT_INACTIVE     | Entry account has been deactivated
             | UNBALANCED           | Debits != credits beyond tolerance
             | WRITE_FAILURE        | The atomic persistence step failed
-------------|----------------------|-------------------------------------------
Lookup       | NOT_FOUND            | Client / account / transaction missing
-------------|----------------------|-------------------------------------------
Tenancy      | ACCESS_DENIED        | Resource exists but belongs to another
             |                      | tenant
-------------|----------------------|-------------------------------------------
Account      | ACCOUNT_CODE_EXISTS  | (client, code) already taken
             | ACCOUNT_FIELD_IMMUTABLE | Update touched type, code or client

===============================================================================
HANDLING PATTERNS
===============================================================================

1. Rejections (INVALID_STRUCTURE, UNKNOWN_ACCOUNT, ACCOUNT_INACTIVE,
   UNBALANCED) are raised before any row is written.  They are
   recoverable only by the caller correcting its input; nothing retries
   them.

2. WRITE_FAILURE is raised after the unit of work was rolled back.  The
   kernel never retries a financial write: without an idempotency key a
   retry risks a duplicate posting.

3. NOT_FOUND and ACCESS_DENIED are kept distinct so the API layer can map
   them to different responses, but both mean "nothing was returned".
"""

from typing import Any


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"

    def details(self) -> dict[str, Any]:
        """The structured attributes set by the subclass constructor."""
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}


# Transaction admission and persistence


class TransactionError(LedgerKernelError):
    """Base exception for transaction admission and persistence errors."""

    code: str = "TRANSACTION_ERROR"


class InvalidStructureError(TransactionError):
    """
    Proposed transaction is malformed.

    Raised for fewer than two entries, a non-positive or unparseable amount,
    an amount finer than the ledger's minor unit, an unknown side value, or
    a blank description.  ``index`` is the offending entry position, or
    None when the problem is with the transaction as a whole.
    """

    code: str = "INVALID_STRUCTURE"

    def __init__(self, reason: str, index: int | None = None):
        self.reason = reason
        self.index = index
        where = f" (entry {index})" if index is not None else ""
        super().__init__(f"Invalid transaction structure{where}: {reason}")


class UnknownAccountError(TransactionError):
    """One or more entry accounts do not exist for the requesting tenant."""

    code: str = "UNKNOWN_ACCOUNT"

    def __init__(self, account_ids: list[str]):
        self.account_ids = account_ids
        super().__init__(
            f"One or more accounts not found: {', '.join(account_ids)}"
        )


class InactiveAccountError(TransactionError):
    """
    One or more entry accounts belong to the tenant but are deactivated.

    Deactivated accounts take no new entries.  Checked after ownership and
    before the balance.
    """

    code: str = "ACCOUNT_INACTIVE"

    def __init__(self, account_ids: list[str]):
        self.account_ids = account_ids
        super().__init__(
            f"One or more accounts are inactive: {', '.join(account_ids)}"
        )


class UnbalancedTransactionError(TransactionError):
    """Transaction debits do not equal credits."""

    code: str = "UNBALANCED"

    def __init__(self, debits: str, credits: str):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Transaction not balanced: debits={debits}, credits={credits}"
        )


class WriteFailureError(TransactionError):
    """
    The atomic write (or delete) could not be completed.

    The unit of work has already been rolled back when this is raised;
    no rows of the transaction are visible.
    """

    code: str = "WRITE_FAILURE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Ledger write failed: {reason}")


# Lookups


class NotFoundError(LedgerKernelError):
    """Base exception for missing resources."""

    code: str = "NOT_FOUND"

    resource: str = "resource"

    def __init__(self, resource_id: str):
        self.resource_id = resource_id
        super().__init__(f"{self.resource.capitalize()} not found: {resource_id}")


class ClientNotFoundError(NotFoundError):
    """Client (tenant) with given ID was not found."""

    resource = "client"


class AccountNotFoundError(NotFoundError):
    """Account with given ID was not found."""

    resource = "account"


class TransactionNotFoundError(NotFoundError):
    """Transaction with given ID was not found."""

    resource = "transaction"


# Tenancy


class TenantAccessError(LedgerKernelError):
    """
    Resource exists but is owned by a different tenant.

    Logged as an authorization failure.  Callers must not reveal anything
    about the resource beyond the refusal itself.
    """

    code: str = "ACCESS_DENIED"

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__("Access denied to this resource")


# Chart of accounts


class AccountError(LedgerKernelError):
    """Base exception for chart-of-accounts maintenance errors."""

    code: str = "ACCOUNT_ERROR"


class DuplicateAccountCodeError(AccountError):
    """Account code already exists within the tenant's chart of accounts."""

    code: str = "ACCOUNT_CODE_EXISTS"

    def __init__(self, client_id: str, account_code: str):
        self.client_id = client_id
        self.account_code = account_code
        super().__init__(f"Account code already exists: {account_code}")


class ImmutableAccountFieldError(AccountError):
    """An update tried to change a field other than name, description or is_active."""

    code: str = "ACCOUNT_FIELD_IMMUTABLE"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Account field cannot be changed: {field_name}")
