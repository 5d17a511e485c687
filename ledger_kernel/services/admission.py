"""
TransactionAdmissionValidator -- the gate in front of the writer.

Responsibility:
    Runs the admission checks in order on a ProposedTransaction:

        1. structure (entry count, amounts, sides, description)
        2. tenant ownership and active flag of every referenced account
           (one query)
        3. double-entry balance within tolerance

    and returns an AdmittedTransaction, the only input the writer accepts.

Architecture position:
    Kernel > Services.  Reads via AccountSelector; the checks themselves are
    the pure functions in ``ledger_kernel.domain.validation``.  Performs no
    writes.

Failure modes:
    - InvalidStructureError, UnknownAccountError, InactiveAccountError,
      UnbalancedTransactionError, raised on the first failing check.  A
      transaction that both references a foreign account and is unbalanced
      reports UNKNOWN_ACCOUNT.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import AdmittedTransaction, ProposedTransaction
from ledger_kernel.domain.validation import (
    DEFAULT_BALANCE_TOLERANCE,
    validate_account_ownership,
    validate_accounts_active,
    validate_balance,
    validate_structure,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.account_selector import AccountSelector

logger = get_logger("services.admission")


class TransactionAdmissionValidator:
    """
    Admit or reject a proposed transaction for one tenant.

    Args:
        session: Session used for the account ownership lookup.
        tolerance: Largest accepted |debits - credits|.  The default 0 makes
            the check exact.
    """

    def __init__(
        self,
        session: Session,
        tolerance: Decimal = DEFAULT_BALANCE_TOLERANCE,
    ):
        if tolerance < 0:
            raise ValueError("Balance tolerance must not be negative")
        self._accounts = AccountSelector(session)
        self._tolerance = tolerance

    @property
    def tolerance(self) -> Decimal:
        return self._tolerance

    def admit(self, client_id: UUID, proposal: ProposedTransaction) -> AdmittedTransaction:
        admitted = validate_structure(proposal)

        requested = admitted.account_ids
        owned = self._accounts.owned_activity(client_id, requested)
        validate_account_ownership(requested, owned)
        validate_accounts_active(owned)

        validate_balance(admitted, self._tolerance)

        logger.info(
            "balance_validated",
            extra={
                "entry_count": len(admitted.entries),
                "total_debits": admitted.total_debits,
                "total_credits": admitted.total_credits,
            },
        )
        return admitted
