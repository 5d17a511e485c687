"""
Module: ledger_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.  Selectors
    form the "Q" side of the kernel, providing tenant-scoped read access to
    ledger data without mutation capability.
Architecture position: Kernel > Selectors.  May import from db/, models/,
    domain/ and exceptions.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: Selectors accept a Session from the caller but MUST NOT
      call session.add(), session.delete(), session.commit(), or session.flush().
    - Tenant scoping: every query filters on the requesting client_id, and a
      direct lookup of another tenant's row raises TenantAccessError.
    - DTO return convention: public methods return frozen dataclasses, NOT raw
      ORM model instances.  The ``load_*`` helpers used by services are the
      only exception.

Failure modes:
    - NotFoundError subclasses when a direct lookup finds nothing.
    - TenantAccessError when the row exists but belongs to another tenant.
"""

from abc import ABC
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base
from ledger_kernel.exceptions import NotFoundError, TenantAccessError

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs or computed results.  They MUST NOT mutate any data.

    Guarantees:
        - session is stored as a public attribute for subclass query use.
        - No commit, flush, add, or delete operations are performed.
    """

    def __init__(self, session: Session):
        """
        Initialize the selector.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

    def _load_owned(
        self,
        model: type[ModelType],
        client_id: UUID,
        resource_id: UUID | str,
        not_found: type[NotFoundError],
    ) -> ModelType:
        """
        Load a tenant-stamped row by primary key and check its owner.

        An id that does not parse as a UUID cannot exist and is reported as
        not found.

        Raises:
            NotFoundError: (the given subclass) if no row has that id.
            TenantAccessError: If the row belongs to another client.
        """
        try:
            key = resource_id if isinstance(resource_id, UUID) else UUID(str(resource_id))
        except ValueError as exc:
            raise not_found(str(resource_id)) from exc

        row = self.session.get(model, key)
        if row is None:
            raise not_found(str(key))
        if row.client_id != client_id:
            raise TenantAccessError(not_found.resource, str(key))
        return row
