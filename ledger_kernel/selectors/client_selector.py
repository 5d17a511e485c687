"""
Module: ledger_kernel.selectors.client_selector
Responsibility: Read-only lookup of tenants.
Architecture position: Kernel > Selectors.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import ClientRecord
from ledger_kernel.exceptions import ClientNotFoundError
from ledger_kernel.models.client import Client
from ledger_kernel.selectors.base import BaseSelector


class ClientSelector(BaseSelector[Client]):
    """Selector for tenant lookups."""

    def __init__(self, session: Session):
        super().__init__(session)

    def load(self, client_id: UUID) -> Client:
        """Load the ORM row; raises ClientNotFoundError if absent."""
        client = self.session.get(Client, client_id)
        if client is None:
            raise ClientNotFoundError(str(client_id))
        return client

    def get(self, client_id: UUID) -> ClientRecord:
        return ClientRecord.from_model(self.load(client_id))

    def list_active(self) -> list[ClientRecord]:
        """All active tenants, ordered by name."""
        rows = self.session.scalars(
            select(Client).where(Client.is_active.is_(True)).order_by(Client.name)
        ).all()
        return [ClientRecord.from_model(c) for c in rows]
