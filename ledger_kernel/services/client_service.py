"""
ClientService -- minimal tenant lifecycle.

Responsibility:
    Creates tenants and deactivates them.  Tenants are never deleted: their
    id is stamped on every account and transaction they own.

Architecture position:
    Kernel > Services.  Flush-only (see BaseService).
"""

from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import ClientRecord
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.client import Client
from ledger_kernel.selectors.client_selector import ClientSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.client")


class ClientService(BaseService[Client]):
    """Create and deactivate tenants."""

    def __init__(self, session: Session):
        super().__init__(session)
        self._clients = ClientSelector(session)

    def create_client(
        self,
        name: str,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> ClientRecord:
        name = (name or "").strip()
        if not name:
            raise ValueError("Client name must not be empty")

        client = Client(
            name=name,
            email=email,
            phone=phone,
            address=address,
            is_active=True,
        )
        self.session.add(client)
        self.session.flush()

        logger.info("client_created", extra={"client_id": str(client.id)})
        return ClientRecord.from_model(client)

    def deactivate_client(self, client_id: UUID) -> ClientRecord:
        """Mark the tenant inactive.  Idempotent."""
        client = self._clients.load(client_id)
        if client.is_active:
            client.is_active = False
            self.session.flush()
            logger.info("client_deactivated", extra={"client_id": str(client.id)})
        return ClientRecord.from_model(client)
