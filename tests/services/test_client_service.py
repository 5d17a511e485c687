"""
ClientService and ClientSelector: minimal tenant lifecycle.
"""

from uuid import uuid4

import pytest

from ledger_kernel.exceptions import ClientNotFoundError
from ledger_kernel.selectors.client_selector import ClientSelector
from ledger_kernel.services.client_service import ClientService


class TestClientService:

    def test_create(self, session):
        record = ClientService(session).create_client(
            "  Demo Company Inc. ",
            email="demo@example.com",
            phone="555-0100",
            address="123 Demo Street, Demo City, DC 12345",
        )
        assert record.name == "Demo Company Inc."
        assert record.is_active is True
        assert ClientSelector(session).get(record.client_id) == record

    def test_blank_name_rejected(self, session):
        with pytest.raises(ValueError):
            ClientService(session).create_client("   ")

    def test_deactivate_is_idempotent(self, session, client, captured_logs):
        service = ClientService(session)
        assert service.deactivate_client(client.client_id).is_active is False
        assert service.deactivate_client(client.client_id).is_active is False

        deactivations = [r for r in captured_logs() if r["message"] == "client_deactivated"]
        assert len(deactivations) == 1

    def test_deactivate_unknown(self, session):
        with pytest.raises(ClientNotFoundError):
            ClientService(session).deactivate_client(uuid4())


class TestClientSelector:

    def test_get_unknown(self, session):
        with pytest.raises(ClientNotFoundError) as exc_info:
            ClientSelector(session).get(uuid4())
        assert exc_info.value.code == "NOT_FOUND"

    def test_list_active(self, session, client, other_client):
        ClientService(session).deactivate_client(other_client.client_id)
        names = [c.name for c in ClientSelector(session).list_active()]
        assert names == ["Acme Bookkeeping Ltd"]
