from uuid import uuid4

import pytest

from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.clients import UpsertExternalClientCommand, UpsertExternalClientUseCase
from lexintake.domain.entities import AuditEventType, Client
from lexintake.domain.errors import ErrorCode


@pytest.fixture
def caller():
    return Caller(firm_id=uuid4(), api_key_prefix="sk_0a1b2c3d")


@pytest.mark.asyncio
async def test_new_client_is_created(mock_uow, caller):
    mock_uow.clients.find_for_firm.return_value = None
    mock_uow.clients.create.side_effect = lambda client: client

    result = await UpsertExternalClientUseCase(mock_uow).execute(
        caller, UpsertExternalClientCommand(external_id="crm-42", name="Jane Doe", email="Jane@Example.com")
    )

    assert result.value.created is True
    assert result.value.client["firm_id"] == str(caller.firm_id)
    assert result.value.client["email"] == "jane@example.com"
    mock_uow.clients.find_for_firm.assert_called_once_with(
        caller.firm_id, external_id="crm-42", email="jane@example.com"
    )
    event = mock_uow.audit_events.create.call_args[0][0]
    assert event.event_type == AuditEventType.create.value


@pytest.mark.asyncio
async def test_existing_client_is_updated(mock_uow, caller):
    existing = Client(firm_id=caller.firm_id, external_id="crm-42", name="J. Doe")
    mock_uow.clients.find_for_firm.return_value = existing
    mock_uow.clients.update.side_effect = lambda client: client

    result = await UpsertExternalClientUseCase(mock_uow).execute(
        caller, UpsertExternalClientCommand(external_id="crm-42", name="Jane Doe", city="Austin")
    )

    assert result.value.created is False
    assert result.value.client["id"] == str(existing.id)
    assert result.value.client["name"] == "Jane Doe"
    assert result.value.client["city"] == "Austin"
    mock_uow.clients.create.assert_not_called()


@pytest.mark.asyncio
async def test_needs_external_id_or_email(mock_uow, caller):
    result = await UpsertExternalClientUseCase(mock_uow).execute(
        caller, UpsertExternalClientCommand(name="Jane Doe")
    )

    assert result.error.code == ErrorCode.VALIDATION_FAILED
    mock_uow.clients.find_for_firm.assert_not_called()
