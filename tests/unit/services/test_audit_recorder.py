import pytest

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.domain.entities import AuditEvent


@pytest.mark.asyncio
async def test_records_in_own_commit(mock_uow):
    event = AuditEvent(event_type="create", entity_type="client")

    await AuditRecorder(mock_uow).record(event)

    mock_uow.audit_events.create.assert_called_once_with(event)
    mock_uow.commit.assert_called_once()
    mock_uow.rollback.assert_not_called()


@pytest.mark.asyncio
async def test_failed_write_is_swallowed_and_rolled_back(mock_uow):
    mock_uow.audit_events.create.side_effect = Exception("disk full")

    await AuditRecorder(mock_uow).record(AuditEvent(event_type="create", entity_type="client"))

    mock_uow.commit.assert_not_called()
    mock_uow.rollback.assert_called_once()
