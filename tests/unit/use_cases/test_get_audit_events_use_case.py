from uuid import uuid4

import pytest

from lexintake.app.use_cases.audit import GetAuditEventsUseCase
from lexintake.app.use_cases.caller import Caller
from lexintake.domain.entities import AuditEvent, Profile
from lexintake.domain.errors import ErrorCode


@pytest.mark.asyncio
async def test_owner_sees_events_with_user_email(mock_uow):
    firm_id = uuid4()
    user_id = uuid4()
    caller = Caller(firm_id=firm_id, user_id=user_id, role="firm_owner")
    events = [
        AuditEvent(firm_id=firm_id, user_id=user_id, event_type="login", entity_type="profile"),
        AuditEvent(firm_id=firm_id, event_type="create", entity_type="marketing_lead"),
    ]
    mock_uow.audit_events.get_by_firm_paginated.return_value = (events, "cursor-1")
    mock_uow.profiles.get_by_id.return_value = Profile(
        id=user_id, email="owner@smithlaw.com", password_hash="x", firm_id=firm_id
    )

    result = await GetAuditEventsUseCase(mock_uow).execute(caller, limit=500)

    assert result.is_ok()
    assert result.value["next_cursor"] == "cursor-1"
    assert [e["user_email"] for e in result.value["events"]] == ["owner@smithlaw.com", None]
    mock_uow.audit_events.get_by_firm_paginated.assert_called_once_with(firm_id, limit=200, cursor=None)


@pytest.mark.asyncio
async def test_staff_cannot_read_audit_log(mock_uow):
    caller = Caller(firm_id=uuid4(), user_id=uuid4(), role="staff")

    result = await GetAuditEventsUseCase(mock_uow).execute(caller)

    assert result.error.code == ErrorCode.INSUFFICIENT_ROLE
