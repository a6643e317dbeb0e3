from uuid import uuid4

import pytest

from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.gdpr import ExportFirmDataUseCase
from lexintake.domain.entities import AuditEvent, AuditEventType, Client, MarketingLead


@pytest.mark.asyncio
async def test_export_counts_match_audit_details(mock_uow):
    firm_id = uuid4()
    caller = Caller(firm_id=firm_id, user_id=uuid4(), role="firm_owner")
    mock_uow.clients.list_by_firm.return_value = [
        Client(firm_id=firm_id, name="A"),
        Client(firm_id=firm_id, name="B"),
    ]
    mock_uow.matters.list_by_firm.return_value = []
    mock_uow.aml_checks.list_by_firm.return_value = []
    mock_uow.audit_events.list_by_firm.return_value = [
        AuditEvent(firm_id=firm_id, event_type="login", entity_type="profile")
    ]
    mock_uow.marketing_leads.list_by_firm.return_value = [MarketingLead(firm_id=firm_id, email="x@y.com")]

    result = await ExportFirmDataUseCase(mock_uow, lambda: mock_uow).execute(caller)

    assert result.is_ok()
    export = result.value
    assert export.filename.startswith(f"gdpr_export_{firm_id}_")
    assert export.filename.endswith(".json")
    assert export.payload["firm_id"] == str(firm_id)
    assert len(export.payload["clients"]) == 2

    event = mock_uow.audit_events.create.call_args[0][0]
    assert event.event_type == AuditEventType.export.value
    assert event.details == {
        "total_clients": 2,
        "total_matters": 0,
        "total_aml_checks": 0,
        "total_audit_events": 1,
        "total_marketing_leads": 1,
        "via": "dashboard",
    }
    for table in ("clients", "matters", "aml_checks", "audit_events", "marketing_leads"):
        getattr(mock_uow, table).list_by_firm.assert_called_once_with(firm_id)
