from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from lexintake.app.use_cases.leads import CaptureLeadCommand, CaptureLeadUseCase
from lexintake.domain.entities import LeadSource, MarketingLead
from lexintake.domain.errors import ErrorCode


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_welcome_email = AsyncMock(return_value=True)
    return sender


@pytest.mark.asyncio
async def test_public_lead_is_stored_without_firm(mock_uow, email_sender):
    mock_uow.marketing_leads.get_by_email.return_value = None
    mock_uow.marketing_leads.create.side_effect = lambda lead: lead

    result = await CaptureLeadUseCase(mock_uow, email_sender=email_sender).execute(
        CaptureLeadCommand(email=" Jane@Example.com", full_name="Jane"),
        source=LeadSource.public_site,
        ip_address="1.2.3.4",
    )

    assert result.value.created is True
    lead = mock_uow.marketing_leads.create.call_args[0][0]
    assert lead.firm_id is None
    assert lead.email == "jane@example.com"
    assert lead.source == LeadSource.public_site
    email_sender.send_welcome_email.assert_not_called()


@pytest.mark.asyncio
async def test_email_without_at_sign_is_rejected(mock_uow):
    result = await CaptureLeadUseCase(mock_uow).execute(
        CaptureLeadCommand(email="jane.example.com"), source=LeadSource.public_site
    )

    assert result.error.code == ErrorCode.VALIDATION_FAILED
    assert result.error.message == "Valid email is required"
    mock_uow.marketing_leads.create.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_lead_is_reported(mock_uow):
    firm_id = uuid4()
    existing = MarketingLead(firm_id=firm_id, email="jane@example.com", source=LeadSource.dashboard)
    mock_uow.marketing_leads.get_by_email.return_value = existing

    result = await CaptureLeadUseCase(mock_uow).execute(
        CaptureLeadCommand(email="jane@example.com"), source=LeadSource.dashboard, firm_id=firm_id
    )

    assert result.value.created is False
    mock_uow.marketing_leads.get_by_email.assert_called_once_with(firm_id, "jane@example.com")
    mock_uow.marketing_leads.create.assert_not_called()


@pytest.mark.asyncio
async def test_integration_lead_sends_welcome_email(mock_uow, email_sender):
    mock_uow.marketing_leads.get_by_email.return_value = None
    mock_uow.marketing_leads.create.side_effect = lambda lead: lead
    email_sender.send_welcome_email.return_value = False

    result = await CaptureLeadUseCase(mock_uow, email_sender=email_sender).execute(
        CaptureLeadCommand(email="jane@example.com", firm_name="Doe & Partners"),
        source=LeadSource.firm_integration,
        firm_id=uuid4(),
    )

    assert result.value.created is True
    email_sender.send_welcome_email.assert_called_once_with("jane@example.com", "Doe & Partners")
