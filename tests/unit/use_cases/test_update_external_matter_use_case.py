from datetime import date
from uuid import uuid4

import pytest

from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.matters import UpdateExternalMatterCommand, UpdateExternalMatterUseCase
from lexintake.domain.entities import Matter, MatterStatus
from lexintake.domain.errors import ErrorCode


@pytest.fixture
def caller():
    return Caller(firm_id=uuid4(), api_key_prefix="sk_0a1b2c3d")


@pytest.fixture
def matter(caller):
    return Matter(
        firm_id=caller.firm_id,
        client_id=uuid4(),
        external_ref="CASE-7",
        title="Purchase of 12 Elm St",
        deletion_due_date=date(2031, 1, 1),
    )


@pytest.mark.asyncio
async def test_update_by_external_ref(mock_uow, caller, matter):
    mock_uow.matters.get_by_external_ref.return_value = matter
    mock_uow.matters.update.side_effect = lambda m: m

    command = UpdateExternalMatterCommand(
        matter_external_ref="CASE-7", status=MatterStatus.closed, deletion_due_date=None
    )
    result = await UpdateExternalMatterUseCase(mock_uow).execute(caller, command)

    assert result.is_ok()
    assert result.value["status"] == "closed"
    assert result.value["deletion_due_date"] is None
    mock_uow.matters.get_by_external_ref.assert_called_once_with(caller.firm_id, "CASE-7")

    event = mock_uow.audit_events.create.call_args[0][0]
    assert event.details["previous"]["deletion_due_date"] == "2031-01-01"


@pytest.mark.asyncio
async def test_absent_fields_are_left_alone(mock_uow, caller, matter):
    mock_uow.matters.get_for_firm.return_value = matter
    mock_uow.matters.update.side_effect = lambda m: m

    command = UpdateExternalMatterCommand(matter_id=matter.id, expected_closing_date=date(2030, 6, 30))
    result = await UpdateExternalMatterUseCase(mock_uow).execute(caller, command)

    assert result.value["deletion_due_date"] == "2031-01-01"
    assert result.value["expected_closing_date"] == "2030-06-30"


@pytest.mark.asyncio
async def test_requires_an_identifier(mock_uow, caller):
    result = await UpdateExternalMatterUseCase(mock_uow).execute(
        caller, UpdateExternalMatterCommand(status=MatterStatus.closed)
    )

    assert result.error.code == ErrorCode.VALIDATION_FAILED


@pytest.mark.asyncio
async def test_matter_of_another_firm(mock_uow, caller):
    mock_uow.matters.get_for_firm.return_value = None

    result = await UpdateExternalMatterUseCase(mock_uow).execute(
        caller, UpdateExternalMatterCommand(matter_id=uuid4(), status=MatterStatus.closed)
    )

    assert result.error.code == ErrorCode.NOT_FOUND
