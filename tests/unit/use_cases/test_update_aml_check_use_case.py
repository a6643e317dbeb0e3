from uuid import uuid4

import pytest

from lexintake.app.use_cases.aml import UpdateAMLCheckCommand, UpdateAMLCheckUseCase
from lexintake.app.use_cases.caller import Caller
from lexintake.domain.entities import AMLCheck, AMLCheckStatus, AMLCheckType
from lexintake.domain.errors import ErrorCode


@pytest.fixture
def caller():
    return Caller(firm_id=uuid4(), api_key_prefix="sk_0a1b2c3d")


def make_check(caller, status):
    return AMLCheck(
        firm_id=caller.firm_id, client_id=uuid4(), check_type=AMLCheckType.identity, check_status=status
    )


@pytest.mark.asyncio
async def test_pending_check_can_be_resolved(mock_uow, caller):
    check = make_check(caller, AMLCheckStatus.pending)
    mock_uow.aml_checks.get_for_firm.return_value = check
    mock_uow.aml_checks.update.side_effect = lambda c: c

    result = await UpdateAMLCheckUseCase(mock_uow).execute(
        caller, check.id, UpdateAMLCheckCommand(status=AMLCheckStatus.passed, notes="Cleared")
    )

    assert result.is_ok()
    assert result.value["check_status"] == "passed"
    assert result.value["notes"] == "Cleared"
    assert result.value["checked_at"] is not None


@pytest.mark.asyncio
async def test_terminal_status_cannot_change(mock_uow, caller):
    check = make_check(caller, AMLCheckStatus.flagged)
    mock_uow.aml_checks.get_for_firm.return_value = check

    result = await UpdateAMLCheckUseCase(mock_uow).execute(
        caller, check.id, UpdateAMLCheckCommand(status=AMLCheckStatus.passed)
    )

    assert result.error.code == ErrorCode.INVALID_STATUS_TRANSITION
    mock_uow.aml_checks.update.assert_not_called()


@pytest.mark.asyncio
async def test_notes_on_terminal_check_are_allowed(mock_uow, caller):
    check = make_check(caller, AMLCheckStatus.escalated)
    mock_uow.aml_checks.get_for_firm.return_value = check
    mock_uow.aml_checks.update.side_effect = lambda c: c

    result = await UpdateAMLCheckUseCase(mock_uow).execute(
        caller, check.id, UpdateAMLCheckCommand(notes="Sent to MLRO")
    )

    assert result.is_ok()
    assert result.value["check_status"] == "escalated"


@pytest.mark.asyncio
async def test_empty_update(mock_uow, caller):
    result = await UpdateAMLCheckUseCase(mock_uow).execute(caller, uuid4(), UpdateAMLCheckCommand())

    assert result.error.code == ErrorCode.VALIDATION_FAILED
