import pytest
from unittest.mock import AsyncMock, MagicMock

REPOSITORIES = {
    "firms": ("get_by_id", "create", "update"),
    "profiles": ("get_by_id", "get_by_email", "create", "update", "delete"),
    "clients": ("get_for_firm", "find_for_firm", "list_by_firm", "create", "update", "delete_by_firm"),
    "matters": ("get_for_firm", "get_by_external_ref", "list_by_firm", "create", "update", "delete_by_firm"),
    "aml_checks": ("get_for_firm", "list_by_firm", "create", "update", "delete_by_firm"),
    "audit_events": ("create", "get_by_firm_paginated", "list_by_firm", "list_by_user", "deidentify_user"),
    "marketing_leads": ("get_by_email", "list_by_firm", "create", "delete_by_firm", "delete_created_before"),
    "api_keys": (
        "get_by_prefix",
        "list_by_firm",
        "create",
        "deactivate_all_for_firm",
        "deactivate",
        "touch_last_used",
        "delete_by_firm",
    ),
    "sessions": ("get_by_id", "create", "revoke_by_id", "delete_by_firm", "delete_expired"),
}


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for name, methods in REPOSITORIES.items():
        repository = MagicMock()
        for method in methods:
            setattr(repository, method, AsyncMock())
        setattr(uow, name, repository)

    return uow
