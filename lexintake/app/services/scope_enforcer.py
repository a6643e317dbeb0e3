from typing import Iterable

from lexintake.domain.entities import ApiScope
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return


def has_scope(scopes: Iterable[str], required: str) -> bool:
    granted = set(scopes)
    return required in granted or ApiScope.admin.value in granted


def enforce_scope(scopes: Iterable[str], required: ApiScope) -> Result[None]:
    """Permit if the required scope (or the admin wildcard) was granted."""
    if has_scope(scopes, required.value):
        return Return.ok(None)
    return Return.err(
        Error(
            ErrorCode.INSUFFICIENT_SCOPE,
            "Insufficient scope",
            reason=f"API key lacks scope {required.value}",
        )
    )
