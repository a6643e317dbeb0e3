"""
Client Use Cases
"""

from .create_client_use_case import CreateClientUseCase
from .dtos import CreateClientCommand, UpsertClientResponse, UpsertExternalClientCommand
from .list_clients_use_case import ListClientsUseCase
from .upsert_external_client_use_case import UpsertExternalClientUseCase

__all__ = [
    "ListClientsUseCase",
    "CreateClientUseCase",
    "UpsertExternalClientUseCase",
    "CreateClientCommand",
    "UpsertExternalClientCommand",
    "UpsertClientResponse",
]
