"""
Matter Use Cases
"""

from .create_matter_use_case import CreateMatterUseCase
from .dtos import CreateMatterCommand, UpdateExternalMatterCommand
from .export_matters_use_case import ExportMattersUseCase
from .list_matters_use_case import ListMattersUseCase
from .update_external_matter_use_case import UpdateExternalMatterUseCase

__all__ = [
    "ListMattersUseCase",
    "CreateMatterUseCase",
    "UpdateExternalMatterUseCase",
    "ExportMattersUseCase",
    "CreateMatterCommand",
    "UpdateExternalMatterCommand",
]
