"""
GDPR Use Cases

Data portability exports and erasure.
"""

from .delete_my_data_use_case import DeleteMyDataUseCase
from .dtos import DataExport, DeletionReport
from .export_firm_data_use_case import ExportFirmDataUseCase
from .export_my_data_use_case import ExportMyDataUseCase

__all__ = [
    "ExportFirmDataUseCase",
    "ExportMyDataUseCase",
    "DeleteMyDataUseCase",
    "DataExport",
    "DeletionReport",
]
