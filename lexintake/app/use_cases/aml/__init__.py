"""
AML Check Use Cases
"""

from .create_aml_check_use_case import CreateAMLCheckUseCase
from .dtos import CreateAMLCheckCommand, UpdateAMLCheckCommand
from .get_aml_checks_use_case import GetAMLChecksUseCase
from .update_aml_check_use_case import UpdateAMLCheckUseCase

__all__ = [
    "CreateAMLCheckUseCase",
    "GetAMLChecksUseCase",
    "UpdateAMLCheckUseCase",
    "CreateAMLCheckCommand",
    "UpdateAMLCheckCommand",
]
