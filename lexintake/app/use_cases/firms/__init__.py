"""
Firm API Key Use Cases
"""

from .dtos import RotatedApiKey
from .revoke_api_key_use_case import RevokeApiKeyUseCase
from .rotate_api_key_use_case import RotateApiKeyUseCase

__all__ = ["RotateApiKeyUseCase", "RevokeApiKeyUseCase", "RotatedApiKey"]
