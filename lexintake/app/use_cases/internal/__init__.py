"""
Internal (operator) Use Cases
"""

from .retention_cleanup_use_case import RetentionCleanupUseCase

__all__ = ["RetentionCleanupUseCase"]
