"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AMLCheckStatus,
    AMLCheckType,
    ApiScope,
    AuditEventType,
    KYCStatus,
    LeadSource,
    MatterStatus,
    MatterType,
    ProfileRole,
    RiskLevel,
)

# Export all entities
from .firm import Firm
from .profile import Profile
from .client import Client
from .matter import Matter
from .aml_check import AMLCheck
from .audit_event import AuditEvent
from .marketing_lead import MarketingLead
from .api_key import ApiKey
from .session import Session

__all__ = [
    # Enums
    "AMLCheckStatus",
    "AMLCheckType",
    "ApiScope",
    "AuditEventType",
    "KYCStatus",
    "LeadSource",
    "MatterStatus",
    "MatterType",
    "ProfileRole",
    "RiskLevel",
    # Entities
    "Firm",
    "Profile",
    "Client",
    "Matter",
    "AMLCheck",
    "AuditEvent",
    "MarketingLead",
    "ApiKey",
    "Session",
]
