"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ProfileRole(str, Enum):
    """Role of a human operator within a firm"""

    firm_owner = "firm_owner"
    lawyer = "lawyer"
    staff = "staff"
    support_readonly = "support_readonly"


class KYCStatus(str, Enum):
    """Client KYC status"""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class MatterType(str, Enum):
    """Kind of legal engagement"""

    real_estate_purchase = "real_estate_purchase"
    real_estate_sale = "real_estate_sale"
    conveyancing = "conveyancing"
    lease_agreement = "lease_agreement"
    property_dispute = "property_dispute"
    other = "other"


class MatterStatus(str, Enum):
    """Matter lifecycle status"""

    open = "open"
    in_progress = "in_progress"
    pending = "pending"
    closed = "closed"
    on_hold = "on_hold"
    cancelled = "cancelled"


class AMLCheckType(str, Enum):
    """Kind of compliance screening"""

    identity = "identity"
    sanctions = "sanctions"
    pep = "pep"
    adverse_media = "adverse_media"
    source_of_funds = "source_of_funds"


class AMLCheckStatus(str, Enum):
    """AML check status. Everything but pending is terminal."""

    pending = "pending"
    passed = "passed"
    flagged = "flagged"
    escalated = "escalated"

    @property
    def is_terminal(self) -> bool:
        return self is not AMLCheckStatus.pending


class RiskLevel(str, Enum):
    """Risk level reported by the AML provider"""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class LeadSource(str, Enum):
    """Where a marketing lead came from"""

    public_site = "public_site"
    firm_integration = "firm_integration"
    dashboard = "dashboard"


class ApiScope(str, Enum):
    """Capabilities grantable to a firm API key"""

    leads_read = "leads:read"
    leads_write = "leads:write"
    clients_read = "clients:read"
    clients_write = "clients:write"
    matters_read = "matters:read"
    matters_write = "matters:write"
    aml_read = "aml:read"
    aml_write = "aml:write"
    gdpr_export = "gdpr:export"
    admin = "admin"


class AuditEventType(str, Enum):
    """Audit event types"""

    login = "login"
    logout = "logout"
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"
    export = "export"
    api_key_rotated = "api_key_rotated"
    api_key_revoked = "api_key_revoked"
    api_key_auth_failed = "api_key_auth_failed"
    aml_check_failed = "aml_check_failed"
    gdpr_deletion_requested = "gdpr_deletion_requested"
    gdpr_deletion_completed = "gdpr_deletion_completed"
    cleanup_run = "cleanup_run"
