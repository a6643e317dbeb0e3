"""GDPR lawful basis recorded on audit events, one per processing purpose."""

AUTHENTICATION = "Legitimate interest (account security)"
ACCOUNT_REGISTRATION = "Contract (account registration)"
CLIENT_MANAGEMENT = "Legal obligation (legal matter management)"
CLIENT_INTAKE = "Legal obligation / contract (client intake)"
MATTER_MANAGEMENT = "Legal obligation (matter management)"
AML_KYC = "Legal obligation (AML/KYC)"
LEAD_GENERATION = "Legitimate interest (lead generation)"
EXPORT_FEED = "GDPR export / BI feed"
DATA_EXPORT = "GDPR Articles 15 & 20 - data export"
DATA_ERASURE = "GDPR Article 17 - right to erasure"
KEY_ROTATION = "Security - key rotation"
DATA_RETENTION = "Storage limitation (data retention)"
