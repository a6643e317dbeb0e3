"""
Use Cases

Organised by area:
- auth/: Sign-up, sign-in, sessions
- clients/, matters/, leads/: Firm data
- aml/: AML/KYC screening
- gdpr/: Export and erasure
- firms/: API key lifecycle
- internal/: Retention jobs
- audit/: Audit log browsing
"""
