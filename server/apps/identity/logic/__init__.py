"""Business logic layer for identity app.

- Account registration and credential verification
- Bearer token issue, validation, revocation and expiry
"""
