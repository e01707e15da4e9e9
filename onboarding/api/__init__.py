"""
API layer for the onboarding service.

Exposes the registration endpoint (POST /auth/register) and a health check.
"""
