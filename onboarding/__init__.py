"""
User Onboarding API — root package.

This package contains the FastAPI app entry point (main.py), the
registration route, domain model and errors, the credential hashing and
attachment intake use cases, and the MongoDB / filesystem infrastructure
they persist through.
"""
