"""Utility modules for the onboarding application."""

from .datetime_utils import ensure_utc, utc_now

__all__ = [
    "ensure_utc",
    "utc_now",
]
