"""
Security helpers.

Provides:
    - sanitize_url(): Remove SAS signatures and auth tokens from logged URLs
"""

from .sanitize import REDACTED, SENSITIVE_PARAMS, sanitize_url

__all__ = [
    "sanitize_url",
    "SENSITIVE_PARAMS",
    "REDACTED",
]
