"""
URL sanitization for log output.

Blob URLs may carry SAS tokens in their query string. Anything that ends up
in a log file goes through sanitize_url first.
"""

from typing import Set
from urllib.parse import urlparse, urlunparse


# Query parameters that may contain sensitive tokens
SENSITIVE_PARAMS: Set[str] = {
    "sig",
    "signature",
    "sv",
    "se",
    "st",
    "sp",
    "sr",
    "spr",  # Azure SAS
    "skoid",
    "sktid",
    "skt",
    "ske",
    "sks",
    "skv",  # Azure user delegation SAS
    "token",
    "access_token",
    "api_key",
    "apikey",
    "key",
    "secret",
    "password",
    "pwd",
    "auth",
    "authorization",
}

REDACTED = "[REDACTED]"


def sanitize_url(url: str) -> str:
    """
    Remove sensitive query parameters from URL.

    Preserves the path and structure for debugging while removing
    tokens that could grant access if exposed in logs.

    Args:
        url: URL that may contain sensitive parameters

    Returns:
        URL with sensitive parameters replaced with [REDACTED]

    Examples:
        >>> sanitize_url("https://acct.blob.core.windows.net/c/b?sv=2021&sig=abc")
        'https://acct.blob.core.windows.net/c/b?sv=[REDACTED]&sig=[REDACTED]'
    """
    if not url:
        return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return url

    if not parsed.query:
        return url

    sanitized_params = []
    for param in parsed.query.split("&"):
        if "=" in param:
            key, _ = param.split("=", 1)
            if key.lower() in SENSITIVE_PARAMS:
                sanitized_params.append(f"{key}={REDACTED}")
                continue
        sanitized_params.append(param)

    return urlunparse(parsed._replace(query="&".join(sanitized_params)))
