"""
APT method for fetching packages from Azure Blob Storage.

Speaks the APT method protocol over stdin/stdout and downloads blobs named
by URI Acquire requests.
"""

__version__ = "0.2.0"
