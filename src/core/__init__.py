"""Shared infrastructure for the blob transport: errors, logging, auth, security."""
