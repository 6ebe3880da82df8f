"""Custom exceptions for the sync loop."""


class SyncError(Exception):
    """Base exception for sync loop errors."""
