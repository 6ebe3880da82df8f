"""Custom exceptions for the Tracker client."""


class TrackerError(Exception):
    """Base exception for Tracker errors (network, decoding, bad payloads)."""


class TrackerRequestError(TrackerError):
    """The tracker answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
