"""
Exceptions raised by the outage client and query service.
"""


class OutageApiError(Exception):
    """Base error for the outage API package."""


class QueueNotFoundError(OutageApiError):
    """No queue catalog contains the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"queue {name!r} not found")
        self.name = name


class TransportError(OutageApiError):
    """Fetching or decoding a remote resource failed."""
