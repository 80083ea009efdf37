"""
Exceptions raised by the wrestling meet services.
"""


class WrestlingMeetError(Exception):
    """Base class for all domain errors."""


class InvalidInput(WrestlingMeetError, ValueError):
    """Raised when caller-supplied data is rejected before computation."""


class NotFoundError(WrestlingMeetError, KeyError):
    """Raised when a record id does not exist in the store."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class InvalidTransition(WrestlingMeetError):
    """Raised when a bout operation is not allowed in its current status."""
