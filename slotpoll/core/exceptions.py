"""Error types raised by the polling core.

Every error carries a user-visible message and the HTTP status the API layer
reports it with. Input validation in the service layer keeps raising plain
ValueError (reported as 400).
"""
from typing import Optional


class PollError(Exception):
    """Base class for poll errors surfaced to the user."""

    status_code = 400
    default_message = "Poll operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(PollError):
    status_code = 401
    default_message = "You must be logged in to vote"


class PermissionDenied(PollError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class PollNotFound(PollError):
    status_code = 404
    default_message = "Poll not found"


class InvalidSlot(PollError):
    status_code = 400
    default_message = "Slot is not part of this poll"


class PollNotOpen(PollError):
    status_code = 409
    default_message = "Poll is not open for voting"


class ToggleInProgress(PollError):
    status_code = 409
    default_message = "A vote on this slot is already being saved"


class StoreReadFailure(PollError):
    status_code = 503
    default_message = "Failed to fetch poll data. Please try again."


class StoreWriteFailure(PollError):
    status_code = 503
    default_message = "Failed to save your change. Please try again."


class IntegrityViolation(PollError):
    """Raised when a local aggregate patch is logically impossible."""

    status_code = 500
    default_message = "Vote tally is out of sync. Please reload the poll."
