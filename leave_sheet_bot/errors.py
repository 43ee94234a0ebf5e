"""
Error taxonomy for leave commands.

Every error carries a message that is safe to show to the Slack user.
The dispatcher turns these into ``{"error": message}`` results and reports
them to the notifier; anything outside this hierarchy is treated as an
internal failure.
"""


class LeaveBotError(Exception):
    """Base class for errors that end a command with a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedInputError(LeaveBotError):
    """Raised when the request body or command text has the wrong shape."""


class ValidationFailedError(LeaveBotError):
    """Raised when well-formed input breaks a business rule."""


class IdentifierCollisionError(ValidationFailedError):
    """Raised when a freshly generated leave ID already exists in the store."""


class StoreError(LeaveBotError):
    """Raised when the backing sheet cannot be read or written."""


class StoreSchemaError(StoreError):
    """Raised when the sheet header is missing a required column."""


class LeaveNotFoundError(StoreError):
    """Raised when a verdict update targets an unknown leave ID."""


class RetryExhaustedError(LeaveBotError):
    """Raised when a retried operation failed on every attempt."""

    def __init__(self, message: str, attempts: int, last_error: Exception | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
