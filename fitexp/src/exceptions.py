"""Typed errors raised while scoring and syncing workouts.

Fatal errors propagate to whoever started the sync (webhook background task,
manual sync route or CLI). The only error handled locally is a failed stream
download, which degrades scoring to moving time.
"""


class FitExpError(Exception):
    """Base exception for all fitexp errors."""


class UnauthorizedError(FitExpError):
    """Raised when an athlete has no usable Strava credential."""

    def __init__(self, message: str, athlete_id: int | None = None):
        self.message = message
        self.athlete_id = athlete_id
        super().__init__(self.message)


class UpstreamUnavailableError(FitExpError):
    """Raised when a call to the activity provider fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class InvalidArgumentsError(FitExpError):
    """Raised when a record is written without one of its required keys."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class DecodeError(FitExpError):
    """Raised when a stored document cannot be parsed into its model."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)
