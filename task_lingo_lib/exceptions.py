"""
Custom exception hierarchy for the Task Lingo library.

All public exceptions inherit from :class:`TaskLingoError`, allowing callers
to catch a single base class for any library failure while still being
able to differentiate specific error conditions when needed.
"""


class TaskLingoError(Exception):
    """Base exception for all Task Lingo specific errors."""

    pass


class AuthenticationError(TaskLingoError):
    """Raised on HTTP 401/403 or when credentials are rejected."""

    pass


class RateLimitError(TaskLingoError):
    """Raised when the server returns HTTP 429 – request rate limit exceeded."""

    pass


class ValidationError(TaskLingoError):
    """Raised when a request payload is malformed or conflicts with stored data."""

    pass


class BackendError(TaskLingoError):
    """Raised when the persistence backend returns an unusable answer."""

    pass


class InvalidTranslationResponseError(TaskLingoError):
    """
    Raised when the LLM provider answered, but without a usable translation.

    The decoded upstream body is kept in :attr:`response` for logging.
    """

    def __init__(self, message: str, response=None):
        super().__init__(message)
        self.response = response
