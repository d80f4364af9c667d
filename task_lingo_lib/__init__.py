from task_lingo_lib.client import TranslationClient
from task_lingo_lib.exceptions import (
    TaskLingoError,
    AuthenticationError,
    RateLimitError,
    ValidationError,
    BackendError,
    InvalidTranslationResponseError,
)

__all__ = [
    "TranslationClient",
    "TaskLingoError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "BackendError",
    "InvalidTranslationResponseError",
]
