"""
Helpers for representing API errors as JSON‑serializable dictionaries,
plus the JSON error handlers registered on the application.
"""

from typing import Dict, Any, Optional

from flask import Flask

MISSING_INPUT = "Missing text or target"
NO_VALID_TRANSLATION = "No valid translation returned"
INTERNAL_ERROR = "Internal server error"
AUTH_REQUIRED = "Authentication required"
TASK_NOT_FOUND = "Task not found"
TASK_TEXT_REQUIRED = "Task text is required"
NOTHING_TO_UPDATE = "Nothing to update"


def error_as_dict(error: str, error_msg: Optional[str] = None) -> Dict[str, Any]:
    """
    Convert an error message and optional details into a serialisable dictionary.

    >>> error_as_dict("Task not found")
    {'error': 'Task not found'}
    """
    if error_msg is None:
        return {"error": error}

    return {"error": error, "message": error_msg}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(400)
    def handle_400(error):
        return error_as_dict(error.description or "Bad request"), 400

    @app.errorhandler(401)
    def handle_401(error):
        return error_as_dict(AUTH_REQUIRED), 401

    @app.errorhandler(404)
    def handle_404(error):
        return error_as_dict("Resource not found"), 404

    @app.errorhandler(405)
    def handle_405(error):
        return error_as_dict("Method not allowed"), 405

    @app.errorhandler(500)
    def handle_500(error):
        return error_as_dict(INTERNAL_ERROR), 500
