"""
Constants and configuration for the Task Lingo web service.

All values are loaded from environment variables, allowing the deployment
environment to control behaviour without code changes.  The module groups the
settings by purpose (server, logging, storage, translation provider).
``create_app`` copies them into ``app.config``; any key can be overridden
there.
"""

import os

from task_lingo_web.constants_base import (
    _DontChangeMe,
    bool_env_value,
    Backends,
    POSSIBLE_BACKENDS,
)
from task_lingo_lib.data_models.constants import (
    DEFAULT_LLM_API_BASE,
    DEFAULT_LLM_MODEL,
)

_P = _DontChangeMe.MAIN_ENV_PREFIX

# =============================================================================
# LOGGING
# =============================================================================
# Default name of a logging file (empty → log to stderr only)
LOG_FILE_NAME = os.environ.get(f"{_P}LOG_FILENAME", "").strip()

# Default logging level
LOG_LEVEL = os.environ.get(f"{_P}LOG_LEVEL", "INFO").strip()

# =============================================================================
# SERVER CONFIGURATION
# =============================================================================
# Type of server, default is flask {flask, gunicorn, waitress}
SERVER_TYPE = os.environ.get(f"{_P}SERVER_TYPE", "flask").lower().strip()

SERVER_HOST = os.environ.get(f"{_P}SERVER_HOST", "0.0.0.0").strip()

SERVER_PORT = int(os.environ.get(f"{_P}SERVER_PORT", "8080").strip())

# Number of workers (gunicorn only)
SERVER_WORKERS_COUNT = int(os.environ.get(f"{_P}SERVER_WORKERS_COUNT", "2").strip())

# Number of threads (gunicorn/waitress)
SERVER_THREADS_COUNT = int(os.environ.get(f"{_P}SERVER_THREADS_COUNT", "8").strip())

RUN_IN_DEBUG_MODE = bool_env_value(f"{_P}IN_DEBUG")
if RUN_IN_DEBUG_MODE:
    LOG_LEVEL = "DEBUG"

SECRET_KEY = os.environ.get(f"{_P}SECRET_KEY", "change-me-local")

# =============================================================================
# STORAGE / AUTH BACKEND
# =============================================================================
BACKEND = os.environ.get(f"{_P}BACKEND", Backends.SQL).lower().strip()

# Every task belongs to the signed-in user; switch off for a shared,
# anonymous list
USER_SCOPED = bool_env_value(f"{_P}USER_SCOPED", default=True)

DATABASE_URL = os.environ.get(f"{_P}DATABASE_URL", "sqlite:///task_lingo.db")

SUPABASE_URL = os.environ.get(f"{_P}SUPABASE_URL", "").strip()
SUPABASE_ANON_KEY = os.environ.get(f"{_P}SUPABASE_ANON_KEY", "").strip()
SUPABASE_TABLE = os.environ.get(f"{_P}SUPABASE_TABLE", "todos").strip()

# =============================================================================
# TRANSLATION PROVIDER
# =============================================================================
LLM_API_BASE = os.environ.get(f"{_P}LLM_API_BASE", DEFAULT_LLM_API_BASE).strip()

LLM_API_KEY = (
    os.environ.get(f"{_P}LLM_API_KEY") or os.environ.get("GROQ_API_KEY") or ""
).strip()

LLM_MODEL = os.environ.get(f"{_P}LLM_MODEL", DEFAULT_LLM_MODEL).strip()

# Timeout to the provider in seconds; unset waits indefinitely
_llm_timeout = os.environ.get(f"{_P}LLM_TIMEOUT", "").strip()
LLM_TIMEOUT = float(_llm_timeout) if _llm_timeout else None


class _StartAppVerificator:
    """Checks a configuration mapping before the app is built."""

    @staticmethod
    def verify(config) -> None:
        backend = config.get("BACKEND")
        if backend not in POSSIBLE_BACKENDS:
            raise ValueError(
                f"Unsupported backend {backend!r}. "
                f"Supported: {', '.join(POSSIBLE_BACKENDS)}"
            )
        if backend == Backends.SUPABASE:
            if not config.get("SUPABASE_URL") or not config.get(
                "SUPABASE_ANON_KEY"
            ):
                raise ValueError(
                    f"{_P}SUPABASE_URL and {_P}SUPABASE_ANON_KEY "
                    f"are required for the supabase backend"
                )


DEFAULT_CONFIG = {
    "SECRET_KEY": SECRET_KEY,
    "BACKEND": BACKEND,
    "USER_SCOPED": USER_SCOPED,
    "SQLALCHEMY_DATABASE_URI": DATABASE_URL,
    "SQLALCHEMY_TRACK_MODIFICATIONS": False,
    "SUPABASE_URL": SUPABASE_URL,
    "SUPABASE_ANON_KEY": SUPABASE_ANON_KEY,
    "SUPABASE_TABLE": SUPABASE_TABLE,
    "LLM_API_BASE": LLM_API_BASE,
    "LLM_API_KEY": LLM_API_KEY,
    "LLM_MODEL": LLM_MODEL,
    "LLM_TIMEOUT": LLM_TIMEOUT,
    "LOG_LEVEL": LOG_LEVEL,
    "LOG_FILE_NAME": LOG_FILE_NAME,
}
