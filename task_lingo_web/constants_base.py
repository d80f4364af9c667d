import os


class _DontChangeMe:
    MAIN_ENV_PREFIX = "TASK_LINGO_"


def bool_env_value(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


class Backends:
    SQL = "sql"
    SUPABASE = "supabase"


POSSIBLE_BACKENDS = [Backends.SQL, Backends.SUPABASE]
