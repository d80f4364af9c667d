# web/__init__.py
import logging
import os
from typing import Any, Dict, Optional

from flask import Flask

from task_lingo_lib.client import TranslationClient
from task_lingo_lib.backend.supabase import SupabaseClient
from task_lingo_lib.utils.logger import prepare_logger

from task_lingo_web.constants import DEFAULT_CONFIG, _StartAppVerificator
from task_lingo_web.constants_base import Backends

from .auth import AuthProviderI, LocalAuthProvider, SupabaseAuthProvider
from .errors import register_error_handlers
from .models import db
from .routes import bp as web_bp
from .services import AppServices, EXTENSION_KEY
from .stores import TaskStoreI, SqlTaskStore, SupabaseTaskStore
from .translate import translate_bp

logger = logging.getLogger(__name__)


def _build_backend(app: Flask):
    """Create the task store and auth provider named by ``BACKEND``."""
    cfg = app.config
    if cfg["BACKEND"] == Backends.SUPABASE:
        client = SupabaseClient(
            url=cfg["SUPABASE_URL"],
            anon_key=cfg["SUPABASE_ANON_KEY"],
        )
        return (
            SupabaseTaskStore(
                client, table=cfg["SUPABASE_TABLE"], user_scoped=cfg["USER_SCOPED"]
            ),
            SupabaseAuthProvider(client),
        )
    return SqlTaskStore(user_scoped=cfg["USER_SCOPED"]), LocalAuthProvider()


def _log_auth_state(event, session) -> None:
    logger.info("Auth state changed: %s (%s)", event, session.email)


def create_app(
    config: Optional[Dict[str, Any]] = None,
    task_store: Optional[TaskStoreI] = None,
    auth_provider: Optional[AuthProviderI] = None,
    translator: Optional[TranslationClient] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Every collaborator is built here from ``app.config`` unless the caller
    passes one in.
    """
    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(__file__), "templates"),
    )

    # ---- Configuration -------------------------------------------------
    app.config.from_mapping(DEFAULT_CONFIG)
    if config:
        app.config.from_mapping(config)
    _StartAppVerificator.verify(app.config)

    prepare_logger(
        "task_lingo_web",
        logger_file_name=app.config["LOG_FILE_NAME"] or None,
        logger_level=app.config["LOG_LEVEL"],
    )

    # ---- Extensions ----------------------------------------------------
    db.init_app(app)
    if app.config["BACKEND"] == Backends.SQL:
        with app.app_context():
            db.create_all()

    # ---- Collaborators -------------------------------------------------
    if task_store is None or auth_provider is None:
        default_store, default_auth = _build_backend(app)
        task_store = task_store or default_store
        auth_provider = auth_provider or default_auth

    if translator is None:
        translator = TranslationClient(
            api=app.config["LLM_API_BASE"],
            token=app.config["LLM_API_KEY"],
            model=app.config["LLM_MODEL"],
            timeout=app.config["LLM_TIMEOUT"],
        )
        if not app.config["LLM_API_KEY"]:
            logger.warning("No LLM API key configured, translations will fail")

    auth_provider.on_auth_state_change(_log_auth_state)

    app.extensions[EXTENSION_KEY] = AppServices(
        task_store=task_store,
        auth_provider=auth_provider,
        translator=translator,
        user_scoped=app.config["USER_SCOPED"],
    )

    # ---- Register blueprints -------------------------------------------
    app.register_blueprint(web_bp)
    app.register_blueprint(translate_bp)

    # ---- Global error handlers -----------------------------------------
    register_error_handlers(app)

    logger.info(
        "Task Lingo ready (backend=%s, user_scoped=%s)",
        app.config["BACKEND"],
        app.config["USER_SCOPED"],
    )
    return app
