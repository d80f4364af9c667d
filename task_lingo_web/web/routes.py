import logging
from functools import wraps
from typing import Optional

import requests

from flask import (
    Blueprint,
    render_template,
    request,
    redirect,
    url_for,
    jsonify,
    flash,
    session,
)

from task_lingo_lib.data_models.constants import (
    LANGUAGES,
    DEFAULT_TARGET_LANGUAGE,
    TEXT_PARAM,
    TARGET_PARAM,
    TRANSLATED_TEXT_PARAM,
)
from task_lingo_lib.data_models.task import AuthSession, TaskModel
from task_lingo_lib.exceptions import (
    AuthenticationError,
    TaskLingoError,
    ValidationError,
)

from .errors import (
    error_as_dict,
    AUTH_REQUIRED,
    TASK_NOT_FOUND,
    TASK_TEXT_REQUIRED,
    NOTHING_TO_UPDATE,
)
from .services import get_services
from .translate import relay_translation

logger = logging.getLogger(__name__)

SESSION_KEY = "auth"

bp = Blueprint("web", __name__)


# ----------------------------------------------------------------------
# Session helpers
# ----------------------------------------------------------------------
def current_identity() -> Optional[AuthSession]:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    return AuthSession(**data)


def _remember(identity: AuthSession) -> None:
    session.clear()
    session[SESSION_KEY] = identity.model_dump()


def _task_json(task: TaskModel) -> dict:
    return task.model_dump(mode="json")


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _auth_failed():
    session.clear()
    if request.path.startswith("/api/"):
        return jsonify(error_as_dict(AUTH_REQUIRED)), 401
    return redirect(url_for("web.login"))


def login_required(view):
    """
    Sign-in is only enforced in user-scoped mode.  API calls get a JSON 401,
    pages are redirected to the login form.

    When the backend rejects the stored session, the session is refreshed
    once and the view retried.  If that fails the session is dropped and the
    request is answered as unauthenticated.
    """

    @wraps(view)
    def wrapped_view(*args, **kwargs):
        services = get_services()
        identity = current_identity()
        if services.user_scoped and identity is None:
            return _auth_failed()
        try:
            return view(*args, **kwargs)
        except AuthenticationError as exc:
            if identity is None:
                logger.warning("Backend rejected anonymous request: %s", exc)
                return _auth_failed()
            logger.info("Session of %s rejected (%s), refreshing", identity.email, exc)

        try:
            _remember(services.auth_provider.refresh(identity))
            return view(*args, **kwargs)
        except AuthenticationError as exc:
            logger.warning("Session of %s expired: %s", identity.email, exc)
            return _auth_failed()

    return wrapped_view


# ----------------------------------------------------------------------
# Pages
# ----------------------------------------------------------------------
@bp.route("/")
@login_required
def index():
    """Render the task list."""
    services = get_services()
    identity = current_identity()
    tasks = services.task_store.list_tasks(identity)
    return render_template(
        "index.html",
        tasks=tasks,
        languages=LANGUAGES,
        default_language=DEFAULT_TARGET_LANGUAGE,
        identity=identity,
        user_scoped=services.user_scoped,
    )


# ----------------------------------------------------------------------
# Authentication routes
# ----------------------------------------------------------------------
def _credentials():
    return (
        request.form.get("email", "").strip(),
        request.form.get("password", ""),
    )


@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        email, password = _credentials()
        if not email or not password:
            flash("Both fields are required.", "error")
            return redirect(url_for("web.login"))
        try:
            identity = get_services().auth_provider.sign_in(email, password)
        except AuthenticationError:
            flash("Invalid credentials.", "error")
            return redirect(url_for("web.login"))
        _remember(identity)
        flash("Logged in successfully.", "success")
        return redirect(url_for("web.index"))
    return render_template("login.html", mode="login")


@bp.route("/signup", methods=["GET", "POST"])
def signup():
    if request.method == "POST":
        email, password = _credentials()
        if not email or not password:
            flash("Both fields are required.", "error")
            return redirect(url_for("web.signup"))
        try:
            identity = get_services().auth_provider.sign_up(email, password)
        except ValidationError as exc:
            flash(str(exc), "error")
            return redirect(url_for("web.signup"))
        if identity is None:
            flash("Check your e-mail to confirm the account.", "success")
            return redirect(url_for("web.login"))
        _remember(identity)
        return redirect(url_for("web.index"))
    return render_template("login.html", mode="signup")


@bp.route("/logout")
def logout():
    identity = current_identity()
    if identity is not None:
        try:
            get_services().auth_provider.sign_out(identity)
        except (TaskLingoError, requests.RequestException) as exc:
            logger.warning("Sign-out failed for %s: %s", identity.email, exc)
    session.clear()
    flash("You have been logged out.", "success")
    return redirect(url_for("web.login"))


# ----------------------------------------------------------------------
# Task API
# ----------------------------------------------------------------------
@bp.get("/api/languages")
def list_languages():
    return jsonify([{"label": label, "code": code} for label, code in LANGUAGES])


@bp.get("/api/ping")
def ping():
    return jsonify({"status": "ok"})


@bp.get("/api/tasks")
@login_required
def list_tasks():
    """Return all visible tasks, most recent first."""
    tasks = get_services().task_store.list_tasks(current_identity())
    return jsonify([_task_json(t) for t in tasks])


@bp.post("/api/tasks")
@login_required
def create_task():
    payload = _json_body()
    text = payload.get("task")
    if not isinstance(text, str) or not text.strip():
        return jsonify(error_as_dict(TASK_TEXT_REQUIRED)), 400
    task = get_services().task_store.create_task(text.strip(), current_identity())
    logger.debug("Created task %s", task.id)
    return jsonify(_task_json(task)), 201


@bp.patch("/api/tasks/<task_id>")
@login_required
def update_task(task_id):
    """
    Update ``task`` and/or ``is_complete``.  The translation is not writable
    here; it changes only through the translate action.
    """
    payload = _json_body()
    changes = {}
    if "task" in payload:
        text = payload["task"]
        if not isinstance(text, str) or not text.strip():
            return jsonify(error_as_dict(TASK_TEXT_REQUIRED)), 400
        changes["task"] = text.strip()
    if "is_complete" in payload:
        if not isinstance(payload["is_complete"], bool):
            return jsonify(error_as_dict("is_complete must be a boolean")), 400
        changes["is_complete"] = payload["is_complete"]
    if not changes:
        return jsonify(error_as_dict(NOTHING_TO_UPDATE)), 400

    task = get_services().task_store.update_task(
        task_id, current_identity(), **changes
    )
    if task is None:
        return jsonify(error_as_dict(TASK_NOT_FOUND)), 404
    return jsonify(_task_json(task))


@bp.delete("/api/tasks/<task_id>")
@login_required
def delete_task(task_id):
    if not get_services().task_store.delete_task(task_id, current_identity()):
        return jsonify(error_as_dict(TASK_NOT_FOUND)), 404
    return jsonify({"ok": True})


@bp.post("/api/tasks/<task_id>/translate")
@login_required
def translate_task(task_id):
    """
    Translate a stored task through the relay and persist the result.

    A failed relay call leaves the task untouched and its error is returned
    as is.
    """
    services = get_services()
    identity = current_identity()
    task = services.task_store.get_task(task_id, identity)
    if task is None:
        return jsonify(error_as_dict(TASK_NOT_FOUND)), 404

    payload = _json_body()
    body, status = relay_translation(
        services.translator,
        {TEXT_PARAM: task.task, TARGET_PARAM: payload.get(TARGET_PARAM)},
    )
    if status != 200:
        return jsonify(body), status

    updated = services.task_store.set_translation(
        task_id, body[TRANSLATED_TEXT_PARAM], identity
    )
    if updated is None:
        return jsonify(error_as_dict(TASK_NOT_FOUND)), 404
    return jsonify(_task_json(updated))
