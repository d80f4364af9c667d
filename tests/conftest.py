"""
Pytest configuration and shared fixtures for Task Lingo tests.
"""
import json

import pytest
from unittest.mock import MagicMock

from task_lingo_lib.client import TranslationClient
from task_lingo_web.web import create_app


@pytest.fixture
def fake_response():
    """Build a stand-in for ``requests.Response``."""

    def _make(json_data=None, status_code=200, text=None):
        resp = MagicMock()
        resp.status_code = status_code
        if isinstance(json_data, Exception):
            resp.json.side_effect = json_data
            resp.text = text or ""
        else:
            resp.json.return_value = json_data
            resp.text = text if text is not None else json.dumps(json_data)
        return resp

    return _make


@pytest.fixture
def translator():
    """Translator double; succeeds with a Spanish translation by default."""
    fake = MagicMock(spec=TranslationClient)
    fake.translate.return_value = "Comprar leche"
    return fake


@pytest.fixture
def make_app(tmp_path, translator):
    """Create an app on a throw-away SQLite database."""

    def _make(translator_override=None, task_store=None, auth_provider=None, **overrides):
        config = {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "BACKEND": "sql",
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'tasks.db'}",
            "USER_SCOPED": False,
            "LLM_API_KEY": "test-key",
        }
        config.update(overrides)
        return create_app(
            config,
            task_store=task_store,
            auth_provider=auth_provider,
            translator=translator_override or translator,
        )

    return _make


@pytest.fixture
def app(make_app):
    """Anonymous (shared list) application."""
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def scoped_app(make_app):
    """Application where every task belongs to the signed-in user."""
    return make_app(USER_SCOPED=True)


@pytest.fixture
def signup(scoped_app):
    """Return a test client signed up (and signed in) as ``email``."""

    def _signup(email, password="secret-pass"):
        client = scoped_app.test_client()
        resp = client.post("/signup", data={"email": email, "password": password})
        assert resp.status_code == 302
        return client

    return _signup
