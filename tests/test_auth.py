"""
Tests for sign up / sign in and per-user task ownership.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from task_lingo_lib.data_models.task import AuthSession, TaskModel
from task_lingo_lib.exceptions import AuthenticationError, ValidationError
from task_lingo_web.web.auth import (
    AuthProviderI,
    LocalAuthProvider,
    SIGNED_IN,
    SIGNED_OUT,
)
from task_lingo_web.web.stores import SqlTaskStore, TaskStoreI


class TestLoginRequired:

    def test_api_answers_401(self, scoped_app):
        response = scoped_app.test_client().get("/api/tasks")
        assert response.status_code == 401
        assert response.get_json() == {"error": "Authentication required"}

    def test_page_redirects_to_login(self, scoped_app):
        response = scoped_app.test_client().get("/")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_relay_stays_open(self, scoped_app):
        response = scoped_app.test_client().post(
            "/api/translate", json={"text": "Buy milk", "target": "es"}
        )
        assert response.status_code == 200

    def test_login_page_renders(self, scoped_app):
        response = scoped_app.test_client().get("/login")
        assert response.status_code == 200
        assert b"Sign in" in response.data


class TestSignUpAndIn:

    def test_signup_signs_in(self, signup):
        client = signup("ana@example.com")

        assert client.get("/api/tasks").status_code == 200
        page = client.get("/")
        assert page.status_code == 200
        assert b"ana@example.com" in page.data

    def test_duplicate_signup(self, signup, scoped_app):
        signup("ana@example.com")

        response = scoped_app.test_client().post(
            "/signup", data={"email": "ana@example.com", "password": "other"}
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/signup")

    def test_login_with_wrong_password(self, signup, scoped_app):
        signup("ana@example.com", password="right")
        client = scoped_app.test_client()

        response = client.post(
            "/login", data={"email": "ana@example.com", "password": "wrong"}
        )

        assert response.headers["Location"].endswith("/login")
        assert client.get("/api/tasks").status_code == 401

    def test_login_and_logout(self, signup, scoped_app):
        signup("ana@example.com", password="right")
        client = scoped_app.test_client()

        response = client.post(
            "/login", data={"email": "ana@example.com", "password": "right"}
        )
        assert response.headers["Location"].endswith("/")
        assert client.get("/api/tasks").status_code == 200

        client.get("/logout")
        assert client.get("/api/tasks").status_code == 401

    def test_blank_credentials(self, scoped_app):
        response = scoped_app.test_client().post(
            "/login", data={"email": "", "password": ""}
        )
        assert response.headers["Location"].endswith("/login")


class TestOwnership:

    @pytest.fixture
    def two_users(self, signup):
        return signup("ana@example.com"), signup("ben@example.com")

    def test_tasks_are_private(self, two_users):
        ana, ben = two_users
        created = ana.post("/api/tasks", json={"task": "Buy milk"}).get_json()

        assert created["user_id"]
        assert [t["task"] for t in ana.get("/api/tasks").get_json()] == ["Buy milk"]
        assert ben.get("/api/tasks").get_json() == []

    def test_cannot_touch_foreign_task(self, two_users, translator):
        ana, ben = two_users
        task_id = ana.post("/api/tasks", json={"task": "Buy milk"}).get_json()["id"]

        assert ben.patch(f"/api/tasks/{task_id}", json={"is_complete": True}).status_code == 404
        assert ben.delete(f"/api/tasks/{task_id}").status_code == 404
        assert (
            ben.post(f"/api/tasks/{task_id}/translate", json={"target": "es"}).status_code
            == 404
        )
        translator.translate.assert_not_called()

        task = ana.get("/api/tasks").get_json()[0]
        assert task["is_complete"] is False
        assert task["translation"] is None


class TestLocalAuthProvider:

    def test_auth_state_events(self, scoped_app):
        events = []
        provider = LocalAuthProvider()
        unsubscribe = provider.on_auth_state_change(
            lambda event, session: events.append((event, session.email))
        )

        with scoped_app.app_context():
            session = provider.sign_up("ana@example.com", "pw")
            provider.sign_out(session)
            unsubscribe()
            provider.sign_in("ana@example.com", "pw")

        assert events == [
            (SIGNED_IN, "ana@example.com"),
            (SIGNED_OUT, "ana@example.com"),
        ]

    def test_errors(self, scoped_app):
        provider = LocalAuthProvider()
        with scoped_app.app_context():
            provider.sign_up("ana@example.com", "pw")
            with pytest.raises(ValidationError):
                provider.sign_up("ana@example.com", "pw")
            with pytest.raises(AuthenticationError):
                provider.sign_in("ana@example.com", "nope")
            with pytest.raises(AuthenticationError):
                provider.sign_in("nobody@example.com", "pw")


class TestScopedSqlStore:

    def test_requires_identity(self, scoped_app):
        store = SqlTaskStore(user_scoped=True)
        with scoped_app.app_context():
            with pytest.raises(AuthenticationError):
                store.list_tasks(None)

    def test_unscoped_ignores_identity(self, app):
        store = SqlTaskStore(user_scoped=False)
        someone = AuthSession(user_id="u1", email="u1@example.com")
        with app.app_context():
            created = store.create_task("Buy milk", someone)
            assert created.user_id is None
            assert [t.id for t in store.list_tasks(None)] == [created.id]


ANA = AuthSession(
    user_id="user-1",
    email="ana@example.com",
    access_token="old-jwt",
    refresh_token="refresh-1",
)

BUY_MILK = TaskModel(
    id="1",
    task="Buy milk",
    created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    user_id="user-1",
)


class TestExpiredSession:

    @pytest.fixture
    def store(self):
        return MagicMock(spec=TaskStoreI)

    @pytest.fixture
    def provider(self):
        return MagicMock(spec=AuthProviderI)

    @pytest.fixture
    def client(self, make_app, store, provider):
        app = make_app(task_store=store, auth_provider=provider, USER_SCOPED=True)
        client = app.test_client()
        with client.session_transaction() as sess:
            sess["auth"] = ANA.model_dump()
        return client

    def test_refreshes_once_and_retries(self, client, store, provider):
        store.list_tasks.side_effect = [
            AuthenticationError("HTTP 401: JWT expired"),
            [BUY_MILK],
        ]
        provider.refresh.return_value = ANA.model_copy(
            update={"access_token": "new-jwt", "refresh_token": "refresh-2"}
        )

        response = client.get("/api/tasks")

        assert response.status_code == 200
        assert response.get_json()[0]["task"] == "Buy milk"
        provider.refresh.assert_called_once_with(ANA)
        assert store.list_tasks.call_args.args[0].access_token == "new-jwt"
        with client.session_transaction() as sess:
            assert sess["auth"]["access_token"] == "new-jwt"
            assert sess["auth"]["refresh_token"] == "refresh-2"

    def test_api_answers_401_and_drops_session(self, client, store, provider):
        store.list_tasks.side_effect = AuthenticationError("HTTP 401: JWT expired")
        provider.refresh.side_effect = AuthenticationError("Session expired")

        response = client.get("/api/tasks")

        assert response.status_code == 401
        assert response.get_json() == {"error": "Authentication required"}
        with client.session_transaction() as sess:
            assert "auth" not in sess

    def test_page_redirects_to_login(self, client, store, provider):
        store.list_tasks.side_effect = AuthenticationError("HTTP 401: JWT expired")
        provider.refresh.side_effect = AuthenticationError("Session expired")

        response = client.get("/")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_local_sessions_are_not_refreshed(self, scoped_app):
        provider = LocalAuthProvider()
        with pytest.raises(AuthenticationError):
            provider.refresh(ANA)

    def test_logout_survives_network_failure(self, client, provider):
        provider.sign_out.side_effect = requests.ConnectionError("down")

        response = client.get("/logout")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        with client.session_transaction() as sess:
            assert "auth" not in sess
