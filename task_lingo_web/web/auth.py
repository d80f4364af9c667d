"""
Authentication providers.

Both providers expose the same e-mail/password flow and publish auth-state
changes (``SIGNED_IN`` / ``SIGNED_OUT``) to registered listeners.
"""

import abc
import logging
from typing import Callable, List, Optional

from werkzeug.security import generate_password_hash, check_password_hash

from task_lingo_lib.backend.supabase import SupabaseClient
from task_lingo_lib.data_models.task import AuthSession
from task_lingo_lib.exceptions import AuthenticationError, ValidationError

from .models import db, User

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthStateListener = Callable[[str, AuthSession], None]


class AuthProviderI(abc.ABC):
    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: List[AuthStateListener] = []

    def on_auth_state_change(self, callback: AuthStateListener) -> Callable[[], None]:
        """Register ``callback``; the returned function unregisters it."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: str, session: AuthSession) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def sign_in(self, email: str, password: str) -> AuthSession:
        session = self._sign_in(email, password)
        self._emit(SIGNED_IN, session)
        return session

    def sign_out(self, session: AuthSession) -> None:
        self._sign_out(session)
        self._emit(SIGNED_OUT, session)

    def refresh(self, session: AuthSession) -> AuthSession:
        """
        Return a fresh session for an expired ``session``.

        Providers whose sessions do not expire keep the default, which
        rejects the request.
        """
        raise AuthenticationError("Session expired")

    @abc.abstractmethod
    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        """
        Create an account.  Returns the new session, or ``None`` when the
        provider requires the address to be confirmed first.
        """

    @abc.abstractmethod
    def _sign_in(self, email: str, password: str) -> AuthSession:
        pass

    @abc.abstractmethod
    def _sign_out(self, session: AuthSession) -> None:
        pass


class LocalAuthProvider(AuthProviderI):
    """Users stored in the local database with werkzeug password hashes."""

    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        if User.query.filter_by(email=email).first():
            raise ValidationError("User already registered")
        user = User(email=email, password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        self.logger.info("Registered user %s", email)
        return self.sign_in(email, password)

    def _sign_in(self, email: str, password: str) -> AuthSession:
        user = User.query.filter_by(email=email).first()
        if user is None or not check_password_hash(user.password_hash, password):
            raise AuthenticationError("Invalid login credentials")
        return AuthSession(user_id=user.id, email=user.email)

    def _sign_out(self, session: AuthSession) -> None:
        # Nothing is kept server side
        return None


class SupabaseAuthProvider(AuthProviderI):
    """E-mail/password accounts managed by Supabase Auth (GoTrue)."""

    def __init__(self, client: SupabaseClient, logger=None):
        super().__init__(logger=logger)
        self.client = client

    @staticmethod
    def _session_from(body: dict) -> Optional[AuthSession]:
        token = body.get("access_token")
        user = body.get("user") or {}
        if not token or not user.get("id"):
            return None
        return AuthSession(
            user_id=user["id"],
            email=user.get("email", ""),
            access_token=token,
            refresh_token=body.get("refresh_token") or "",
        )

    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        body = self.client.sign_up(email, password)
        session = self._session_from(body)
        if session is not None:
            self._emit(SIGNED_IN, session)
        return session

    def _sign_in(self, email: str, password: str) -> AuthSession:
        session = self._session_from(
            self.client.sign_in_with_password(email, password)
        )
        if session is None:
            raise AuthenticationError("Auth service returned no session")
        return session

    def refresh(self, session: AuthSession) -> AuthSession:
        if not session.refresh_token:
            raise AuthenticationError("Session expired")
        refreshed = self._session_from(
            self.client.refresh_session(session.refresh_token)
        )
        if refreshed is None:
            raise AuthenticationError("Auth service returned no session")
        self.logger.info("Refreshed session for %s", refreshed.email)
        return refreshed

    def _sign_out(self, session: AuthSession) -> None:
        if session.access_token:
            self.client.sign_out(session.access_token)
