"""
Minimal Supabase REST client.

Only the parts the task list needs are covered: PostgREST table calls
(select / insert / update / delete with equality filters and ordering) and
GoTrue e-mail/password authentication.  Every request carries the project's
anon key in the ``apikey`` header; table calls made on behalf of a signed-in
user replace the bearer token with the user's access token so that row level
security applies.
"""

import logging
from typing import Any, Dict, List, Optional

from task_lingo_lib.utils.http import HttpRequester
from task_lingo_lib.exceptions import (
    AuthenticationError,
    BackendError,
    ValidationError,
)


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SupabaseClient:
    """
    Parameters
    ----------
    url : str
        Project URL, e.g. ``"https://xyz.supabase.co"``.
    anon_key : str
        Public anon key of the project.
    timeout : Optional[float]
        Per-request timeout, ``None`` waits indefinitely.
    logger : Optional[logging.Logger]
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self.rest = HttpRequester(
            base_url=f"{self.url}/rest/v1",
            token=anon_key,
            timeout=timeout,
            headers={"apikey": anon_key},
            logger=self.logger,
        )
        self.auth = HttpRequester(
            base_url=f"{self.url}/auth/v1",
            timeout=timeout,
            headers={"apikey": anon_key},
            logger=self.logger,
        )

    # ------------------------------------------------------------------ #
    # Tables
    # ------------------------------------------------------------------ #
    @staticmethod
    def _headers(
        access_token: Optional[str], representation: bool = False
    ) -> Dict[str, str]:
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        if representation:
            headers["Prefer"] = "return=representation"
        return headers

    @staticmethod
    def _params(
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        select: Optional[str] = None,
    ) -> Dict[str, str]:
        params = {}
        if select:
            params["select"] = select
        for column, value in (filters or {}).items():
            params[column] = f"eq.{_filter_value(value)}"
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        return params

    @staticmethod
    def _rows(resp) -> List[Dict[str, Any]]:
        try:
            rows = resp.json()
        except Exception as exc:
            raise BackendError(f"Invalid response format: {exc}")
        if not isinstance(rows, list):
            raise BackendError(f"Expected a list of rows, got: {rows!r}")
        return rows

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        resp = self.rest.get(
            f"/{table}",
            params=self._params(filters, order, ascending, select="*"),
            headers=self._headers(access_token),
        )
        return self._rows(resp)

    def insert(
        self,
        table: str,
        row: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        resp = self.rest.post(
            f"/{table}",
            json=row,
            headers=self._headers(access_token, representation=True),
        )
        return self._rows(resp)

    def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        resp = self.rest.patch(
            f"/{table}",
            json=values,
            params=self._params(filters),
            headers=self._headers(access_token, representation=True),
        )
        return self._rows(resp)

    def delete(
        self,
        table: str,
        filters: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        resp = self.rest.delete(
            f"/{table}",
            params=self._params(filters),
            headers=self._headers(access_token, representation=True),
        )
        return self._rows(resp)

    # ------------------------------------------------------------------ #
    # Auth
    # ------------------------------------------------------------------ #
    @staticmethod
    def _auth_error_message(resp) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text
        return (
            body.get("msg")
            or body.get("error_description")
            or body.get("message")
            or body.get("error")
            or resp.text
        )

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        resp = self.auth.post(
            "/signup",
            json={"email": email, "password": password},
            check_status=False,
        )
        if resp.status_code >= 400:
            raise ValidationError(self._auth_error_message(resp))
        return resp.json()

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        resp = self.auth.post(
            "/token",
            json={"email": email, "password": password},
            params={"grant_type": "password"},
            check_status=False,
        )
        if resp.status_code >= 400:
            raise AuthenticationError(self._auth_error_message(resp))
        return resp.json()

    def refresh_session(self, refresh_token: str) -> Dict[str, Any]:
        """
        Exchange a refresh token for a new session.

        Raises
        ------
        AuthenticationError
            The refresh token is expired, revoked or unknown.
        """
        resp = self.auth.post(
            "/token",
            json={"refresh_token": refresh_token},
            params={"grant_type": "refresh_token"},
            check_status=False,
        )
        if resp.status_code >= 400:
            raise AuthenticationError(self._auth_error_message(resp))
        return resp.json()

    def sign_out(self, access_token: str) -> None:
        self.auth.post(
            "/logout",
            headers=self._headers(access_token),
        )
