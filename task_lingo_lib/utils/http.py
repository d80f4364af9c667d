"""
Small ``requests`` session wrapper shared by the LLM and Supabase clients.

One :class:`HttpRequester` is bound to one base URL.  It keeps the default
headers (bearer token, ``apikey`` ...) on its session, mounts a urllib3 retry
adapter only when asked to, and maps failing status codes onto the
:mod:`task_lingo_lib.exceptions` hierarchy.  Callers that need to read an
error body themselves pass ``check_status=False``.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from task_lingo_lib.exceptions import (
    AuthenticationError,
    RateLimitError,
    TaskLingoError,
)

RETRY_STATUSES = [429, 500, 502, 503, 504]

_ERRORS_BY_STATUS = {
    401: AuthenticationError,
    403: AuthenticationError,
    429: RateLimitError,
}


def raise_for_status(resp: requests.Response) -> requests.Response:
    """
    Map a 4xx/5xx ``resp`` onto the library exceptions.

    Parameters
    ----------
    resp : requests.Response

    Returns
    -------
    requests.Response
        ``resp`` itself when the status is below 400.

    Raises
    ------
    AuthenticationError
        HTTP 401 or 403.
    RateLimitError
        HTTP 429.
    TaskLingoError
        Any other client or server error.
    """
    status = resp.status_code
    if status < 400:
        return resp
    error_cls = _ERRORS_BY_STATUS.get(status, TaskLingoError)
    raise error_cls(f"HTTP {status}: {resp.text}")


class HttpRequester:
    """
    Parameters
    ----------
    base_url : str
        Service root, e.g. ``"https://api.groq.com/openai/v1"``.
    token : Optional[str]
        Sent as ``Authorization: Bearer <token>`` when given.
    timeout : Optional[float]
        Seconds per request; ``None`` waits indefinitely.
    retries : int
        Retry budget for :data:`RETRY_STATUSES`.  ``0`` mounts no adapter.
    headers : Optional[Dict[str, str]]
        Extra headers for every request.
    logger : Optional[logging.Logger]
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: int = 0,
        headers: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self.session = requests.Session()
        self.session.headers.update(headers or {})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        if retries > 0:
            self._mount_retries(retries)

    def _mount_retries(self, retries: int) -> None:
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=retries,
                backoff_factor=0.5,
                status_forcelist=RETRY_STATUSES,
                allowed_methods=["GET", "POST", "PATCH", "DELETE"],
            )
        )
        for prefix in ("http://", "https://"):
            self.session.mount(prefix, adapter)

    def _full_url(self, path: str) -> str:
        """
        Join ``path`` onto the base URL with exactly one ``/`` between them.

        Parameters
        ----------
        path : str
            Relative path, with or without a leading slash.

        Returns
        -------
        str
            Absolute URL.
        """
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self, method: str, path: str, check_status: bool = True, **kwargs
    ) -> requests.Response:
        """
        Send ``method`` to ``path`` below the base URL.

        Parameters
        ----------
        method : str
            HTTP verb (``"GET"``, ``"POST"``, ...).
        path : str
            Path relative to ``base_url``.
        check_status : bool, default ``True``
            When ``False`` the response is returned whatever its status, so
            the caller can read an error body itself.
        **kwargs
            Forwarded to :meth:`requests.Session.request` (``json``,
            ``params``, ``headers`` ...).

        Returns
        -------
        requests.Response

        Raises
        ------
        AuthenticationError
            HTTP 401/403 with ``check_status`` on.
        RateLimitError
            HTTP 429 with ``check_status`` on.
        TaskLingoError
            Any other 4xx/5xx with ``check_status`` on.
        requests.RequestException
            Transport failures are not wrapped.
        """
        url = self._full_url(path)
        self.logger.debug("%s %s | payload=%s", method, url, kwargs.get("json"))
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        return raise_for_status(resp) if check_status else resp

    def get(self, path: str, **kwargs) -> requests.Response:
        """
        ``GET`` request.

        Parameters
        ----------
        path : str
            Path relative to ``base_url``.
        **kwargs
            See :meth:`request`; typically ``params`` and ``headers``.

        Returns
        -------
        requests.Response
        """
        return self.request("GET", path, **kwargs)

    def post(
        self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs
    ) -> requests.Response:
        """
        ``POST`` request with a JSON body.

        Parameters
        ----------
        path : str
            Path relative to ``base_url``.
        json : Optional[Dict[str, Any]]
            Body serialised as JSON.
        **kwargs
            See :meth:`request`.

        Returns
        -------
        requests.Response
        """
        return self.request("POST", path, json=json, **kwargs)

    def patch(
        self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs
    ) -> requests.Response:
        """
        ``PATCH`` request with a JSON body.

        Parameters
        ----------
        path : str
            Path relative to ``base_url``.
        json : Optional[Dict[str, Any]]
            Fields to change.
        **kwargs
            See :meth:`request`; PostgREST filters go in ``params``.

        Returns
        -------
        requests.Response
        """
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """
        ``DELETE`` request.

        Parameters
        ----------
        path : str
            Path relative to ``base_url``.
        **kwargs
            See :meth:`request`.

        Returns
        -------
        requests.Response
        """
        return self.request("DELETE", path, **kwargs)
