"""
Base class for services that POST one pydantic payload to one endpoint
and hand back the decoded JSON answer.
"""

import abc
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from task_lingo_lib.utils.http import HttpRequester
from task_lingo_lib.exceptions import TaskLingoError


class BaseServiceInterface(abc.ABC):
    """
    Abstract endpoint wrapper.

    Sub-classes set:

    * ``endpoint`` - path relative to the requester's base URL,
    * ``model_cls`` - pydantic model describing the request payload,
    * ``check_status`` - with ``False`` an error status does not raise and
      its body is decoded like any other answer.
    """

    endpoint: str = ""
    model_cls: Optional[Type[BaseModel]] = None
    check_status: bool = True

    def __init__(self, http: HttpRequester, logger):
        """
        Parameters
        ----------
        http : HttpRequester
            Requester bound to the service's base URL.
        logger : logging.Logger
            Logger used for debugging and error reporting.
        """
        self.http = http
        self.logger = logger

    def _payload(self, raw_payload: Any) -> Dict[str, Any]:
        if isinstance(raw_payload, BaseModel):
            return raw_payload.model_dump()
        if self.model_cls is not None:
            return self.model_cls.model_validate(raw_payload).model_dump()
        return raw_payload

    def call(self, raw_payload: Any) -> Any:
        """
        POST the payload to ``endpoint`` and return the decoded JSON body.

        Parameters
        ----------
        raw_payload : Any
            A ``model_cls`` instance, or a mapping validated against
            ``model_cls``.

        Returns
        -------
        Any
            The decoded JSON answer.

        Raises
        ------
        pydantic.ValidationError
            ``raw_payload`` does not match ``model_cls``.
        TaskLingoError
            The body is not JSON, or (with ``check_status``) the status is
            an error.
        """
        resp = self.http.post(
            self.endpoint,
            json=self._payload(raw_payload),
            check_status=self.check_status,
        )
        try:
            return resp.json()
        except ValueError as exc:
            raise TaskLingoError(f"Invalid response format: {exc}")
