"""
Task and authentication-session models shared by the task stores.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class TaskModel(BaseModel):
    """
    A single to-do item.

    Attributes
    ----------
    id : str
        Identifier assigned by the persistence layer.  Integer keys (e.g. a
        Postgres identity column) are kept as their string form.
    task : str
        User supplied text.
    is_complete : bool, default ``False``
    translation : Optional[str]
        ``None`` until a translation succeeds.
    created_at : datetime
    user_id : Optional[str]
        Owner reference, only filled in user-scoped mode.
    """

    id: str
    task: str
    is_complete: bool = False
    translation: Optional[str] = None
    created_at: datetime
    user_id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if isinstance(value, int) else value


class AuthSession(BaseModel):
    """Identity of a signed-in user as returned by an auth provider."""

    user_id: str
    email: str
    access_token: str = ""
    refresh_token: str = ""
