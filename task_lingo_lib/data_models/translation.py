"""
Pydantic request models for the translation relay.

``TranslateRequestModel`` describes the body accepted by the relay endpoint,
``ChatCompletionModel`` the OpenAI-compatible payload sent to the provider.
"""

from typing import List

from pydantic import BaseModel, StrictStr, field_validator

from task_lingo_lib.data_models.constants import (
    DEFAULT_LLM_MODEL,
    TRANSLATION_TEMPERATURE,
)


class TranslateRequestModel(BaseModel):
    """
    Body of ``POST /api/translate``.

    Attributes
    ----------
    text : str
        Source text; must be a non-empty string.
    target : str
        Target language code (e.g. ``"es"``); must be a non-empty string.
    """

    text: StrictStr
    target: StrictStr

    @field_validator("text", "target")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatCompletionModel(BaseModel):
    """
    Chat-completion payload.

    Attributes
    ----------
    model : str
        Provider model identifier.
    messages : List[ChatMessage]
        Conversation, system instruction first.
    temperature : float, default ``0.3``
        Sampling temperature.
    """

    model: str = DEFAULT_LLM_MODEL
    messages: List[ChatMessage]
    temperature: float = TRANSLATION_TEMPERATURE
