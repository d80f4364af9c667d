"""
Chat-completion service and the helpers that turn a task into a
translation prompt and a provider answer back into plain text.
"""

from typing import Any, Optional

from task_lingo_lib.data_models.constants import TRANSLATION_PROMPT_TEMPLATE
from task_lingo_lib.data_models.translation import ChatCompletionModel
from task_lingo_lib.services.service_interface import BaseServiceInterface


class ChatCompletionService(BaseServiceInterface):
    """
    Service for the OpenAI-compatible ``/chat/completions`` endpoint.

    The upstream status code is not checked: an error body is decoded like
    any other answer and simply yields no translation.
    """

    endpoint = "/chat/completions"
    model_cls = ChatCompletionModel
    check_status = False


def build_translation_prompt(text: str, target: str) -> str:
    return TRANSLATION_PROMPT_TEMPLATE.format(text=text, target=target)


def extract_translation(response: Any) -> Optional[str]:
    """
    Return the trimmed content of the first choice, or ``None`` when the
    answer has no usable text.
    """
    if not isinstance(response, dict):
        return None
    choices = response.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str):
        return None
    return content.strip() or None
