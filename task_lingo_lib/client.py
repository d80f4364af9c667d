import logging
from typing import Optional

from task_lingo_lib.utils.http import HttpRequester
from task_lingo_lib.exceptions import InvalidTranslationResponseError
from task_lingo_lib.services.translation import (
    ChatCompletionService,
    build_translation_prompt,
    extract_translation,
)
from task_lingo_lib.data_models.constants import (
    DEFAULT_LLM_API_BASE,
    DEFAULT_LLM_MODEL,
    TRANSLATION_SYSTEM_PROMPT,
    TRANSLATION_TEMPERATURE,
)
from task_lingo_lib.data_models.translation import (
    ChatCompletionModel,
    ChatMessage,
)


class TranslationClient:

    def __init__(
        self,
        api: str = DEFAULT_LLM_API_BASE,
        token: Optional[str] = None,
        model: str = DEFAULT_LLM_MODEL,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = api.rstrip("/")
        self.token = token
        self.model = model
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.http = HttpRequester(
            base_url=self.base_url,
            token=self.token,
            timeout=self.timeout,
            retries=0,
            logger=self.logger,
        )

    # ------------------------------------------------------------------ #
    def completion_payload(self, text: str, target: str) -> ChatCompletionModel:
        return ChatCompletionModel(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=TRANSLATION_SYSTEM_PROMPT),
                ChatMessage(
                    role="user", content=build_translation_prompt(text, target)
                ),
            ],
            temperature=TRANSLATION_TEMPERATURE,
        )

    # ------------------------------------------------------------------ #
    def translate(self, text: str, target: str) -> str:
        """
        Translate ``text`` into the ``target`` language code.

        Raises
        ------
        InvalidTranslationResponseError
            The provider answered without any usable content.
        TaskLingoError
            The provider body could not be decoded.
        requests.RequestException
            Network level failures are not wrapped.
        """
        data = ChatCompletionService(self.http, self.logger).call(
            self.completion_payload(text, target)
        )

        translated = extract_translation(data)
        if not translated:
            raise InvalidTranslationResponseError(
                "No valid translation returned", response=data
            )
        return translated
