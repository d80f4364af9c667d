"""
Tests for task_lingo_lib.client and services/translation.py.
"""
import pydantic
import pytest
import requests
from unittest.mock import MagicMock

from task_lingo_lib.client import TranslationClient
from task_lingo_lib.exceptions import InvalidTranslationResponseError, TaskLingoError
from task_lingo_lib.services.translation import (
    ChatCompletionService,
    build_translation_prompt,
    extract_translation,
)


@pytest.fixture
def client_and_session():
    client = TranslationClient(token="secret-key")
    session = MagicMock()
    session.headers = {}
    client.http.session = session
    return client, session


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestPrompt:

    def test_prompt_embeds_text_and_target_verbatim(self):
        prompt = build_translation_prompt('Call "Mom" at 5', "ja")

        assert prompt == (
            "Translate the following task from English to ja:\n\n"
            '"Call "Mom" at 5"\n\n'
            "Just return the translated sentence, nothing else."
        )

    def test_braces_in_text_are_kept(self):
        assert "{weird} text" in build_translation_prompt("{weird} text", "de")


class TestTranslate:

    def test_payload_shape(self, client_and_session, fake_response):
        client, session = client_and_session
        session.request.return_value = fake_response(_completion("Comprar leche"))

        assert client.translate("Buy milk", "es") == "Comprar leche"

        method, url = session.request.call_args.args
        payload = session.request.call_args.kwargs["json"]
        assert method == "POST"
        assert url == "https://api.groq.com/openai/v1/chat/completions"
        assert payload["model"] == "meta-llama/llama-4-scout-17b-16e-instruct"
        assert payload["temperature"] == 0.3
        assert payload["messages"][0] == {
            "role": "system",
            "content": "You are a helpful translation assistant.",
        }
        assert payload["messages"][1]["role"] == "user"
        assert '"Buy milk"' in payload["messages"][1]["content"]
        assert "English to es" in payload["messages"][1]["content"]

    def test_no_timeout_by_default(self, client_and_session, fake_response):
        client, session = client_and_session
        session.request.return_value = fake_response(_completion("x"))

        client.translate("Buy milk", "es")

        assert session.request.call_args.kwargs["timeout"] is None

    def test_bearer_token_on_session(self):
        client = TranslationClient(token="secret-key")
        assert client.http.session.headers["Authorization"] == "Bearer secret-key"

    def test_result_is_trimmed(self, client_and_session, fake_response):
        client, session = client_and_session
        session.request.return_value = fake_response(_completion("  Acheter du lait \n"))

        assert client.translate("Buy milk", "fr") == "Acheter du lait"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            _completion(""),
            _completion("   "),
            {"error": {"message": "model overloaded"}},
        ],
    )
    def test_missing_content_raises_invalid_response(
        self, client_and_session, fake_response, body
    ):
        client, session = client_and_session
        session.request.return_value = fake_response(body)

        with pytest.raises(InvalidTranslationResponseError) as exc_info:
            client.translate("Buy milk", "es")

        assert exc_info.value.response == body

    def test_error_status_is_not_raised_before_decoding(
        self, client_and_session, fake_response
    ):
        client, session = client_and_session
        session.request.return_value = fake_response(
            {"error": {"message": "Invalid API Key"}}, status_code=401
        )

        with pytest.raises(InvalidTranslationResponseError):
            client.translate("Buy milk", "es")

    def test_non_json_body_raises_library_error(self, client_and_session, fake_response):
        client, session = client_and_session
        session.request.return_value = fake_response(ValueError("Expecting value"))

        with pytest.raises(TaskLingoError, match="Invalid response format"):
            client.translate("Buy milk", "es")

    def test_network_error_propagates_without_retry(self, client_and_session):
        client, session = client_and_session
        session.request.side_effect = requests.ConnectionError("down")

        with pytest.raises(requests.ConnectionError):
            client.translate("Buy milk", "es")

        assert session.request.call_count == 1


class TestExtractTranslation:

    @pytest.mark.parametrize(
        "body",
        [
            None,
            "text",
            {"choices": "nope"},
            {"choices": [None]},
            {"choices": [{"message": None}]},
            {"choices": [{"message": {"content": None}}]},
            {"choices": [{"message": {"content": 12}}]},
        ],
    )
    def test_unusable_shapes(self, body):
        assert extract_translation(body) is None

    def test_first_choice_wins(self):
        body = {
            "choices": [
                {"message": {"content": "uno"}},
                {"message": {"content": "dos"}},
            ]
        }
        assert extract_translation(body) == "uno"


class TestChatCompletionService:

    def test_dict_payload_is_validated(self, client_and_session, fake_response):
        client, session = client_and_session
        session.request.return_value = fake_response(_completion("Hola"))
        service = ChatCompletionService(client.http, client.logger)

        service.call(
            {"model": "m", "messages": [{"role": "user", "content": "hi"}]}
        )

        payload = session.request.call_args.kwargs["json"]
        assert payload["temperature"] == 0.3
        assert payload["messages"] == [{"role": "user", "content": "hi"}]

    def test_invalid_dict_payload(self, client_and_session):
        client, session = client_and_session
        service = ChatCompletionService(client.http, client.logger)

        with pytest.raises(pydantic.ValidationError):
            service.call({"messages": "not a list"})
        session.request.assert_not_called()
