"""Tests for the GeminiApiClient."""

from unittest.mock import Mock

import pytest
import requests

from src.assistant_domain.infrastructure.api_clients.gemini_api_client import GeminiApiClient
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import APIError, APITimeoutError


def _gemini_response(text: str) -> Mock:
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return mock_response


@pytest.fixture
def client(mocker) -> GeminiApiClient:
    mocker.patch.object(settings, "GEMINI_API_KEY", "test_key")
    mocker.patch.object(settings, "GEMINI_API_BASE_URL", "https://api.example.com/v1beta")
    mocker.patch.object(settings, "GEMINI_MODEL", "gemini-test")
    mocker.patch.object(settings, "LLM_TIMEOUT_SECONDS", 5.0)
    mocker.patch.object(settings, "LLM_MAX_RETRIES", 1)
    return GeminiApiClient()


def test_generate_text_success(client, mocker) -> None:
    mock_session_post = mocker.patch.object(client.session, "post", return_value=_gemini_response("Restock Nike."))

    result = client.generate_text("How is my stock?")

    assert result == "Restock Nike."
    mock_session_post.assert_called_once()
    args, kwargs = mock_session_post.call_args
    assert args[0] == "https://api.example.com/v1beta/models/gemini-test:generateContent"
    assert kwargs["params"] == {"key": "test_key"}
    assert kwargs["timeout"] == 5.0
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "How is my stock?"


def test_generate_text_joins_multiple_parts(client, mocker) -> None:
    mock_response = Mock()
    mock_response.json.return_value = {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
    mocker.patch.object(client.session, "post", return_value=mock_response)

    assert client.generate_text("prompt") == "ab"


def test_generate_text_without_key_raises(mocker) -> None:
    mocker.patch.object(settings, "GEMINI_API_KEY", None)
    client = GeminiApiClient()
    mock_session_post = mocker.patch.object(client.session, "post")

    assert client.is_configured is False
    with pytest.raises(APIError):
        client.generate_text("prompt")
    mock_session_post.assert_not_called()


def test_timeout_is_retried_once_then_raises_timeout_error(client, mocker) -> None:
    mock_session_post = mocker.patch.object(
        client.session, "post", side_effect=requests.exceptions.Timeout("Read timed out.")
    )

    with pytest.raises(APITimeoutError) as exc_info:
        client.generate_text("prompt")

    assert mock_session_post.call_count == 2
    assert exc_info.value.timeout_seconds == 5.0


def test_timeout_followed_by_success(client, mocker) -> None:
    mock_session_post = mocker.patch.object(
        client.session,
        "post",
        side_effect=[requests.exceptions.Timeout("Read timed out."), _gemini_response("Recovered.")],
    )

    assert client.generate_text("prompt") == "Recovered."
    assert mock_session_post.call_count == 2


def test_http_error_raises_api_error_without_retry(client, mocker) -> None:
    mock_response = Mock()
    mock_response.status_code = 400
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(
        "400 Client Error", response=mock_response
    )
    mock_session_post = mocker.patch.object(client.session, "post", return_value=mock_response)

    with pytest.raises(APIError) as exc_info:
        client.generate_text("prompt")

    assert not isinstance(exc_info.value, APITimeoutError)
    assert exc_info.value.status_code == 400
    assert mock_session_post.call_count == 1


def test_response_without_candidates_raises(client, mocker) -> None:
    mock_response = Mock()
    mock_response.json.return_value = {"promptFeedback": {"blockReason": "SAFETY"}}
    mocker.patch.object(client.session, "post", return_value=mock_response)

    with pytest.raises(APIError):
        client.generate_text("prompt")


def test_invalid_json_raises(client, mocker) -> None:
    mock_response = Mock()
    mock_response.json.side_effect = ValueError("No JSON object could be decoded")
    mocker.patch.object(client.session, "post", return_value=mock_response)

    with pytest.raises(APIError):
        client.generate_text("prompt")
