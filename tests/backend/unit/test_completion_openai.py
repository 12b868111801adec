"""
Unit tests for services.completion_openai module.
Tests request construction, reply parsing and failure mapping.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from smarttravel.config import Settings
from smarttravel.core.errors import DependencyFailure
from smarttravel.services.completion_base import ChatTurn
from smarttravel.services.completion_openai import OpenAIChatService

HISTORY = [
    ChatTurn(role="user", content="Hi"),
    ChatTurn(role="assistant", content="Hello! Where to?"),
    ChatTurn(role="user", content="Lisbon"),
]


def make_service(**overrides) -> OpenAIChatService:
    values = {"openai_api_key": "test-key", "chat_model": "gpt-3.5-turbo", "chat_timeout_sec": 5.0}
    values.update(overrides)
    return OpenAIChatService(Settings(**values))


def mock_http(mock_client_class, *, json_body=None, post_side_effect=None, raise_for_status=None):
    mock_response = MagicMock()
    mock_response.json.return_value = json_body
    mock_response.raise_for_status = MagicMock(side_effect=raise_for_status)

    mock_client = AsyncMock()
    mock_client.__aenter__.return_value.post = AsyncMock(
        return_value=mock_response, side_effect=post_side_effect
    )
    mock_client_class.return_value = mock_client
    return mock_client.__aenter__.return_value.post


class TestAvailability:
    def test_is_available_with_api_key(self):
        assert make_service().is_available() is True

    def test_is_available_without_api_key(self):
        assert make_service(openai_api_key=None).is_available() is False

    @pytest.mark.asyncio
    async def test_complete_without_api_key_fails(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(DependencyFailure) as exc:
                await make_service(openai_api_key=None).complete(HISTORY)
            mock_client_class.assert_not_called()
        assert exc.value.cause == "AI provider is not configured"


class TestComplete:
    @pytest.mark.asyncio
    async def test_complete_sends_history_and_returns_reply(self):
        body = {"choices": [{"message": {"role": "assistant", "content": " Try the Alfama district. "}}]}
        with patch("httpx.AsyncClient") as mock_client_class:
            post = mock_http(mock_client_class, json_body=body)
            reply = await make_service(openai_organization="org-1").complete(HISTORY)

        assert reply == ChatTurn(role="assistant", content="Try the Alfama district.")
        mock_client_class.assert_called_once_with(timeout=5.0)
        args, kwargs = post.call_args
        assert args[0] == "https://api.openai.com/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["headers"]["OpenAI-Organization"] == "org-1"
        assert kwargs["json"] == {
            "model": "gpt-3.5-turbo",
            "messages": [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello! Where to?"},
                {"role": "user", "content": "Lisbon"},
            ],
        }

    @pytest.mark.asyncio
    async def test_timeout_becomes_dependency_failure(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, post_side_effect=httpx.ReadTimeout("timed out"))
            with pytest.raises(DependencyFailure) as exc:
                await make_service().complete(HISTORY)
        assert exc.value.status_code == 500
        assert exc.value.cause == "AI provider timed out"

    @pytest.mark.asyncio
    async def test_http_error_becomes_dependency_failure(self):
        error = httpx.HTTPStatusError("rate limited", request=MagicMock(), response=MagicMock(status_code=429))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, json_body={}, raise_for_status=error)
            with pytest.raises(DependencyFailure) as exc:
                await make_service().complete(HISTORY)
        assert exc.value.cause == "AI provider returned HTTP 429"

    @pytest.mark.asyncio
    async def test_connection_error_becomes_dependency_failure(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, post_side_effect=httpx.ConnectError("refused"))
            with pytest.raises(DependencyFailure) as exc:
                await make_service().complete(HISTORY)
        assert exc.value.cause == "AI provider request failed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{"message": None}]},
        ],
    )
    async def test_malformed_payload_becomes_dependency_failure(self, body):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, json_body=body)
            with pytest.raises(DependencyFailure) as exc:
                await make_service().complete(HISTORY)
        assert exc.value.cause == "AI provider returned an invalid response"

    @pytest.mark.asyncio
    async def test_empty_reply_becomes_dependency_failure(self):
        body = {"choices": [{"message": {"role": "assistant", "content": "   "}}]}
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, json_body=body)
            with pytest.raises(DependencyFailure) as exc:
                await make_service().complete(HISTORY)
        assert exc.value.cause == "AI provider returned an empty reply"
