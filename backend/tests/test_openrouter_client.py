"""
Tests for the OpenRouter chat client
"""
import httpx
import pytest
from unittest.mock import AsyncMock, Mock, patch

from core.exceptions import OracleException
from infrastructure.external.openrouter_client import OpenRouterClient


def completion(content):
    return {"choices": [{"message": {"content": content}}]}


class TestOpenRouterClient:
    """Test OpenRouter chat completions"""

    @pytest.fixture
    def client(self):
        return OpenRouterClient(api_key="test-key", api_url="https://example.test/chat", timeout=5.0)

    @pytest.fixture
    def mock_http(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client

            mock_response = Mock()
            mock_response.raise_for_status = Mock()
            mock_response.json.return_value = completion("  hello  ")
            mock_client.post.return_value = mock_response

            yield mock_client, mock_response

    @pytest.mark.asyncio
    async def test_chat_success(self, client, mock_http):
        """Test successful chat call"""
        mock_client, _ = mock_http

        result = await client.chat([{"role": "user", "content": "hi"}], model="test-model")

        assert result == "hello"
        call = mock_client.post.call_args
        assert call.args[0] == "https://example.test/chat"
        assert call.kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert call.kwargs["json"]["model"] == "test-model"
        assert call.kwargs["json"]["temperature"] == 0.0
        assert "response_format" not in call.kwargs["json"]
        assert call.kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_json_mode_requests_object(self, client, mock_http):
        mock_client, _ = mock_http

        await client.chat([{"role": "user", "content": "hi"}], model="m", json_mode=True, max_tokens=300)

        payload = mock_client.post.call_args.kwargs["json"]
        assert payload["response_format"] == {"type": "json_object"}
        assert payload["max_tokens"] == 300

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        client = OpenRouterClient(api_key=None)

        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(OracleException, match="not configured"):
                await client.chat([{"role": "user", "content": "hi"}], model="m")

        mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error_status(self, client, mock_http):
        _, mock_response = mock_http
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "503 Service Unavailable", request=Mock(), response=Mock()
        )

        with pytest.raises(OracleException, match="request failed"):
            await client.chat([{"role": "user", "content": "hi"}], model="m")

    @pytest.mark.asyncio
    async def test_transport_error(self, client, mock_http):
        mock_client, _ = mock_http
        mock_client.post.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(OracleException):
            await client.chat([{"role": "user", "content": "hi"}], model="m")

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client, mock_http):
        _, mock_response = mock_http
        mock_response.json.side_effect = ValueError("Expecting value")

        with pytest.raises(OracleException, match="invalid JSON"):
            await client.chat([{"role": "user", "content": "hi"}], model="m")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"choices": []}, {"choices": [{"message": None}]}])
    async def test_unexpected_payload(self, client, mock_http, body):
        _, mock_response = mock_http
        mock_response.json.return_value = body

        with pytest.raises(OracleException, match="Unexpected"):
            await client.chat([{"role": "user", "content": "hi"}], model="m")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", None])
    async def test_empty_content(self, client, mock_http, content):
        _, mock_response = mock_http
        mock_response.json.return_value = completion(content)

        with pytest.raises(OracleException, match="No response content"):
            await client.chat([{"role": "user", "content": "hi"}], model="m")
