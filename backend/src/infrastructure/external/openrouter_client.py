"""
OpenRouter Chat Client
Thin async wrapper over the chat-completions endpoint
"""
from typing import Dict, List, Optional

import httpx
from loguru import logger

from core.exceptions import OracleException


class OpenRouterClient:
    """
    Async OpenRouter chat-completions client.

    Every failure mode (missing key, transport error, HTTP error status,
    unexpected payload, empty content) surfaces as OracleException so
    callers have a single thing to catch.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://openrouter.ai/api/v1/chat/completions",
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        if not self.api_key:
            logger.warning("OPENROUTER_API_KEY not set - oracle calls will fall back")

    async def chat(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> str:
        """
        Call OpenRouter LLM API

        Args:
            messages: Chat messages ({"role", "content"})
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            json_mode: Ask the model for a JSON object reply

        Returns:
            Generated text response (stripped)
        """
        if not self.api_key:
            raise OracleException("OpenRouter API key not configured")

        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json"
                    },
                    json=payload,
                    timeout=self.timeout
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise OracleException(f"OpenRouter request failed: {e}") from e
        except ValueError as e:
            raise OracleException(f"OpenRouter returned invalid JSON: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise OracleException(f"Unexpected OpenRouter payload: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise OracleException("No response content from OpenRouter")
        return content.strip()
