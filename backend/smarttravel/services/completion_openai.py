"""
OpenAI Chat Completions Adapter

Calls the OpenAI chat completions endpoint over httpx. Every call is made
once, with a bounded timeout; any failure becomes a DependencyFailure.
"""
import logging
from typing import List, Optional

import httpx

from .completion_base import ChatTurn, CompletionService
from ..config import Settings, settings
from ..core.errors import DependencyFailure

logger = logging.getLogger("uvicorn.error")

FAILURE_MESSAGE = "Something went wrong"


class OpenAIChatService(CompletionService):
    """OpenAI Chat Completions Service"""

    def __init__(self, config: Optional[Settings] = None):
        config = config or settings
        self.api_key = config.openai_api_key
        self.organization = config.openai_organization
        self.api_url = config.openai_api_url
        self.model = config.chat_model
        self.timeout = config.chat_timeout_sec

    @property
    def name(self) -> str:
        return "OpenAI Chat Completions"

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    def _headers(self) -> dict:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    async def complete(self, messages: List[ChatTurn]) -> ChatTurn:
        if not self.is_available():
            logger.warning("[chat] %s: API key not configured", self.name)
            raise DependencyFailure(FAILURE_MESSAGE, cause="AI provider is not configured")

        payload = {
            "model": self.model,
            "messages": [m.as_dict() for m in messages],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.api_url, headers=self._headers(), json=payload)
                resp.raise_for_status()
                result = resp.json()
        except httpx.TimeoutException as e:
            logger.error("[chat] %s timed out after %ss", self.name, self.timeout, exc_info=True)
            raise DependencyFailure(FAILURE_MESSAGE, cause="AI provider timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error("[chat] %s returned HTTP %s", self.name, e.response.status_code)
            raise DependencyFailure(
                FAILURE_MESSAGE, cause=f"AI provider returned HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: body was not JSON
            logger.error("[chat] %s request failed", self.name, exc_info=True)
            raise DependencyFailure(FAILURE_MESSAGE, cause="AI provider request failed") from e

        try:
            message = result["choices"][0]["message"]
            content = (message.get("content") or "").strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error("[chat] %s returned an unexpected payload", self.name)
            raise DependencyFailure(FAILURE_MESSAGE, cause="AI provider returned an invalid response") from e

        if not content:
            logger.error("[chat] %s returned an empty reply", self.name)
            raise DependencyFailure(FAILURE_MESSAGE, cause="AI provider returned an empty reply")

        return ChatTurn(role="assistant", content=content)


# Global singleton
openai_chat_service = OpenAIChatService()
