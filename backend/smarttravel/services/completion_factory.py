"""
Chat Completion Service Factory

Uses OpenAI Chat Completions for assistant replies. Routers depend on
get_completion_service, so tests can swap the provider via dependency_overrides.
"""
import logging

from .completion_base import CompletionService
from .completion_openai import openai_chat_service

logger = logging.getLogger("uvicorn.error")


def get_completion_service() -> CompletionService:
    """
    Get the chat completion service

    Note:
    - Need to configure OPENAI_API_KEY in .env; without it every call
      fails with DependencyFailure instead of failing here, so request
      validation and authentication still answer first
    """
    if not openai_chat_service.is_available():
        logger.warning("[chat] %s not configured (OPENAI_API_KEY missing)", openai_chat_service.name)
    return openai_chat_service
