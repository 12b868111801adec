"""
Services Module

Provides interfaces for external services and chat storage:
- Chat completion (assistant replies): OpenAI Chat Completions
- Chat history: ordered, append-only per-user message storage
"""

# Chat completion service interface
from .completion_base import (
    ChatTurn,
    CompletionService,
)
from .completion_factory import get_completion_service
from .completion_openai import openai_chat_service

# Chat history storage
from .chat_history import (
    append_exchange,
    as_prompt,
    clear_history,
    load_history,
)

__all__ = [
    # Chat completion
    "ChatTurn",
    "CompletionService",
    "get_completion_service",
    "openai_chat_service",
    # Chat history
    "append_exchange",
    "as_prompt",
    "clear_history",
    "load_history",
]
