"""
Chat Completion Service Abstract Interface

Provides a unified interface for AI providers that produce the assistant
reply for a conversation (OpenAI Chat Completions / others).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ChatTurn:
    """One message of the prompt context: role ("user" / "assistant") and text"""
    role: str
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class CompletionService(ABC):
    """Chat Completion Service Abstract Base Class"""

    @abstractmethod
    async def complete(self, messages: List[ChatTurn]) -> ChatTurn:
        """
        Produce the assistant reply for an ordered conversation

        Parameters:
        - messages: Full history in chronological order, newest user message last

        Returns:
        - ChatTurn with role "assistant" and non-empty content

        Raises:
        - DependencyFailure: provider not configured, unreachable, timed out or returned garbage
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if service is configured"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name (e.g., "OpenAI Chat Completions")"""
        pass
