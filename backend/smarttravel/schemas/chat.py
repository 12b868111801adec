# smarttravel/schemas/chat.py
"""
Pydantic schemas for chat endpoints.
"""
from pydantic import BaseModel, field_validator


class ChatMessageIn(BaseModel):
    """
    Request model for sending a chat message.
    The message is trimmed and must not be empty afterwards.
    """
    message: str

    @field_validator("message")
    @classmethod
    def check_message(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("Message content is required")
        return text
