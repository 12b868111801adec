"""
Chat history storage primitives.

A user's history is an ordered, append-only list of ChatMessage rows. An
exchange (user message + assistant reply) is inserted in one transaction,
so either both rows exist or neither does. Appends are inserts, not a
rewrite of the whole list, so concurrent exchanges of the same user never
overwrite each other.
"""
from typing import List

from tortoise.transactions import in_transaction

from ..models.chat_message import ChatMessage, ChatRole
from ..models.user import User
from .completion_base import ChatTurn


async def load_history(user: User) -> List[ChatMessage]:
    return await ChatMessage.filter(user_id=user.id).order_by("seq")


def as_prompt(history: List[ChatMessage], new_message: str) -> List[ChatTurn]:
    """History mapped to role/content pairs, followed by the new user message."""
    turns = [ChatTurn(role=m.role.value, content=m.content) for m in history]
    turns.append(ChatTurn(role=ChatRole.USER.value, content=new_message))
    return turns


async def append_exchange(user: User, user_content: str, reply: ChatTurn) -> List[ChatMessage]:
    async with in_transaction() as conn:
        asked = await ChatMessage.create(
            user_id=user.id, role=ChatRole.USER, content=user_content, using_db=conn
        )
        answered = await ChatMessage.create(
            user_id=user.id, role=ChatRole.ASSISTANT, content=reply.content, using_db=conn
        )
    return [asked, answered]


async def clear_history(user: User) -> int:
    """Delete every message of the user; returns how many were removed."""
    return await ChatMessage.filter(user_id=user.id).delete()
