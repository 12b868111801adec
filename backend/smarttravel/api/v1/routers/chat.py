import logging

from fastapi import APIRouter, Depends

from smarttravel.api.v1.deps import get_session_user
from smarttravel.models.user import User
from smarttravel.schemas.chat import ChatMessageIn
from smarttravel.services.chat_history import append_exchange, as_prompt, clear_history, load_history
from smarttravel.services.completion_base import CompletionService
from smarttravel.services.completion_factory import get_completion_service

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/new")
async def new_chat(
    body: ChatMessageIn,
    user: User = Depends(get_session_user),
    completion: CompletionService = Depends(get_completion_service),
):
    """
    Send a message and get the assistant's reply.

    The provider sees the whole history plus the new message. The user
    message and the reply are stored together only after the provider
    answered; on provider failure nothing is stored.

    Returns:
        200 {chats: [...]} - the full updated history, oldest first

    Errors:
        400: empty message
        401: not authenticated
        500: provider failure or timeout
    """
    history = await load_history(user)
    reply = await completion.complete(as_prompt(history, body.message))
    await append_exchange(user, body.message, reply)
    history = await load_history(user)
    logger.info("[chat] stored exchange for user id=%s (%d messages)", user.id, len(history))
    return {"chats": [m.to_dict() for m in history]}


@router.get("/all-chats")
async def all_chats(user: User = Depends(get_session_user)):
    """
    Return the user's full chat history, oldest first.
    """
    history = await load_history(user)
    return {"message": "OK", "chats": [m.to_dict() for m in history]}


@router.delete("/delete")
async def delete_chats(user: User = Depends(get_session_user)):
    """
    Remove every message from the user's chat history.
    """
    removed = await clear_history(user)
    logger.info("[chat] cleared %d messages for user id=%s", removed, user.id)
    return {"message": "OK"}
