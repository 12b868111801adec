import logging
import uuid

from fastapi import Depends, Request

from smarttravel.core.cookies import SessionCookie, session_cookie
from smarttravel.core.errors import PermissionDenied, Unauthenticated
from smarttravel.core.security import InvalidToken, TokenData, TokenService, token_service
from smarttravel.models.user import User

logger = logging.getLogger("uvicorn.error")


def get_token_service() -> TokenService:
    return token_service


def get_session_cookie() -> SessionCookie:
    return session_cookie


async def require_session(
    request: Request,
    cookie: SessionCookie = Depends(get_session_cookie),
    tokens: TokenService = Depends(get_token_service),
) -> TokenData:
    """
    FastAPI dependency that gates protected endpoints.

    Reads the signed session cookie, verifies the token inside it and
    attaches the decoded identity to request.state.session. It never
    touches the database; handlers re-check that the user still exists.

    Raises:
        Unauthenticated (401) "Token Not Received": cookie absent, blank or not signed by us
        Unauthenticated (401) "Token Expired": bad token signature or expired token
    """
    token = cookie.read(request)
    if not token:
        raise Unauthenticated("Token Not Received")

    try:
        session = tokens.verify(token)
    except InvalidToken as e:
        logger.warning("[auth] rejected session token: %s", e)
        raise Unauthenticated("Token Expired")

    request.state.session = session
    return session


async def get_session_user(session: TokenData = Depends(require_session)) -> User:
    """
    FastAPI dependency resolving the session identity to a stored user.

    Raises:
        Unauthenticated (401): user no longer exists
        PermissionDenied (401): stored id does not match the token id
    """
    try:
        user_id = uuid.UUID(session.id)
    except ValueError:
        user_id = None
    user = await User.get_or_none(id=user_id) if user_id else None
    if not user:
        raise Unauthenticated("User not registered OR token malfunctioned")
    if str(user.id) != session.id:
        raise PermissionDenied("Permission denied", status_code=401)
    return user
