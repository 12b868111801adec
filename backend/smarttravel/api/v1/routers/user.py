import logging

from fastapi import APIRouter, Depends, Response, status
from tortoise.exceptions import IntegrityError

from smarttravel.api.v1.deps import get_session_cookie, get_session_user, get_token_service
from smarttravel.core.cookies import SessionCookie
from smarttravel.core.errors import Conflict, NotFound, Unauthenticated
from smarttravel.core.security import TokenService, hash_password, verify_password
from smarttravel.models.user import User
from smarttravel.schemas.auth import LoginIn, SignupIn

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupIn):
    """
    Register a new user account.

    The e-mail is stored lowercased and must be unique; the password is
    hashed before storage and never echoed back.

    Returns:
        201 {message, id, name, email}

    Errors:
        400: field validation failed (name, email, password)
        401: "User already exists"
    """
    if await User.exists(email=body.email):
        raise Conflict("User already exists")
    try:
        user = await User.create(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
        )
    except IntegrityError:
        # Concurrent signup with the same e-mail won the unique index
        raise Conflict("User already exists")
    logger.info("[auth] created user id=%s", user.id)
    return {"message": "User created successfully", **user.public()}


@router.post("/login")
async def login(
    body: LoginIn,
    response: Response,
    cookie: SessionCookie = Depends(get_session_cookie),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Authenticate a user and start a session.

    Replaces any existing session cookie with a new signed, httpOnly cookie
    holding a token valid for the configured TTL (7 days by default).

    Errors:
        401: "User not registered"
        403: "Incorrect password"
    """
    user = await User.get_or_none(email=body.email)
    if not user:
        logger.warning("[auth] login for unknown e-mail")
        raise NotFound("User not registered", status_code=status.HTTP_401_UNAUTHORIZED)
    if not verify_password(body.password, user.password_hash):
        logger.warning("[auth] incorrect password for user id=%s", user.id)
        raise Unauthenticated("Incorrect password", status_code=status.HTTP_403_FORBIDDEN)

    ttl = tokens.default_ttl
    token = tokens.issue(str(user.id), user.email, ttl)
    cookie.set(response, token, ttl)
    return {"message": "Login successful", **user.public()}


@router.get("/auth-status")
async def auth_status(user: User = Depends(get_session_user)):
    """
    Confirm the session cookie still maps to an existing user.
    """
    return {"message": "User verified", **user.public()}


@router.get("/logout")
async def logout(
    response: Response,
    user: User = Depends(get_session_user),
    cookie: SessionCookie = Depends(get_session_cookie),
):
    """
    End the session by clearing the cookie.

    Note:
        Tokens are self-contained, so the token itself stays valid until it
        expires; only the cookie carrying it is removed.
    """
    cookie.clear(response)
    return {"message": "Logout successful", **user.public()}
