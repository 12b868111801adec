# smarttravel/core/cookies.py
"""
Session cookie handling.

The cookie carries the JWT, additionally signed with COOKIE_SECRET so that a
value not produced by this server is rejected before the JWT is even decoded.
"""
import datetime as dt

from fastapi import Request, Response
from itsdangerous import BadSignature, Signer

from smarttravel.config import Settings, settings
from smarttravel.core.errors import ConfigurationError


class SessionCookie:
    def __init__(self, config: Settings):
        self.config = config

    @property
    def name(self) -> str:
        return self.config.cookie_name

    def _signer(self) -> Signer:
        if not self.config.cookie_secret:
            raise ConfigurationError("COOKIE_SECRET is not configured")
        return Signer(self.config.cookie_secret, salt="smarttravel.session")

    def sign(self, token: str) -> str:
        return self._signer().sign(token.encode("utf-8")).decode("utf-8")

    def unsign(self, value: str) -> str | None:
        """Return the token inside a signed cookie value, or None if the signature is wrong."""
        try:
            return self._signer().unsign(value.encode("utf-8")).decode("utf-8")
        except BadSignature:
            return None

    def read(self, request: Request) -> str | None:
        """
        Extract the token from the request.

        Returns None when the cookie is absent, blank, or not signed by us.
        """
        raw = (request.cookies.get(self.name) or "").strip()
        if not raw:
            return None
        token = self.unsign(raw)
        if token is None or not token.strip():
            return None
        return token

    def _attrs(self) -> dict:
        # Shared by set and clear
        return {
            "path": "/",
            "domain": self.config.cookie_domain,
            "httponly": True,
            "secure": self.config.cookie_secure,
            "samesite": "lax",
        }

    def set(self, response: Response, token: str, ttl: dt.timedelta) -> dt.datetime:
        """Replace any existing session cookie with a new one; returns its expiry."""
        expires = dt.datetime.now(dt.timezone.utc) + ttl
        self.clear(response)
        response.set_cookie(
            self.name,
            self.sign(token),
            expires=expires,
            max_age=int(ttl.total_seconds()),
            **self._attrs(),
        )
        return expires

    def clear(self, response: Response) -> None:
        response.delete_cookie(self.name, **self._attrs())


session_cookie = SessionCookie(settings)
