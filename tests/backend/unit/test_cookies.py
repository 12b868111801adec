"""
Unit tests for core.cookies module.
Tests signing, reading and setting/clearing the session cookie.
"""
import datetime as dt

import pytest
from fastapi import Response
from starlette.requests import Request

from smarttravel.config import Settings
from smarttravel.core.cookies import SessionCookie
from smarttravel.core.errors import ConfigurationError


def make_request(cookie_header: str | None = None) -> Request:
    headers = []
    if cookie_header is not None:
        headers.append((b"cookie", cookie_header.encode("latin-1")))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


@pytest.fixture
def cookie():
    return SessionCookie(Settings(cookie_secret="unit-cookie-secret", cookie_name="auth_token"))


class TestSigning:
    def test_sign_and_unsign(self, cookie):
        signed = cookie.sign("header.payload.signature")
        assert signed != "header.payload.signature"
        assert cookie.unsign(signed) == "header.payload.signature"

    def test_unsign_rejects_tampered_value(self, cookie):
        signed = cookie.sign("header.payload.signature")
        assert cookie.unsign(signed.replace("payload", "PAYLOAD")) is None

    def test_unsign_rejects_other_secret(self, cookie):
        other = SessionCookie(Settings(cookie_secret="other-secret"))
        assert cookie.unsign(other.sign("token")) is None

    def test_missing_secret_fails_fast(self):
        with pytest.raises(ConfigurationError):
            SessionCookie(Settings(cookie_secret=None)).sign("token")


class TestRead:
    def test_absent_cookie(self, cookie):
        assert cookie.read(make_request()) is None

    def test_blank_cookie(self, cookie):
        assert cookie.read(make_request("auth_token=   ")) is None

    def test_unsigned_cookie(self, cookie):
        assert cookie.read(make_request("auth_token=plain-token")) is None

    def test_signed_cookie(self, cookie):
        signed = cookie.sign("header.payload.signature")
        assert cookie.read(make_request(f"auth_token={signed}")) == "header.payload.signature"


class TestSetAndClear:
    def test_set_replaces_existing_cookie(self, cookie):
        response = Response()
        expires = cookie.set(response, "token", dt.timedelta(days=7))
        headers = response.headers.getlist("set-cookie")

        assert len(headers) == 2
        cleared, issued = headers
        assert "Max-Age=0" in cleared
        assert issued.startswith("auth_token=")
        assert "HttpOnly" in issued
        assert "Path=/" in issued
        assert f"Max-Age={7 * 24 * 3600}" in issued
        assert expires > dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=6)

    def test_clear_uses_same_attributes(self, cookie):
        response = Response()
        cookie.clear(response)
        header = response.headers["set-cookie"]
        assert header.startswith("auth_token=")
        assert "Max-Age=0" in header
        assert "HttpOnly" in header
        assert "Path=/" in header

    def test_domain_is_applied_when_configured(self):
        scoped = SessionCookie(Settings(cookie_secret="s", cookie_domain="example.com"))
        response = Response()
        scoped.set(response, "token", dt.timedelta(days=1))
        assert all("Domain=example.com" in h for h in response.headers.getlist("set-cookie"))
