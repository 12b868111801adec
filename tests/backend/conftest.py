import os
import uuid

# Settings are read from the environment at import time, so configure it first
TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["COOKIE_SECRET"] = "test-cookie-secret"
os.environ["OPENAI_API_KEY"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from smarttravel.config import settings
from smarttravel.core import db as db_module
from smarttravel.core.errors import DependencyFailure
from smarttravel.core.security import hash_password
from smarttravel.main import app
from smarttravel.models.user import User
from smarttravel.services.completion_base import ChatTurn, CompletionService
from smarttravel.services.completion_factory import get_completion_service

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

COOKIE_NAME = settings.cookie_name


class FakeCompletionService(CompletionService):
    """In-memory provider: echoes the last user message, or fails on demand."""

    def __init__(self):
        self.calls: list[list[ChatTurn]] = []
        self.fail = False

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    async def complete(self, messages):
        self.calls.append(list(messages))
        if self.fail:
            raise DependencyFailure("Something went wrong", cause="AI provider timed out")
        return ChatTurn(role="assistant", content=f"Echo: {messages[-1].content}")


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def completion():
    """
    Replace the AI provider with FakeCompletionService for the duration of a test.
    """
    fake = FakeCompletionService()
    app.dependency_overrides[get_completion_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_completion_service, None)


@pytest_asyncio.fixture
async def client(completion):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    The client keeps cookies between requests, like a browser.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(password: str = "UserPass!23", name: str = "Test User") -> tuple[User, str]:
        user = await User.create(
            name=name,
            email=f"user_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def login(client):
    """
    Helper fixture: log in through the API so the client holds the session cookie.
    """

    async def _login(email: str, password: str) -> str:
        resp = await client.post("/api/v1/user/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.cookies[COOKIE_NAME]

    return _login
