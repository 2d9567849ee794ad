"""
Shared fixtures.

The API runs against an in-memory SQLite database (aiosqlite, one shared
connection). The LLM, email and payment clients are replaced through
FastAPI dependency overrides, so no test talks to the network.
"""

from datetime import timedelta
import uuid
from typing import Any, AsyncIterator, Optional
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from esoteric_planner.api.dependencies.database import get_db
from esoteric_planner.api.dependencies.services import get_email, get_gateway, get_llm
from esoteric_planner.api.main import create_application
from esoteric_planner.shared.adapters.llm_adapter import CompletionResult
from esoteric_planner.shared.adapters.payment_gateway import ProdamusGateway
from esoteric_planner.shared.models import Base, User, utcnow
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.services.auth_service import AuthService
from esoteric_planner.shared.utils.security import SecurityUtils

TEST_PASSWORD = "secret-pass"
PRODAMUS_SECRET = "prodamus-test-secret"


# ═══════════════════════════════════════════════════════════════════════════════
# FAKE EXTERNAL CLIENTS
# ═══════════════════════════════════════════════════════════════════════════════


class FakeLLM:
    """
    Stands in for LLMAdapter.

    Answers are taken from `responses` in order; once exhausted the
    `default` answer is returned. An Exception in the queue is raised.
    """

    def __init__(self, default: str = "") -> None:
        self.default = default
        self.responses: list[Any] = []
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> CompletionResult:
        self.calls.append(
            {
                "system": system_prompt,
                "user": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        answer = self.responses.pop(0) if self.responses else self.default
        if isinstance(answer, Exception):
            raise answer
        return CompletionResult(
            content=answer,
            model="fake-model",
            usage_prompt_tokens=0,
            usage_completion_tokens=0,
        )


class FakeEmail:
    """Records outgoing emails instead of calling Rusender."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.welcome: list[tuple[str, str]] = []
        self.resets: list[tuple[str, str]] = []

    async def send_welcome_email(self, email: str, password: str) -> bool:
        self.welcome.append((email, password))
        return self.succeed

    async def send_password_reset_email(self, email: str, reset_link: str) -> bool:
        self.resets.append((email, reset_link))
        return self.succeed

    def last_reset_token(self) -> str:
        _, link = self.resets[-1]
        return parse_qs(urlparse(link).query)["token"][0]


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session
        await session.commit()


# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def fake_email() -> FakeEmail:
    return FakeEmail()


@pytest.fixture
def gateway() -> ProdamusGateway:
    return ProdamusGateway(url="https://pay.example.com/", secret_key=PRODAMUS_SECRET)


@pytest.fixture
def app(session_factory, fake_llm, fake_email, gateway):
    application = create_application()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_llm] = lambda: fake_llm
    application.dependency_overrides[get_email] = lambda: fake_email
    application.dependency_overrides[get_gateway] = lambda: gateway
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ═══════════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def make_user(session_factory):
    """Insert a user directly; defaults to an active trial."""
    counter = {"n": 0}

    async def _make_user(**fields: Any) -> User:
        counter["n"] += 1
        values = {
            "email": f"user{counter['n']}@example.com",
            "password_hash": SecurityUtils.hash_password(TEST_PASSWORD),
            "subscription_tier": SubscriptionTier.TRIAL.value,
            "trial_ends_at": utcnow() + timedelta(days=3),
            "generations_limit": 50,
        }
        values.update(fields)
        async with session_factory() as session:
            user = User(**values)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


@pytest.fixture
def load_user(session_factory):
    """Re-read a user to see what the API committed."""

    async def _load_user(user_id) -> User:
        async with session_factory() as session:
            return await session.get(User, uuid.UUID(str(user_id)))

    return _load_user


def auth_headers(user: User) -> dict[str, str]:
    token, _ = AuthService.create_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user(make_user) -> User:
    return await make_user()


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user(email="admin@example.com", is_admin=True)


@pytest.fixture
def user_headers(user) -> dict[str, str]:
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)
