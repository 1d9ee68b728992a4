import contextlib
from collections.abc import AsyncIterator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.config.database import engine
from src.config.rate_limit import limiter
from src.events.repository import orm_models  # noqa: F401
from src.main import app
from src.models import BaseModel
from src.payments.store import InMemoryPaymentStore


@pytest.fixture(autouse=True)
async def database():
    """A fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
        await conn.run_sync(BaseModel.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)


@pytest.fixture(autouse=True)
def reset_app_state():
    limiter.reset()
    app.state.payment_store = InMemoryPaymentStore()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client_factory() -> Callable[[dict], contextlib.AbstractAsyncContextManager[AsyncClient]]:
    @contextlib.asynccontextmanager
    async def _client(overrides: dict | None = None) -> AsyncIterator[AsyncClient]:
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _client


@pytest.fixture
async def client(client_factory) -> AsyncIterator[AsyncClient]:
    async with client_factory() as ac:
        yield ac
