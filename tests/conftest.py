from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from deckledger.api.deps import get_tracker
from deckledger.main import app
from deckledger.models.db import Base
from deckledger.remote.identity import Identity, IdentitySource
from deckledger.sync.tracker import Tracker
from tests.fakes import USER_ID, FakeRemoteStore, deck_row, match_row


@pytest.fixture
def identity() -> Identity:
    return Identity(user_id=USER_ID, access_token="token-1")


@pytest.fixture
def identity_source(identity: Identity) -> IdentitySource:
    return IdentitySource(identity)


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def seeded_store(store: FakeRemoteStore) -> FakeRemoteStore:
    """Two Standard decks, one Peasant deck, and a handful of matches."""
    store.seed("ga_decks", USER_ID, deck_row("d1", "Lorraine Aggro", "2025-01-01T00:00:00+00:00"))
    store.seed(
        "ga_decks",
        USER_ID,
        deck_row("d2", "Silvie Tempo", "2025-01-03T00:00:00+00:00", hero="Silvie"),
    )
    store.seed(
        "ga_decks",
        USER_ID,
        deck_row("d3", "Rai Budget", "2025-01-02T00:00:00+00:00", hero="Rai", format="Peasant"),
    )

    store.seed("matches", USER_ID, match_row("m1", "d1", "Zander", "win", "2025-02-01T10:00:00Z"))
    store.seed("matches", USER_ID, match_row("m2", "d1", "Zander", "loss", "2025-02-02T10:00:00Z"))
    store.seed("matches", USER_ID, match_row("m3", "d1", "Nix", "win", "2025-02-03T10:00:00Z"))
    store.seed("matches", USER_ID, match_row("m4", "d2", "Nix", "loss", "2025-02-04T10:00:00Z"))
    store.seed("matches", USER_ID, match_row("m5", "d3", "Rai", "draw", "2025-02-05T10:00:00Z"))

    store.seed(
        "tournaments",
        USER_ID,
        {"id": "t1", "name": "Store Championship", "date": "2025-02-01", "format": "Standard"},
    )
    return store


@pytest.fixture
async def tracker(seeded_store: FakeRemoteStore, identity_source: IdentitySource) -> Tracker:
    tracker = Tracker(seeded_store, identity_source)
    await tracker.refresh()
    return tracker


@pytest.fixture
async def client(tracker: Tracker) -> AsyncIterator[AsyncClient]:
    """Provide an async test client with the tracker dependency overridden."""
    app.dependency_overrides[get_tracker] = lambda: tracker

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session
