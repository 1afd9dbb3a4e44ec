"""Tests for health, readiness and sync endpoints."""

from httpx import ASGITransport, AsyncClient

from deckledger.api.deps import get_tracker
from deckledger.main import app
from deckledger.models.failure import RemoteUnavailableError
from deckledger.remote.identity import Identity
from deckledger.sync.tracker import Tracker
from tests.fakes import USER_ID, FakeRemoteStore, deck_row


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_health_skips_remote(self, client: AsyncClient, tracker: Tracker) -> None:
        assert isinstance(tracker.store, FakeRemoteStore)
        calls = len(tracker.store.calls)

        await client.get("/health")

        assert len(tracker.store.calls) == calls


class TestReadyEndpoint:
    async def test_ready_when_loaded(self, client: AsyncClient) -> None:
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["mirrors"] == {"ga_decks": True, "matches": True, "tournaments": True}

    async def test_not_ready_after_identity_change(
        self, client: AsyncClient, tracker: Tracker
    ) -> None:
        tracker.identity.set(Identity(user_id="user-2"))

        response = await client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not ready"

    async def test_no_tracker(self) -> None:
        """Without an initialized tracker every dependent route is unavailable."""
        app.dependency_overrides.pop(get_tracker, None)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        assert response.status_code == 503


class TestSyncEndpoint:
    async def test_reload_picks_up_remote_changes(
        self, client: AsyncClient, seeded_store: FakeRemoteStore
    ) -> None:
        seeded_store.seed("ga_decks", USER_ID, deck_row("d4", "Elsewhere", "2025-06-01"))

        response = await client.post("/sync")

        assert response.status_code == 200
        assert response.json() == {
            "loaded": {"ga_decks": 4, "matches": 5, "tournaments": 1},
            "failures": {},
        }
        assert (await client.get("/decks")).json()["decks"][0]["id"] == "d4"

    async def test_partial_failure(
        self, client: AsyncClient, seeded_store: FakeRemoteStore
    ) -> None:
        seeded_store.fail_next("list", RemoteUnavailableError("Network down"))

        response = await client.post("/sync")

        assert response.status_code == 503
        data = response.json()
        assert data["failures"]["ga_decks"]["kind"] == "service_unavailable"
        assert data["loaded"] == {"matches": 5, "tournaments": 1}
        assert (await client.get("/decks")).json()["count"] == 3
