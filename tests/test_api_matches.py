"""Tests for match API endpoints."""

from collections.abc import Mapping
from typing import Any

import pytest
from httpx import AsyncClient

from deckledger.models.failure import Outcome
from deckledger.models.match import Match
from deckledger.sync.tracker import Tracker
from tests.fakes import USER_ID, FakeRemoteStore

TWO_ONE = [
    {"went_first": True, "result": "win"},
    {"went_first": False, "result": "loss"},
    {"went_first": True, "result": "win"},
]


class TestListMatches:
    async def test_newest_first(self, client: AsyncClient) -> None:
        response = await client.get("/matches")

        data = response.json()
        assert data["count"] == 5
        assert [m["id"] for m in data["matches"]] == ["m5", "m4", "m3", "m2", "m1"]

    async def test_includes_deck_name(self, client: AsyncClient) -> None:
        response = await client.get("/matches")

        names = {m["id"]: m["deck_name"] for m in response.json()["matches"]}
        assert names["m1"] == "Lorraine Aggro"
        assert names["m5"] == "Rai Budget"

    async def test_deck_filter(self, client: AsyncClient) -> None:
        response = await client.get("/matches", params={"deck_id": "d1"})

        assert [m["id"] for m in response.json()["matches"]] == ["m3", "m2", "m1"]

    async def test_get_one(self, client: AsyncClient) -> None:
        response = await client.get("/matches/m1")

        assert response.status_code == 200
        assert response.json()["opponent"] == "Zander"

    async def test_get_missing(self, client: AsyncClient) -> None:
        assert (await client.get("/matches/nope")).status_code == 404


class TestCreateMatch:
    async def test_result_derived_from_games(
        self, client: AsyncClient, seeded_store: FakeRemoteStore
    ) -> None:
        response = await client.post(
            "/matches", json={"deck_id": "d2", "opponent": "Zander", "games": TWO_ONE}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["result"] == "win"
        assert data["deck_name"] == "Silvie Tempo"
        assert data["games"] == TWO_ONE
        stored = seeded_store.rows("matches", USER_ID)[-1]
        assert stored["opponent_deck"] == "Zander"
        assert stored["games"][1] == {"first": False, "result": "loss"}

    async def test_newest_match_listed_first(self, client: AsyncClient) -> None:
        await client.post(
            "/matches",
            json={
                "deck_id": "d1",
                "opponent": "Nix",
                "result": "loss",
                "date": "2025-03-01T12:00:00Z",
            },
        )

        response = await client.get("/matches")

        first = response.json()["matches"][0]
        assert first["opponent"] == "Nix"
        assert first["games"] == []

    async def test_contradicting_result(self, client: AsyncClient) -> None:
        response = await client.post(
            "/matches",
            json={"deck_id": "d1", "opponent": "Nix", "games": TWO_ONE, "result": "loss"},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "validation_failed"

    async def test_needs_result_or_games(self, client: AsyncClient) -> None:
        response = await client.post("/matches", json={"deck_id": "d1", "opponent": "Nix"})

        assert response.status_code == 422
        assert (await client.get("/matches")).json()["count"] == 5

    async def test_at_most_three_games(self, client: AsyncClient) -> None:
        games = [*TWO_ONE, {"went_first": False, "result": "loss"}]

        response = await client.post(
            "/matches", json={"deck_id": "d1", "opponent": "Nix", "games": games}
        )

        assert response.status_code == 422

    async def test_unacknowledged_create(
        self, client: AsyncClient, tracker: Tracker, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def create(fields: Mapping[str, Any]) -> Outcome[Match]:
            return Outcome.success(None)

        monkeypatch.setattr(tracker.matches, "create", create)

        response = await client.post(
            "/matches", json={"deck_id": "d1", "opponent": "Nix", "result": "win"}
        )

        assert response.status_code == 503
        assert response.json()["detail"]["kind"] == "service_unavailable"


class TestUpdateMatch:
    async def test_new_games_rederive_result(self, client: AsyncClient) -> None:
        response = await client.patch(
            "/matches/m1",
            json={
                "games": [
                    {"went_first": True, "result": "loss"},
                    {"went_first": False, "result": "loss"},
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == "loss"
        assert data["opponent"] == "Zander"

    async def test_result_only(self, client: AsyncClient) -> None:
        response = await client.patch("/matches/m1", json={"result": "draw"})

        assert response.json()["result"] == "draw"

    async def test_assign_tournament(self, client: AsyncClient) -> None:
        await client.patch("/matches/m3", json={"tournament_id": "t1"})

        response = await client.get("/matches", params={"tournament_id": "t1"})

        assert [m["id"] for m in response.json()["matches"]] == ["m3"]

    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.patch("/matches/nope", json={"result": "win"})

        assert response.status_code == 404


class TestDeleteMatch:
    async def test_deleted(self, client: AsyncClient) -> None:
        response = await client.delete("/matches/m1")

        assert response.json() == {"id": "m1", "deleted": True}
        assert (await client.get("/matches")).json()["count"] == 4

    async def test_not_found(self, client: AsyncClient) -> None:
        assert (await client.delete("/matches/nope")).status_code == 404
