"""Tests for statistics and format endpoints."""

from httpx import AsyncClient

from deckledger.filtering.format_scope import FORMATS


class TestOverview:
    async def test_record_and_recent(self, client: AsyncClient) -> None:
        response = await client.get("/stats/overview")

        assert response.status_code == 200
        data = response.json()
        assert data["record"] == {"wins": 2, "losses": 2, "draws": 1, "total": 5, "win_rate": 40}
        assert [m["id"] for m in data["recent"]] == ["m5", "m4", "m3"]

    async def test_recent_limit(self, client: AsyncClient) -> None:
        response = await client.get("/stats/overview", params={"recent": 1})

        assert len(response.json()["recent"]) == 1

    async def test_follows_new_matches(self, client: AsyncClient) -> None:
        await client.post("/matches", json={"deck_id": "d2", "opponent": "Nix", "result": "win"})

        response = await client.get("/stats/overview")

        assert response.json()["record"]["total"] == 6
        assert response.json()["record"]["win_rate"] == 50


class TestDeckStats:
    async def test_best_first(self, client: AsyncClient) -> None:
        response = await client.get("/stats/decks")

        data = response.json()
        assert [(d["deck_id"], d["win_rate"]) for d in data] == [
            ("d1", 67),
            ("d2", 0),
            ("d3", 0),
        ]
        assert data[0]["deck_name"] == "Lorraine Aggro"
        assert data[2]["draws"] == 1


class TestOpponentStats:
    async def test_scoped_to_format(self, client: AsyncClient) -> None:
        response = await client.get("/stats/opponents", params={"format": "Standard"})

        data = response.json()
        assert [(o["label"], o["total"]) for o in data] == [("Nix", 2), ("Zander", 2)]

    async def test_deck_filter(self, client: AsyncClient) -> None:
        response = await client.get(
            "/stats/opponents", params={"format": "Standard", "deck_id": "d2"}
        )

        assert response.json() == [
            {"label": "Nix", "wins": 0, "losses": 1, "draws": 0, "total": 1, "win_rate": 0}
        ]

    async def test_format_without_decks(self, client: AsyncClient) -> None:
        response = await client.get("/stats/opponents", params={"format": "Re:Constructed"})

        assert response.json() == []

    async def test_format_required(self, client: AsyncClient) -> None:
        response = await client.get("/stats/opponents")

        assert response.status_code == 422


class TestFormats:
    async def test_lists_formats_with_heroes(self, client: AsyncClient) -> None:
        response = await client.get("/formats")

        data = response.json()
        assert [f["name"] for f in data] == list(FORMATS)
        peasant = next(f for f in data if f["name"] == "Peasant")
        assert peasant["heroes"] == ["Lorraine", "Rai", "Silvie", "Zander"]

    async def test_decks_of_format(self, client: AsyncClient) -> None:
        response = await client.get("/formats/Standard/decks")

        assert [d["id"] for d in response.json()["decks"]] == ["d2", "d1"]

    async def test_format_with_no_decks(self, client: AsyncClient) -> None:
        response = await client.get("/formats/Modern/decks")

        assert response.json() == {"decks": [], "count": 0}
