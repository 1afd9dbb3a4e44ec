"""Tests for tournament API endpoints."""

from httpx import AsyncClient


class TestTournaments:
    async def test_list(self, client: AsyncClient) -> None:
        response = await client.get("/tournaments")

        data = response.json()
        assert data["count"] == 1
        assert data["tournaments"][0]["name"] == "Store Championship"

    async def test_detail_includes_record(self, client: AsyncClient) -> None:
        await client.patch("/matches/m1", json={"tournament_id": "t1"})
        await client.patch("/matches/m2", json={"tournament_id": "t1"})
        await client.patch("/matches/m3", json={"tournament_id": "t1"})

        response = await client.get("/tournaments/t1")

        assert response.status_code == 200
        record = response.json()["record"]
        assert (record["wins"], record["losses"], record["win_rate"]) == (2, 1, 67)

    async def test_detail_without_matches(self, client: AsyncClient) -> None:
        response = await client.get("/tournaments/t1")

        assert response.json()["record"]["total"] == 0

    async def test_not_found(self, client: AsyncClient) -> None:
        assert (await client.get("/tournaments/nope")).status_code == 404

    async def test_create_newest_first(self, client: AsyncClient) -> None:
        response = await client.post(
            "/tournaments",
            json={
                "name": "Regional Qualifier",
                "date": "2025-04-12T09:00:00Z",
                "format": "Peasant",
            },
        )

        assert response.status_code == 201
        listed = (await client.get("/tournaments")).json()["tournaments"]
        assert [t["name"] for t in listed] == ["Regional Qualifier", "Store Championship"]

    async def test_create_requires_name(self, client: AsyncClient) -> None:
        response = await client.post("/tournaments", json={"format": "Standard"})

        assert response.status_code == 422

    async def test_update(self, client: AsyncClient) -> None:
        response = await client.patch("/tournaments/t1", json={"notes": "Top 8"})

        assert response.status_code == 200
        assert response.json()["notes"] == "Top 8"
        assert response.json()["name"] == "Store Championship"

    async def test_delete_keeps_matches(self, client: AsyncClient) -> None:
        await client.patch("/matches/m1", json={"tournament_id": "t1"})

        response = await client.delete("/tournaments/t1")

        assert response.json() == {"id": "t1", "deleted": True}
        match = (await client.get("/matches/m1")).json()
        assert match["tournament_id"] == "t1"
