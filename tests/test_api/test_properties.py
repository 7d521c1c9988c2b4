"""Tests for the owner dashboard endpoints under /api/v1/properties."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestCreate:
    async def test_create_publishes_full_listing(self, client: AsyncClient, auth_headers: dict, make_listing):
        response = await client.post("/api/v1/properties", json=make_listing(), headers=auth_headers)
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["status"] == "published"
        assert data["name"] == "Seaside Inn"
        assert data["checkin_time"] == "14:00:00"
        assert data["amenities"] == {"Front Desk & Guest Services": ["24-hour front desk"]}
        assert len(data["rooms"]) == 1
        room = data["rooms"][0]
        assert room["facilities"] == ["Free WiFi", "Air conditioning"]
        assert float(room["price_lkr"]) == 15000
        assert [p["sort_order"] for p in room["photos"]] == [0, 1]
        assert [p["photo_url"].rsplit("/", 1)[1] for p in room["photos"]] == ["room-a.jpg", "room-b.jpg"]
        assert len(data["photos"]) == 1

    async def test_gate_failure_is_422_with_messages(self, client: AsyncClient, auth_headers: dict, make_listing):
        response = await client.post("/api/v1/properties", json=make_listing(city="  "), headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["detail"] == {"step": 2, "errors": ["City is required"]}

    async def test_negative_price_is_422(self, client: AsyncClient, auth_headers: dict, make_listing):
        body = make_listing()
        body["rooms"][0]["price_lkr"] = "-1"
        response = await client.post("/api/v1/properties", json=body, headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["detail"]["step"] == 7

    async def test_unknown_amenity_is_422(self, client: AsyncClient, auth_headers: dict, make_listing):
        body = make_listing(amenities={"Leisure & Wellness": ["Casino"]})
        response = await client.post("/api/v1/properties", json=body, headers=auth_headers)
        assert response.status_code == 422

    async def test_too_many_guests_is_422(self, client: AsyncClient, auth_headers: dict, make_listing):
        body = make_listing()
        body["rooms"][0]["max_guests"] = 10
        response = await client.post("/api/v1/properties", json=body, headers=auth_headers)
        assert response.status_code == 422

    async def test_requires_auth(self, client: AsyncClient, make_listing):
        response = await client.post("/api/v1/properties", json=make_listing())
        assert response.status_code in (401, 403)


class TestDashboard:
    async def test_list_only_own_properties(
        self,
        client: AsyncClient,
        auth_headers: dict,
        other_auth_headers: dict,
        test_property: dict,
        make_listing,
    ):
        await client.post("/api/v1/properties", json=make_listing(name="Not Mine"), headers=other_auth_headers)

        response = await client.get("/api/v1/properties", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert [item["id"] for item in data["items"]] == [test_property["id"]]
        assert len(data["items"][0]["photos"]) == 1

    async def test_filters(self, client: AsyncClient, auth_headers: dict, test_property: dict):
        response = await client.get("/api/v1/properties?status=draft", headers=auth_headers)
        assert response.json()["total"] == 0
        response = await client.get("/api/v1/properties?property_type=Hotel", headers=auth_headers)
        assert response.json()["total"] == 1

    async def test_get_detail(self, client: AsyncClient, auth_headers: dict, test_property: dict):
        response = await client.get(f"/api/v1/properties/{test_property['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["rooms"][0]["room_type"] == "Deluxe Double"

    async def test_get_missing_is_404(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(f"/api/v1/properties/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404


class TestReplace:
    async def test_edit_price_and_add_room_photo(
        self, client: AsyncClient, auth_headers: dict, test_property: dict, make_listing
    ):
        body = make_listing()
        body["rooms"][0]["price_lkr"] = "18000"
        body["rooms"][0]["photos"] = ["https://res.cloudinary.com/test-cloud/image/upload/new.jpg"]

        response = await client.put(f"/api/v1/properties/{test_property['id']}", json=body, headers=auth_headers)

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["id"] == test_property["id"]
        assert data["rooms"][0]["id"] != test_property["rooms"][0]["id"]
        assert float(data["rooms"][0]["price_lkr"]) == 18000
        assert len(data["rooms"][0]["photos"]) == 1
        assert len(data["photos"]) == 1

    async def test_other_owner_gets_403(
        self, client: AsyncClient, other_auth_headers: dict, test_property: dict, make_listing
    ):
        response = await client.put(
            f"/api/v1/properties/{test_property['id']}", json=make_listing(), headers=other_auth_headers
        )
        assert response.status_code == 403

    async def test_missing_is_404(self, client: AsyncClient, auth_headers: dict, make_listing):
        response = await client.put(f"/api/v1/properties/{uuid.uuid4()}", json=make_listing(), headers=auth_headers)
        assert response.status_code == 404


class TestDelete:
    async def test_delete_then_gone(self, client: AsyncClient, auth_headers: dict, test_property: dict):
        response = await client.delete(f"/api/v1/properties/{test_property['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Property deleted"

        response = await client.get(f"/api/v1/properties/{test_property['id']}", headers=auth_headers)
        assert response.status_code == 404

    async def test_other_owner_cannot_delete(
        self, client: AsyncClient, auth_headers: dict, other_auth_headers: dict, test_property: dict
    ):
        response = await client.delete(f"/api/v1/properties/{test_property['id']}", headers=other_auth_headers)
        assert response.status_code == 403

        response = await client.get(f"/api/v1/properties/{test_property['id']}", headers=auth_headers)
        assert response.status_code == 200
