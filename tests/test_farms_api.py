"""Tests for farm management endpoints and authentication."""

from datetime import timedelta

from csa_market.core.security import create_access_token
from csa_market.models.contracts import ShareFrequency
from csa_market.models.schema import CsaShare, Farm


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/health").json() == {"status": "ok"}


class TestAuth:
    def test_missing_token(self, client):
        response = client.post("/api/farms", json={"name": "No Auth Farm"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/api/farms/user/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_expired_token(self, client):
        token = create_access_token("user_farmer", expires_delta=timedelta(minutes=-5))

        response = client.get("/api/farms/user/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestCreateFarm:
    def test_create_farm(self, client, db_session, auth_headers):
        response = client.post(
            "/api/farms",
            headers=auth_headers,
            json={
                "name": "Green Valley Farm",
                "city": "Kingston",
                "state": "NY",
                "zipCode": "12401",
                "imageUrls": "https://img.example.com/farm.jpg",
                "categories": ["Vegetables", "herbs", "vegetables"],
                "deliveryOptions": ["Pickup"],
                "pricePerWeek": 32.5,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"].startswith("farm_")
        assert body["userId"] == "user_farmer"
        assert body["imageUrls"] == ["https://img.example.com/farm.jpg"]
        assert body["categories"] == ["herbs", "vegetables"]
        assert body["deliveryOptions"] == ["pickup"]
        assert db_session.get(Farm, body["id"]) is not None

    def test_name_required(self, client, auth_headers):
        response = client.post("/api/farms", headers=auth_headers, json={"name": ""})

        assert response.status_code == 422

    def test_rating_out_of_range(self, client, auth_headers):
        response = client.post("/api/farms", headers=auth_headers, json={"name": "X", "rating": 7})

        assert response.status_code == 422

    def test_created_farm_appears_first_in_listing(self, client, make_farm, auth_headers):
        make_farm()
        created = client.post("/api/farms", headers=auth_headers, json={"name": "Newest"}).json()

        listing = client.get("/api/farms").json()

        assert listing["data"][0]["id"] == created["id"]


class TestReadFarms:
    def test_get_farm(self, client, make_farm):
        farm = make_farm("Sunny Acres")

        response = client.get(f"/api/farms/{farm.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Sunny Acres"

    def test_get_missing_farm(self, client):
        response = client.get("/api/farms/farm_missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Farm not found"

    def test_my_farms(self, client, make_farm, auth_headers):
        mine = make_farm("Mine")
        make_farm("Theirs", user_id="user_other")

        body = client.get("/api/farms/user/me", headers=auth_headers).json()

        assert body["success"] is True
        assert [f["id"] for f in body["data"]] == [mine.id]


class TestUpdateFarm:
    def test_owner_updates(self, client, make_farm, auth_headers):
        farm = make_farm("Old Name", categories=["fruit"], image_urls=["a.jpg"])
        created_at = farm.created_at

        response = client.put(
            f"/api/farms/{farm.id}",
            headers=auth_headers,
            json={"name": "New Name", "categories": ["fruit", "honey"], "imageUrls": None},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "New Name"
        assert body["categories"] == ["fruit", "honey"]
        assert body["imageUrls"] is None
        assert body["createdAt"] == created_at.isoformat()

    def test_partial_update_keeps_other_fields(self, client, make_farm, auth_headers):
        farm = make_farm("Keep", city="Fresno", price_per_week=25.0)

        body = client.put(
            f"/api/farms/{farm.id}", headers=auth_headers, json={"pricePerWeek": 31.0}
        ).json()

        assert body["city"] == "Fresno"
        assert body["pricePerWeek"] == 31.0

    def test_other_user_forbidden(self, client, make_farm, other_auth_headers):
        farm = make_farm("Mine")

        response = client.put(
            f"/api/farms/{farm.id}", headers=other_auth_headers, json={"name": "Hijacked"}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Unauthorized"

    def test_missing_farm(self, client, auth_headers):
        response = client.put("/api/farms/farm_missing", headers=auth_headers, json={"name": "X"})

        assert response.status_code == 404


class TestDeleteFarm:
    def test_owner_deletes_farm_and_shares(self, client, db_session, make_farm, auth_headers):
        farm = make_farm("Doomed", categories=["dairy"])
        db_session.add(
            CsaShare(farm_id=farm.id, name="Weekly", price=3000, frequency=ShareFrequency.WEEKLY)
        )
        db_session.commit()

        response = client.delete(f"/api/farms/{farm.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/api/farms/{farm.id}").status_code == 404
        assert db_session.query(CsaShare).count() == 0

    def test_other_user_forbidden(self, client, make_farm, other_auth_headers):
        farm = make_farm("Mine")

        response = client.delete(f"/api/farms/{farm.id}", headers=other_auth_headers)

        assert response.status_code == 403
