"""Tests for CSA share endpoints."""

import pytest

from csa_market.models.contracts import ShareFrequency
from csa_market.models.schema import CsaShare


@pytest.fixture
def make_share(db_session):
    def _make(farm, name="Weekly Veggie Box", **kwargs):
        kwargs.setdefault("price", 3500)
        kwargs.setdefault("frequency", ShareFrequency.WEEKLY)
        share = CsaShare(farm_id=farm.id, name=name, **kwargs)
        db_session.add(share)
        db_session.commit()
        db_session.refresh(share)
        return share

    return _make


class TestCreateShare:
    def test_owner_creates_share(self, client, make_farm, auth_headers):
        farm = make_farm()

        response = client.post(
            f"/api/shares/farm/{farm.id}",
            headers=auth_headers,
            json={"name": "Summer Box", "price": 4200, "frequency": "biweekly"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"].startswith("share_")
        assert body["farmId"] == farm.id
        assert body["frequency"] == "biweekly"
        assert body["available"] is True
        assert body["currentSubscribers"] == 0

    def test_other_user_forbidden(self, client, make_farm, other_auth_headers):
        farm = make_farm()

        response = client.post(
            f"/api/shares/farm/{farm.id}",
            headers=other_auth_headers,
            json={"name": "Box", "price": 100, "frequency": "weekly"},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Unauthorized to create shares for this farm"

    def test_missing_farm(self, client, auth_headers):
        response = client.post(
            "/api/shares/farm/farm_missing",
            headers=auth_headers,
            json={"name": "Box", "price": 100, "frequency": "weekly"},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Farm not found"

    def test_unknown_frequency(self, client, make_farm, auth_headers):
        farm = make_farm()

        response = client.post(
            f"/api/shares/farm/{farm.id}",
            headers=auth_headers,
            json={"name": "Box", "price": 100, "frequency": "daily"},
        )

        assert response.status_code == 422

    def test_requires_token(self, client, make_farm):
        farm = make_farm()

        response = client.post(
            f"/api/shares/farm/{farm.id}",
            json={"name": "Box", "price": 100, "frequency": "weekly"},
        )

        assert response.status_code == 401


class TestReadShares:
    def test_list_all_and_by_farm(self, client, make_farm, make_share):
        first_farm = make_farm()
        second_farm = make_farm(user_id="user_other")
        make_share(first_farm, "A")
        make_share(second_farm, "B")

        assert len(client.get("/api/shares").json()) == 2
        by_farm = client.get(f"/api/shares/farm/{second_farm.id}").json()
        assert [s["name"] for s in by_farm] == ["B"]

    def test_my_shares(self, client, make_farm, make_share, auth_headers):
        mine = make_farm()
        theirs = make_farm(user_id="user_other")
        make_share(mine, "Mine")
        make_share(theirs, "Theirs")

        body = client.get("/api/shares/user/me", headers=auth_headers).json()

        assert [s["name"] for s in body] == ["Mine"]

    def test_get_share(self, client, make_farm, make_share):
        share = make_share(make_farm(), description="Greens and roots")

        body = client.get(f"/api/shares/{share.id}").json()

        assert body["description"] == "Greens and roots"
        assert body["price"] == 3500

    def test_get_missing_share(self, client):
        response = client.get("/api/shares/share_missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "CSA share not found"


class TestModifyShares:
    def test_owner_updates(self, client, make_farm, make_share, auth_headers):
        share = make_share(make_farm())

        response = client.put(
            f"/api/shares/{share.id}",
            headers=auth_headers,
            json={"price": 3900, "maxSubscribers": 40, "name": None},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 3900
        assert body["maxSubscribers"] == 40
        assert body["name"] == "Weekly Veggie Box"

    def test_toggle_availability(self, client, make_farm, make_share, auth_headers):
        share = make_share(make_farm())

        off = client.put(
            f"/api/shares/{share.id}/availability", headers=auth_headers, json={"available": False}
        )
        on = client.put(
            f"/api/shares/{share.id}/availability", headers=auth_headers, json={"available": True}
        )

        assert off.json()["available"] is False
        assert on.json()["available"] is True

    def test_non_owner_cannot_modify(self, client, make_farm, make_share, other_auth_headers):
        share = make_share(make_farm())

        update = client.put(
            f"/api/shares/{share.id}", headers=other_auth_headers, json={"price": 1}
        )
        delete = client.delete(f"/api/shares/{share.id}", headers=other_auth_headers)

        assert update.status_code == 404
        assert "not authorized" in update.json()["detail"]
        assert delete.status_code == 404

    def test_owner_deletes(self, client, make_farm, make_share, auth_headers):
        share = make_share(make_farm())

        response = client.delete(f"/api/shares/{share.id}", headers=auth_headers)

        assert response.json() == {"success": True}
        assert client.get(f"/api/shares/{share.id}").status_code == 404
