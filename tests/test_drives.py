"""
Tests for NGO donation drives and pledges
"""
import pytest


@pytest.fixture
def drive(client, ngo):
    response = client.post(
        "/api/v1/drives",
        json={
            "title": "Winter coats",
            "description": "Warm coats for the shelter",
            "priority": "high",
            "deadline": "2030-12-01"
        },
        headers=ngo["headers"]
    )
    assert response.status_code == 201
    return response.json()


class TestDrives:
    """Test drive management"""

    def test_new_drive_is_active(self, drive, ngo):
        assert drive["status"] == "active"
        assert drive["progress"] == 0
        assert drive["ngo"]["name"] == "Green Hands"

    def test_users_cannot_create(self, client, alice):
        response = client.post("/api/v1/drives", json={"title": "My drive", "description": "Collecting toys"}, headers=alice["headers"])
        assert response.status_code == 403

    def test_list_active_drives(self, client, drive):
        response = client.get("/api/v1/drives")
        assert [d["id"] for d in response.json()] == [drive["id"]]
        assert client.get("/api/v1/drives", params={"priority": "low"}).json() == []

    def test_progress_100_completes(self, client, drive, ngo):
        response = client.patch(f"/api/v1/drives/{drive['id']}", json={"progress": 100}, headers=ngo["headers"])
        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert client.get("/api/v1/drives").json() == []
        mine = client.get("/api/v1/drives/mine", headers=ngo["headers"]).json()
        assert [d["status"] for d in mine] == ["completed"]

    def test_progress_out_of_range(self, client, drive, ngo):
        response = client.patch(f"/api/v1/drives/{drive['id']}", json={"progress": 120}, headers=ngo["headers"])
        assert response.status_code == 422

    def test_other_ngo_cannot_update(self, client, drive, make_account):
        other = make_account(role="ngo")
        response = client.patch(f"/api/v1/drives/{drive['id']}", json={"progress": 50}, headers=other["headers"])
        assert response.status_code == 403


class TestDonations:
    """Test pledges against drives"""

    def test_pledge_with_own_listing(self, client, drive, alice, create_listing):
        listing = create_listing(alice, title="Wool coat")
        response = client.post(
            "/api/v1/donations",
            json={"ngo_drive_id": drive["id"], "item_id": listing["id"]},
            headers=alice["headers"]
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pledged"
        assert body["drive"]["title"] == "Winter coats"
        assert body["drive"]["ngo"]["name"] == "Green Hands"

    def test_cannot_pledge_others_listing(self, client, drive, alice, bob, create_listing):
        listing = create_listing(bob)
        response = client.post(
            "/api/v1/donations",
            json={"ngo_drive_id": drive["id"], "item_id": listing["id"]},
            headers=alice["headers"]
        )
        assert response.status_code == 403

    def test_completed_drive_rejects_pledges(self, client, drive, ngo, alice):
        client.patch(f"/api/v1/drives/{drive['id']}", json={"progress": 100}, headers=ngo["headers"])
        response = client.post("/api/v1/donations", json={"ngo_drive_id": drive["id"]}, headers=alice["headers"])
        assert response.status_code == 400

    def test_donation_lifecycle(self, client, db, drive, ngo, alice):
        donation = client.post(
            "/api/v1/donations", json={"ngo_drive_id": drive["id"]}, headers=alice["headers"]
        ).json()
        url = f"/api/v1/donations/{donation['id']}"

        assert client.patch(url, json={"status": "received"}, headers=alice["headers"]).status_code == 403
        assert client.patch(url, json={"status": "delivered"}, headers=alice["headers"]).status_code == 200
        assert client.patch(url, json={"status": "pledged"}, headers=ngo["headers"]).status_code == 400
        response = client.patch(url, json={"status": "received"}, headers=ngo["headers"])
        assert response.json()["status"] == "received"
        donor = next(u for u in db.rows("users") if u["id"] == alice["id"])
        assert donor["karma_points"] == 5

    def test_listings_for_donor_and_ngo(self, client, drive, ngo, alice, bob):
        client.post("/api/v1/donations", json={"ngo_drive_id": drive["id"]}, headers=alice["headers"])
        assert len(client.get("/api/v1/donations", headers=alice["headers"]).json()) == 1
        assert client.get("/api/v1/donations", headers=bob["headers"]).json() == []

        response = client.get(f"/api/v1/drives/{drive['id']}/donations", headers=ngo["headers"])
        assert [d["donor"]["name"] for d in response.json()] == ["Alice"]
        assert client.get(f"/api/v1/drives/{drive['id']}/donations", headers=alice["headers"]).status_code == 403
