"""
Tests for NGO claims on gifted listings
"""
import pytest


@pytest.fixture
def gift(alice, create_listing):
    return create_listing(alice, title="Box of children's books")


@pytest.fixture
def claim(client, ngo, gift):
    response = client.post("/api/v1/claims", json={"listing_id": gift["id"]}, headers=ngo["headers"])
    assert response.status_code == 201
    return response.json()


def listing_status(db, listing_id):
    return next(row["status"] for row in db.rows("listings") if row["id"] == listing_id)


def karma(db, user_id):
    return next(row["karma_points"] for row in db.rows("users") if row["id"] == user_id)


class TestCreateClaim:
    """Test claiming"""

    def test_claim_marks_listing_claimed(self, db, claim, gift, ngo):
        assert claim["status"] == "claimed"
        assert claim["ngo_id"] == ngo["id"]
        assert claim["listing"]["title"] == "Box of children's books"
        assert listing_status(db, gift["id"]) == "claimed"

    def test_users_cannot_claim(self, client, bob, gift):
        response = client.post("/api/v1/claims", json={"listing_id": gift["id"]}, headers=bob["headers"])
        assert response.status_code == 403

    def test_only_gift_listings(self, client, ngo, alice, create_listing):
        listing = create_listing(alice, mode="sell", price=5)
        response = client.post("/api/v1/claims", json={"listing_id": listing["id"]}, headers=ngo["headers"])
        assert response.status_code == 400

    def test_claimed_listing_unavailable(self, client, claim, gift, make_account):
        other_ngo = make_account(role="ngo")
        response = client.post("/api/v1/claims", json={"listing_id": gift["id"]}, headers=other_ngo["headers"])
        assert response.status_code == 400

    def test_claimed_listing_leaves_marketplace(self, client, claim, gift):
        ids = [i["id"] for i in client.get("/api/v1/items").json()]
        assert gift["id"] not in ids

    def test_ngo_dashboard_lists_claims(self, client, claim, ngo, bob):
        response = client.get("/api/v1/claims", headers=ngo["headers"])
        assert [c["id"] for c in response.json()] == [claim["id"]]
        assert client.get("/api/v1/claims", headers=bob["headers"]).status_code == 403


class TestClaimStatus:
    """Test claim progression"""

    def test_forward_only(self, client, claim, ngo):
        url = f"/api/v1/claims/{claim['id']}"
        assert client.patch(url, json={"status": "pickup_arranged"}, headers=ngo["headers"]).status_code == 200
        response = client.patch(url, json={"status": "claimed"}, headers=ngo["headers"])
        assert response.status_code == 400

    def test_received_rewards_owner(self, client, db, claim, ngo, alice):
        url = f"/api/v1/claims/{claim['id']}"
        client.patch(url, json={"status": "pickup_arranged"}, headers=alice["headers"])
        response = client.patch(url, json={"status": "received"}, headers=ngo["headers"])
        assert response.json()["status"] == "received"
        assert karma(db, alice["id"]) == 10

    def test_outsider_cannot_update(self, client, claim, bob):
        response = client.patch(f"/api/v1/claims/{claim['id']}", json={"status": "received"}, headers=bob["headers"])
        assert response.status_code == 403


class TestCancelClaim:
    """Test withdrawing a claim"""

    def test_cancel_restores_listing(self, client, db, claim, gift, ngo):
        response = client.delete(f"/api/v1/claims/{claim['id']}", headers=ngo["headers"])
        assert response.status_code == 204
        assert db.rows("claims") == []
        assert listing_status(db, gift["id"]) == "available"

    def test_cannot_cancel_after_pickup(self, client, claim, ngo):
        client.patch(f"/api/v1/claims/{claim['id']}", json={"status": "pickup_arranged"}, headers=ngo["headers"])
        response = client.delete(f"/api/v1/claims/{claim['id']}", headers=ngo["headers"])
        assert response.status_code == 400
