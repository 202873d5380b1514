"""
Tests for direct messaging
"""
import pytest


@pytest.fixture
def thread(client, alice, bob):
    response = client.post(
        "/api/v1/messages/threads",
        json={"recipient_id": bob["id"]},
        headers=alice["headers"]
    )
    assert response.status_code == 201
    return response.json()


class TestThreads:
    """Test conversations"""

    def test_start_thread(self, thread, alice, bob):
        assert thread["user_a_id"] == alice["id"]
        assert thread["user_b"]["name"] == "Bob"
        assert thread["last_message"] is None

    def test_existing_thread_is_reused(self, client, db, thread, bob, alice):
        response = client.post(
            "/api/v1/messages/threads",
            json={"recipient_id": alice["id"]},
            headers=bob["headers"]
        )
        assert response.json()["id"] == thread["id"]
        assert len(db.rows("chat_threads")) == 1

    def test_thread_per_listing(self, client, db, thread, alice, bob, create_listing):
        listing = create_listing(bob)
        response = client.post(
            "/api/v1/messages/threads",
            json={"recipient_id": bob["id"], "listing_id": listing["id"]},
            headers=alice["headers"]
        )
        assert response.json()["id"] != thread["id"]
        assert response.json()["listing"]["id"] == listing["id"]

    def test_cannot_message_self(self, client, alice):
        response = client.post("/api/v1/messages/threads", json={"recipient_id": alice["id"]}, headers=alice["headers"])
        assert response.status_code == 400

    def test_unknown_recipient(self, client, alice):
        response = client.post("/api/v1/messages/threads", json={"recipient_id": "ghost"}, headers=alice["headers"])
        assert response.status_code == 404


class TestMessages:
    """Test sending and reading messages"""

    def test_send_and_list(self, client, thread, alice, bob):
        url = f"/api/v1/messages/threads/{thread['id']}"
        client.post(url, json={"content": "Is the bike still available?"}, headers=alice["headers"])
        client.post(url, json={"content": "Yes!"}, headers=bob["headers"])

        messages = client.get(url, headers=bob["headers"]).json()
        assert [m["content"] for m in messages] == ["Is the bike still available?", "Yes!"]

    def test_inbox_shows_last_message_and_unread(self, client, thread, alice, bob):
        url = f"/api/v1/messages/threads/{thread['id']}"
        client.post(url, json={"content": "Hello"}, headers=alice["headers"])
        client.post(url, json={"content": "Are you there?"}, headers=alice["headers"])

        inbox = client.get("/api/v1/messages/threads", headers=bob["headers"]).json()
        assert inbox[0]["last_message"]["content"] == "Are you there?"
        assert inbox[0]["unread_count"] == 2

        marked = client.post(f"{url}/read", headers=bob["headers"]).json()
        assert marked["marked"] == 2
        inbox = client.get("/api/v1/messages/threads", headers=bob["headers"]).json()
        assert inbox[0]["unread_count"] == 0

    def test_outsiders_blocked(self, client, thread, make_account):
        carol = make_account(name="Carol")
        url = f"/api/v1/messages/threads/{thread['id']}"
        assert client.get(url, headers=carol["headers"]).status_code == 403
        assert client.post(url, json={"content": "hi"}, headers=carol["headers"]).status_code == 403
