from fastapi import status
from fastapi.testclient import TestClient

from tests.consts import TEST_PUBLIC_BASE_URL

TEST_IMAGE_CONTENT = b"\x89PNG\r\n\x1a\nfake"
TEST_VIDEO_CONTENT = b"\x00\x00\x00\x18ftypmp42"
TEST_VOICE_CONTENT = b"\x1aE\xdf\xa3webm"


# --- auth and users --- #

def test_signup_and_login(client: TestClient):
    response = client.post(
        "/v1/auth/send-code",
        json={"email": "Alice@Example.com", "name": "Alice", "password": "secret123"},
    )
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    code = body["demoCode"]
    assert len(code) == 6

    response = client.post("/v1/auth/verify-code", json={"email": "alice@example.com", "code": code})
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["message"] == "Account created successfully!"
    assert created["user"]["email"] == "alice@example.com"
    assert "passwordHash" not in created["user"]

    response = client.post("/v1/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == created["user"]["id"]


def test_search_get_and_update_users(client: TestClient, signup):
    alice = signup("alice@example.com", "Alice")
    bob = signup("bob@example.com", "Bob")

    response = client.get("/v1/users", params={"excludeId": alice["id"]})
    assert response.status_code == status.HTTP_200_OK
    assert [user["id"] for user in response.json()["users"]] == [bob["id"]]

    response = client.get("/v1/users", params={"q": "ali"})
    assert [user["id"] for user in response.json()["users"]] == [alice["id"]]

    response = client.get(f"/v1/users/{bob['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["name"] == "Bob"

    response = client.patch(
        f"/v1/users/{bob['id']}",
        json={"name": "Robert", "profilePicture": "https://cdn.example.com/bob.png"},
    )
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["name"] == "Robert"
    assert user["profilePicture"] == "https://cdn.example.com/bob.png"


# --- media --- #

def test_upload_list_and_delete_media(client: TestClient):
    response = client.post(
        "/v1/media/upload",
        files=[
            ("files", ("sunset.png", TEST_IMAGE_CONTENT, "image/png")),
            ("files", ("clip.mp4", TEST_VIDEO_CONTENT, "video/mp4")),
        ],
    )
    assert response.status_code == status.HTTP_201_CREATED
    uploaded = response.json()["files"]
    assert [item["type"] for item in uploaded] == ["image", "video"]
    assert all(item["id"].startswith("media/") for item in uploaded)
    assert uploaded[0]["url"] == f"{TEST_PUBLIC_BASE_URL}/{uploaded[0]['id']}"

    response = client.get("/v1/media")
    assert response.status_code == status.HTTP_200_OK
    listed = response.json()["media"]
    assert {item["id"] for item in listed} == {item["id"] for item in uploaded}
    assert {item["size"] for item in listed} == {len(TEST_IMAGE_CONTENT), len(TEST_VIDEO_CONTENT)}

    response = client.request(
        "DELETE", "/v1/media", json={"ids": [uploaded[0]["id"], "media/missing.jpg"]}
    )
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    assert body["deletedCount"] == 1
    assert [r["success"] for r in body["blobDeletionResults"]] == [True, False]

    assert [item["id"] for item in client.get("/v1/media").json()["media"]] == [uploaded[1]["id"]]


def test_comments(client: TestClient):
    media_id = "media/sunset-1.png"
    for content in ["first!", "lovely colours"]:
        response = client.post(
            "/v1/media/comments",
            json={"mediaId": media_id, "userId": "u1", "userName": "Alice", "content": content},
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["comment"]["content"] == content

    response = client.get("/v1/media/comments", params={"mediaId": media_id})
    assert response.status_code == status.HTTP_200_OK
    assert [c["content"] for c in response.json()["comments"]] == ["first!", "lovely colours"]

    response = client.get("/v1/media/comments", params={"mediaId": "media/other.png"})
    assert response.json()["comments"] == []


def test_like_and_unlike(client: TestClient):
    media_id = "media/sunset-1.png"
    like = {"mediaId": media_id, "userId": "u1", "userName": "Alice", "action": "like"}

    for _ in range(2):
        response = client.post("/v1/media/likes", json=like)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "count": 1, "userLiked": True}

    response = client.get("/v1/media/likes", params={"mediaId": media_id, "userId": "u2"})
    body = response.json()
    assert body["count"] == 1
    assert body["userLiked"] is False
    assert body["likes"][0]["userName"] == "Alice"

    response = client.post("/v1/media/likes", json={**like, "action": "unlike"})
    assert response.json() == {"success": True, "count": 0, "userLiked": False}


# --- chat --- #

def test_public_chat(client: TestClient):
    for content in ["hello", "anyone here?"]:
        response = client.post(
            "/v1/chat/public",
            json={"senderId": "u1", "senderName": "Alice", "content": content},
        )
        assert response.status_code == status.HTTP_201_CREATED

    response = client.post(
        "/v1/chat/public",
        json={
            "senderId": "u2",
            "senderName": "Bob",
            "type": "image",
            "mediaUrl": f"{TEST_PUBLIC_BASE_URL}/chat-media/chat-media-1-pic.png",
        },
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["message"]["mediaType"] == "image"

    messages = client.get("/v1/chat/public").json()["messages"]
    assert [m["type"] for m in messages] == ["text", "text", "image"]
    assert messages[0]["content"] == "hello"
    assert messages[0].get("receiverId") is None


def test_private_chat_and_conversations(client: TestClient, signup):
    alice = signup("alice@example.com", "Alice")
    bob = signup("bob@example.com", "Bob")
    carol = signup("carol@example.com", "Carol")

    def send(sender, receiver, content):
        response = client.post(
            "/v1/chat/private",
            json={
                "senderId": sender["id"],
                "senderName": sender["name"],
                "receiverId": receiver["id"],
                "receiverName": receiver["name"],
                "content": content,
            },
        )
        assert response.status_code == status.HTTP_201_CREATED
        return response.json()["message"]

    send(alice, bob, "hi bob")
    send(bob, alice, "hi alice")
    send(carol, alice, "hey")

    response = client.get("/v1/chat/private", params={"user1Id": alice["id"], "user2Id": bob["id"]})
    assert [m["content"] for m in response.json()["messages"]] == ["hi bob", "hi alice"]

    response = client.get("/v1/chat/conversations", params={"userId": alice["id"]})
    assert response.status_code == status.HTTP_200_OK
    assert [u["id"] for u in response.json()["conversations"]] == [carol["id"], bob["id"]]


def test_voice_messages(client: TestClient):
    response = client.post(
        "/v1/chat/public/voice",
        files={"audio": ("voice.webm", TEST_VOICE_CONTENT, "audio/webm")},
        data={"senderId": "u1", "senderName": "Alice"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    message = response.json()["message"]
    assert message["type"] == "voice"
    assert message["voiceUrl"].startswith(f"{TEST_PUBLIC_BASE_URL}/voice/")

    response = client.post(
        "/v1/chat/private/voice",
        files={"audio": ("voice.webm", TEST_VOICE_CONTENT, "audio/webm")},
        data={"senderId": "u1", "senderName": "Alice", "receiverId": "u2", "receiverName": "Bob"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["message"]["receiverId"] == "u2"

    response = client.get("/v1/chat/private", params={"user1Id": "u2", "user2Id": "u1"})
    assert [m["type"] for m in response.json()["messages"]] == ["voice"]


def test_chat_upload(client: TestClient):
    response = client.post(
        "/v1/chat/upload",
        files={"file": ("pic.png", TEST_IMAGE_CONTENT, "image/png")},
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["success"] is True
    assert body["url"].startswith(f"{TEST_PUBLIC_BASE_URL}/chat-media/chat-media-")
    assert body["url"].endswith("-pic.png")


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["ready"] is True
    assert body["components"]["storage"] == "ready"
