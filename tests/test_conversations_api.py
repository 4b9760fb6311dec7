import uuid
from datetime import datetime


def _open(client, user, other, content=None):
    body = {"recipientId": other["id"]}
    if content is not None:
        body["content"] = content
    return client.post("/api/conversations", json=body, headers=user["headers"])


def test_post_conversation_resolves_once_per_pair(client, alice, bob):
    first = _open(client, alice, bob)
    second = _open(client, bob, alice)

    assert first.status_code == 201 and second.status_code == 201
    assert first.json()["created"] is True
    assert second.json()["created"] is False
    conv = first.json()["conversation"]
    assert conv["id"] == second.json()["conversation"]["id"]
    assert {p["id"] for p in conv["participants"]} == {alice["id"], bob["id"]}
    assert {p["name"] for p in conv["participants"]} == {"Alice Umkm", "Bob Warung"}


def test_get_with_user_id_returns_single_channel(client, alice, bob):
    created = _open(client, alice, bob).json()["conversation"]

    res = client.get(f"/api/conversations?userId={alice['id']}", headers=bob["headers"])
    assert res.status_code == 200
    assert [c["id"] for c in res.json()["conversations"]] == [created["id"]]

    res = client.get(f"/api/conversations?recipientId={bob['id']}", headers=alice["headers"])
    assert [c["id"] for c in res.json()["conversations"]] == [created["id"]]


def test_user_id_alias_in_body(client, alice, bob):
    res = client.post("/api/conversations", json={"userId": bob["id"]}, headers=alice["headers"])
    assert res.status_code == 201


def test_post_with_first_message(client, alice, bob):
    res = _open(client, alice, bob, content="  Halo, mau pesan kopi  ")
    assert res.status_code == 201
    body = res.json()
    assert body["message"]["content"] == "Halo, mau pesan kopi"
    assert body["message"]["author_id"] == alice["id"]
    assert body["conversation"]["last_message"]["id"] == body["message"]["id"]


def test_post_with_existing_conversation_id(client, alice, bob):
    conv_id = _open(client, alice, bob).json()["conversation"]["id"]
    res = client.post(
        "/api/conversations",
        json={"conversationId": conv_id, "content": "lagi"},
        headers=bob["headers"],
    )
    assert res.status_code == 201
    assert res.json()["conversation"]["id"] == conv_id
    assert res.json()["message"]["author_id"] == bob["id"]


def test_post_without_any_id_is_400(client, alice):
    res = client.post("/api/conversations", json={"content": "halo"}, headers=alice["headers"])
    assert res.status_code == 400
    assert res.json() == {"error": "conversationId or recipientId is required"}


def test_post_to_unknown_recipient_is_404(client, alice):
    res = client.post(
        "/api/conversations", json={"recipientId": "user_nobody00000"}, headers=alice["headers"]
    )
    assert res.status_code == 404
    assert res.json() == {"error": "Recipient not found"}


def test_conversation_with_self_is_400(client, alice):
    assert _open(client, alice, alice).status_code == 400


def test_list_is_most_recent_first_with_last_message(client, alice, bob, carol):
    with_bob = _open(client, alice, bob, content="untuk bob").json()["conversation"]["id"]
    with_carol = _open(client, alice, carol, content="untuk carol").json()["conversation"]["id"]

    res = client.get("/api/conversations", headers=alice["headers"])
    conversations = res.json()["conversations"]
    assert [c["id"] for c in conversations] == [with_carol, with_bob]
    assert conversations[0]["last_message"]["content"] == "untuk carol"

    client.post(f"/api/conversations/{with_bob}/messages", json={"content": "bob lagi"}, headers=bob["headers"])
    res = client.get("/api/conversations", headers=alice["headers"])
    assert [c["id"] for c in res.json()["conversations"]] == [with_bob, with_carol]

    bob_view = client.get("/api/conversations", headers=bob["headers"]).json()["conversations"]
    assert [c["id"] for c in bob_view] == [with_bob]


def test_send_and_list_messages_in_order(client, alice, bob):
    conv_id = _open(client, alice, bob).json()["conversation"]["id"]
    url = f"/api/conversations/{conv_id}/messages"

    for i, user in enumerate([alice, bob, alice, alice, bob]):
        res = client.post(url, json={"content": f"pesan {i}"}, headers=user["headers"])
        assert res.status_code == 201
        assert res.json()["conversation_id"] == conv_id
        uuid.UUID(res.json()["id"])

    res = client.get(url, headers=bob["headers"])
    assert res.status_code == 200
    messages = res.json()["messages"]
    assert [m["content"] for m in messages] == [f"pesan {i}" for i in range(5)]
    stamps = [datetime.fromisoformat(m["created_at"].replace("Z", "+00:00")) for m in messages]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert messages[1]["author"] == {"id": bob["id"], "name": "Bob Warung"}


def test_empty_message_is_400(client, alice, bob):
    conv_id = _open(client, alice, bob).json()["conversation"]["id"]
    res = client.post(
        f"/api/conversations/{conv_id}/messages", json={"content": "   "}, headers=alice["headers"]
    )
    assert res.status_code == 400


def test_not_a_participant_gets_404_and_no_content(client, alice, bob, carol):
    conv_id = _open(client, alice, bob, content="rahasia dagang").json()["conversation"]["id"]
    url = f"/api/conversations/{conv_id}/messages"

    res = client.get(url, headers=carol["headers"])
    assert res.status_code == 404
    assert "rahasia" not in res.text

    res = client.post(url, json={"content": "menyusup"}, headers=carol["headers"])
    assert res.status_code == 404

    res = client.post("/api/conversations", json={"conversationId": conv_id}, headers=carol["headers"])
    assert res.status_code == 404

    assert len(client.get(url, headers=alice["headers"]).json()["messages"]) == 1


def test_malformed_conversation_id_is_404(client, alice):
    res = client.get("/api/conversations/not-a-uuid/messages", headers=alice["headers"])
    assert res.status_code == 404


def test_list_users_excludes_caller(client, alice, bob, carol):
    res = client.get("/api/users", headers=alice["headers"])
    assert res.status_code == 200
    ids = {u["id"] for u in res.json()["users"]}
    assert ids == {bob["id"], carol["id"]}
