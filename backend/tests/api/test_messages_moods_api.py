import pytest


async def _make_friends(user_client):
    alice = await user_client("alice")
    bob = await user_client("bob")
    await alice.post("/friend/requests/bob")
    await bob.put("/friend/accept/alice")
    return alice, bob


@pytest.mark.asyncio
async def test_message_transcript_and_inbox(user_client):
    alice, bob = await _make_friends(user_client)
    sent = await alice.post("/messages/bob", json={"content": "hi bob"})
    assert sent.status_code == 201
    assert sent.json()["message"]["sender"] == "alice"
    await bob.post("/messages/alice", json={"content": "hi alice"})

    transcript = (await alice.get("/messages/bob")).json()["messages"]
    assert [(m["sender"], m["content"]) for m in transcript] == [("alice", "hi bob"), ("bob", "hi alice")]
    inbox = (await bob.get("/messages")).json()["messages"]
    assert [m["content"] for m in inbox] == ["hi bob"]

    empty = await alice.post("/messages/bob", json={"content": ""})
    assert empty.status_code == 400


@pytest.mark.asyncio
async def test_only_sender_deletes_message(user_client):
    alice, bob = await _make_friends(user_client)
    message_id = (await alice.post("/messages/bob", json={"content": "oops"})).json()["message"]["id"]
    assert (await bob.delete(f"/messages/{message_id}")).status_code == 403
    assert (await alice.delete(f"/messages/{message_id}")).status_code == 200
    assert (await alice.delete(f"/messages/{message_id}")).status_code == 404
    assert (await alice.get("/messages/bob")).json()["messages"] == []


@pytest.mark.asyncio
async def test_moods_exchange(user_client):
    alice, bob = await _make_friends(user_client)
    first = await alice.post("/moods", json={"mood": "\U0001f600", "recipient": "bob"})
    assert first.json()["msg"] == "Mood set successfully!"
    second = await alice.post("/moods", json={"mood": "\U0001f622", "recipient": "bob"})
    assert second.json()["msg"] == "Mood updated successfully!"

    seen_by_bob = (await bob.get("/moods/alice")).json()
    assert seen_by_bob["you"] is None
    assert seen_by_bob["them"] == "\U0001f622"
    assert seen_by_bob["display"] == "You:     alice: \U0001f622"

    seen_by_alice = (await alice.get("/moods/bob")).json()
    assert seen_by_alice["display"] == "You: \U0001f622    bob: "

    bad = await alice.post("/moods", json={"mood": "happy", "recipient": "bob"})
    assert bad.status_code == 400

    assert (await alice.delete("/moods", params={"recipient": "bob"})).status_code == 200
    assert (await alice.delete("/moods", params={"recipient": "bob"})).status_code == 404
    assert (await alice.get("/moods/bob")).json()["you"] is None
