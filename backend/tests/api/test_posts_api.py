import pytest


@pytest.mark.asyncio
async def test_post_lifecycle(user_client, api_client):
    alice = await user_client("alice")
    bob = await user_client("bob")

    created = await alice.post("/posts", json={"content": "hello", "options": {"backgroundColor": "#fff"}})
    assert created.status_code == 201
    post = created.json()["post"]
    assert post["author"] == "alice"
    assert post["options"] == {"background_color": "#fff"}
    await bob.post("/posts", json={"content": "bob here"})

    everything = (await api_client.get("/posts")).json()["posts"]
    assert [p["content"] for p in everything] == ["bob here", "hello"]
    by_alice = (await api_client.get("/posts", params={"author": "alice"})).json()["posts"]
    assert [p["id"] for p in by_alice] == [post["id"]]
    assert (await api_client.get("/posts", params={"author": "nobody"})).status_code == 404

    assert (await bob.patch(f"/posts/{post['id']}", json={"content": "hijacked"})).status_code == 403
    assert (await bob.delete(f"/posts/{post['id']}")).status_code == 403

    updated = await alice.patch(f"/posts/{post['id']}", json={"content": "edited"})
    assert updated.json()["post"]["content"] == "edited"
    assert updated.json()["post"]["options"] == {"background_color": "#fff"}

    assert (await alice.delete(f"/posts/{post['id']}")).json() == {"msg": "Deleted post!"}
    assert (await alice.delete(f"/posts/{post['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_create_post_requires_login(api_client):
    response = await api_client.post("/posts", json={"content": "anon"})
    assert response.status_code == 401
