import asyncio

import pytest
import pytest_asyncio

from app.domain.social.exceptions import (
    AlreadyFriends,
    FriendNotFound,
    FriendRequestAlreadyExists,
    FriendRequestForbidden,
    FriendRequestNotFound,
    FriendRequestSelfError,
    NotFriends,
)


@pytest_asyncio.fixture
async def people(services):
    alice = await services.identity.create("alice", "pw-alice")
    bob = await services.identity.create("bob", "pw-bob")
    return alice, bob


@pytest.mark.asyncio
async def test_send_then_cancel_leaves_no_relation(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    await services.social.remove_request(alice.id, bob.id)
    incoming, outgoing = await services.social.get_requests(alice.id)
    assert incoming == [] and outgoing == []
    assert not await services.social.are_friends(alice.id, bob.id)
    with pytest.raises(FriendRequestNotFound):
        await services.social.remove_request(alice.id, bob.id)


@pytest.mark.asyncio
async def test_send_request_guards(services, people):
    alice, bob = people
    with pytest.raises(FriendRequestSelfError):
        await services.social.send_request(alice.id, alice.id)
    await services.social.send_request(alice.id, bob.id)
    with pytest.raises(FriendRequestAlreadyExists):
        await services.social.send_request(alice.id, bob.id)
    with pytest.raises(FriendRequestAlreadyExists) as excinfo:
        await services.social.send_request(bob.id, alice.id)
    assert "alice and bob" in excinfo.value.message


@pytest.mark.asyncio
async def test_requests_split_by_direction(services, people):
    alice, bob = people
    request = await services.social.send_request(alice.id, bob.id)
    incoming, outgoing = await services.social.get_requests(bob.id)
    assert [r.id for r in incoming] == [request.id]
    assert outgoing == []


@pytest.mark.asyncio
async def test_accept_creates_symmetric_edge(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    friendship = await services.social.accept_request(alice.id, bob.id)
    assert {friendship.user_a, friendship.user_b} == {alice.id, bob.id}
    assert await services.social.get_friends(alice.id) == [bob.id]
    assert await services.social.get_friends(bob.id) == [alice.id]
    incoming, outgoing = await services.social.get_requests(bob.id)
    assert incoming == [] and outgoing == []
    with pytest.raises(AlreadyFriends):
        await services.social.send_request(bob.id, alice.id)


@pytest.mark.asyncio
async def test_accept_never_sent_is_not_found(services, people):
    alice, bob = people
    with pytest.raises(FriendRequestNotFound):
        await services.social.accept_request(alice.id, bob.id)


@pytest.mark.asyncio
async def test_only_addressee_can_accept(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    # alice tries to accept her own request as if bob had sent it
    with pytest.raises(FriendRequestForbidden):
        await services.social.accept_request(bob.id, alice.id)
    with pytest.raises(FriendRequestForbidden):
        await services.social.reject_request(bob.id, alice.id)


@pytest.mark.asyncio
async def test_double_accept_admits_one(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    results = await asyncio.gather(
        services.social.accept_request(alice.id, bob.id),
        services.social.accept_request(alice.id, bob.id),
        return_exceptions=True,
    )
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(failures) == 1
    assert isinstance(failures[0], FriendRequestNotFound)
    assert await services.social.get_friends(alice.id) == [bob.id]


@pytest.mark.asyncio
async def test_reject_removes_request(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    await services.social.reject_request(alice.id, bob.id)
    assert not await services.social.are_friends(alice.id, bob.id)
    with pytest.raises(FriendRequestNotFound):
        await services.social.reject_request(alice.id, bob.id)


@pytest.mark.asyncio
async def test_remove_friend_then_gate_fails(services, people):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    await services.social.accept_request(alice.id, bob.id)
    await services.social.assert_are_friends(alice.id, bob.id, "alice", "bob")
    await services.social.remove_friend(bob.id, alice.id)
    with pytest.raises(NotFriends) as excinfo:
        await services.social.assert_are_friends(alice.id, bob.id, "alice", "bob")
    assert excinfo.value.message == "User alice and bob are not friends!"
    with pytest.raises(FriendNotFound):
        await services.social.remove_friend(alice.id, bob.id)


@pytest.mark.asyncio
async def test_friend_events_are_streamed(services, people, fake_redis):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)
    await services.social.accept_request(alice.id, bob.id)
    entries = await fake_redis.xrange("x:friendships.events")
    assert [fields["event"] for _, fields in entries] == ["request_sent", "request_accepted"]


@pytest.mark.asyncio
async def test_request_cancelled_before_read_back(services, people, monkeypatch):
    alice, bob = people

    async def vanished(flt):
        return None

    monkeypatch.setattr(services.social.requests, "read_one", vanished)
    with pytest.raises(FriendRequestNotFound):
        await services.social.send_request(alice.id, bob.id)


@pytest.mark.asyncio
async def test_friendship_removed_before_read_back(services, people, monkeypatch):
    alice, bob = people
    await services.social.send_request(alice.id, bob.id)

    async def vanished(flt):
        return None

    monkeypatch.setattr(services.social.friends, "read_one", vanished)
    with pytest.raises(FriendNotFound):
        await services.social.accept_request(alice.id, bob.id)
