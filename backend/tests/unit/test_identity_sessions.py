import pytest

from app.domain.identity.sessions import SessionStore
from app.infra import jwt as jwt_helper


@pytest.mark.asyncio
async def test_start_and_resolve(fake_redis):
    store = SessionStore(fake_redis, ttl_seconds=60)
    issued = await store.start("user-1")
    assert issued.expires_in == 60
    assert await fake_redis.ttl(f"session:{issued.session_id}") > 0
    assert await store.resolve(issued.token) == (issued.session_id, "user-1")


@pytest.mark.asyncio
async def test_resolve_rejects_garbage(fake_redis):
    store = SessionStore(fake_redis, ttl_seconds=60)
    assert await store.resolve(None) == (None, None)
    assert await store.resolve("not-a-jwt") == (None, None)


@pytest.mark.asyncio
async def test_token_for_unknown_session_is_dead(fake_redis):
    store = SessionStore(fake_redis, ttl_seconds=60)
    forged = jwt_helper.encode_session(session_id="never-started", user_id="user-1", ttl_seconds=60)
    assert await store.resolve(forged) == (None, None)


@pytest.mark.asyncio
async def test_end_revokes_token(fake_redis):
    store = SessionStore(fake_redis, ttl_seconds=60)
    issued = await store.start("user-1")
    await store.end(issued.session_id)
    assert await store.resolve(issued.token) == (None, None)


@pytest.mark.asyncio
async def test_end_all_for_user(fake_redis):
    store = SessionStore(fake_redis, ttl_seconds=60)
    first = await store.start("user-1")
    second = await store.start("user-1")
    other = await store.start("user-2")
    assert await store.end_all_for_user("user-1") == 2
    assert await store.resolve(first.token) == (None, None)
    assert await store.resolve(second.token) == (None, None)
    assert await store.resolve(other.token) == (other.session_id, "user-2")
