import asyncio

import pytest

from app.domain.calls.exceptions import (
    CallAlreadyEnded,
    CallConflict,
    CallForbidden,
    CallNotFound,
    CallNotPending,
    CallSelfError,
    NoPendingCall,
)
from app.domain.calls.models import CallRole, CallStatus


@pytest.mark.asyncio
async def test_call_with_self_is_bad_values(services):
    with pytest.raises(CallSelfError) as excinfo:
        await services.calls.start_call("a", "a")
    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_lifecycle_pending_active_ended(services):
    call = await services.calls.start_call("a", "b")
    assert call.status is CallStatus.PENDING
    assert call.role_of("a") is CallRole.CALLER
    assert (await services.calls.get_pending_call("b")).id == call.id
    assert await services.calls.get_pending_call("a") is None

    accepted = await services.calls.accept_pending_call("b")
    assert accepted.status is CallStatus.ACTIVE
    assert accepted.accepted_at is not None
    assert (await services.calls.get_call_status_for_user("a")).status is CallStatus.ACTIVE

    ended = await services.calls.end_call(call.id)
    assert ended.status is CallStatus.ENDED
    assert ended.end_time is not None
    assert await services.calls.get_call_status_for_user("a") is None
    assert await services.calls.get_call_status_for_user("b") is None


@pytest.mark.asyncio
async def test_accepting_twice_fails(services):
    call = await services.calls.start_call("a", "b")
    await services.calls.accept_call(call.id, "b")
    with pytest.raises(CallNotPending):
        await services.calls.accept_call(call.id, "b")
    with pytest.raises(NoPendingCall):
        await services.calls.accept_pending_call("b")


@pytest.mark.asyncio
async def test_concurrent_accepts_admit_one(services):
    call = await services.calls.start_call("a", "b")
    results = await asyncio.gather(
        services.calls.accept_call(call.id, "b"),
        services.calls.accept_call(call.id, "b"),
        return_exceptions=True,
    )
    assert sum(1 for r in results if isinstance(r, Exception)) == 1


@pytest.mark.asyncio
async def test_only_recipient_accepts(services):
    call = await services.calls.start_call("a", "b")
    with pytest.raises(CallForbidden):
        await services.calls.accept_call(call.id, "a")


@pytest.mark.asyncio
async def test_end_call_errors(services):
    with pytest.raises(CallNotFound):
        await services.calls.end_call("missing")
    call = await services.calls.start_call("a", "b")
    await services.calls.end_call(call.id)
    with pytest.raises(CallAlreadyEnded):
        await services.calls.end_call(call.id)


@pytest.mark.asyncio
async def test_one_open_call_per_user(services):
    await services.calls.start_call("a", "b")
    with pytest.raises(CallConflict):
        await services.calls.start_call("a", "c")
    with pytest.raises(CallConflict):
        await services.calls.start_call("c", "b")
    with pytest.raises(CallConflict):
        await services.calls.start_call("b", "a")
    # Unrelated users are unaffected.
    await services.calls.start_call("c", "d")


@pytest.mark.asyncio
async def test_ended_call_frees_participants(services):
    call = await services.calls.start_call("a", "b")
    await services.calls.end_call(call.id)
    again = await services.calls.start_call("b", "a")
    assert again.id != call.id


@pytest.mark.asyncio
async def test_reject_pending_call(services):
    with pytest.raises(NoPendingCall):
        await services.calls.reject_pending_call("b")
    call = await services.calls.start_call("a", "b")
    rejected = await services.calls.reject_pending_call("b")
    assert rejected.id == call.id
    assert rejected.status is CallStatus.ENDED
    assert rejected.accepted_at is None


@pytest.mark.asyncio
async def test_history_lists_ended_calls_newest_first(services):
    first = await services.calls.start_call("a", "b")
    await services.calls.end_call(first.id)
    second = await services.calls.start_call("c", "a")
    await services.calls.end_call(second.id)
    await services.calls.start_call("a", "b")
    history = await services.calls.get_call_history("a")
    assert [c.id for c in history] == [second.id, first.id]
    assert await services.calls.get_call_history("d") == []
