import pytest

from app.domain.chat.models import ConversationKey
from app.domain.chat.service import EmptyMessageError, MessageNotFound


def test_conversation_key_is_order_independent():
    assert ConversationKey.from_participants("b", "a") == ConversationKey.from_participants("a", "b")
    assert ConversationKey.from_participants("b", "a").conversation_id == "chat:a:b"


@pytest.mark.asyncio
async def test_empty_content_rejected(services):
    with pytest.raises(EmptyMessageError):
        await services.chat.send_message("a", "b", "")
    with pytest.raises(EmptyMessageError):
        await services.chat.send_message("a", "b", "   ")


@pytest.mark.asyncio
async def test_transcript_is_union_ascending(services):
    first = await services.chat.send_message("a", "b", "hi bob")
    second = await services.chat.send_message("b", "a", "hi alice")
    third = await services.chat.send_message("a", "b", "how are you?")
    await services.chat.send_message("a", "c", "unrelated")
    transcript = await services.chat.get_messages_between_users("b", "a")
    assert [m.id for m in transcript] == [first.id, second.id, third.id]
    timestamps = [m.timestamp for m in transcript]
    assert timestamps == sorted(timestamps)


@pytest.mark.asyncio
async def test_inbox_is_descending(services):
    first = await services.chat.send_message("a", "b", "one")
    second = await services.chat.send_message("c", "b", "two")
    await services.chat.send_message("b", "a", "reply")
    inbox = await services.chat.get_messages_for_user("b")
    assert [m.id for m in inbox] == [second.id, first.id]


@pytest.mark.asyncio
async def test_get_and_delete(services):
    sent = await services.chat.send_message("a", "b", "temporary")
    fetched = await services.chat.get_message_by_id(sent.id)
    assert fetched.content == "temporary"
    assert fetched.is_participant("b")
    await services.chat.delete_message(sent.id)
    with pytest.raises(MessageNotFound):
        await services.chat.get_message_by_id(sent.id)
    # deleting again is a quiet no-op
    await services.chat.delete_message(sent.id)
