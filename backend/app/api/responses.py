"""Response shaping: swap stored user ids for usernames."""

from __future__ import annotations

from typing import List, Sequence

from app.domain.calls.models import Call
from app.domain.calls.schemas import CallOut
from app.domain.chat.models import ChatMessage
from app.domain.chat.schemas import MessageOut
from app.domain.identity.service import IdentityService
from app.domain.posts.models import Post
from app.domain.posts.schemas import PostOut
from app.domain.social.models import FriendRequest
from app.domain.social.schemas import FriendRequestOut


async def posts(identity: IdentityService, items: Sequence[Post]) -> List[PostOut]:
	authors = await identity.ids_to_usernames(p.author_id for p in items)
	return [PostOut.from_post(post, author) for post, author in zip(items, authors)]


async def post(identity: IdentityService, item: Post) -> PostOut:
	return (await posts(identity, [item]))[0]


async def messages(identity: IdentityService, items: Sequence[ChatMessage]) -> List[MessageOut]:
	names = await identity.ids_to_usernames(
		user_id for message in items for user_id in (message.sender_id, message.recipient_id)
	)
	shaped: List[MessageOut] = []
	for idx, message in enumerate(items):
		shaped.append(
			MessageOut(
				id=message.id,
				sender=names[2 * idx],
				recipient=names[2 * idx + 1],
				content=message.content,
				timestamp=message.timestamp,
			)
		)
	return shaped


async def message(identity: IdentityService, item: ChatMessage) -> MessageOut:
	return (await messages(identity, [item]))[0]


async def friend_requests(identity: IdentityService, items: Sequence[FriendRequest]) -> List[FriendRequestOut]:
	froms = await identity.ids_to_usernames(r.from_id for r in items)
	tos = await identity.ids_to_usernames(r.to_id for r in items)
	return [
		FriendRequestOut(id=request.id, from_=from_name, to=to_name, created_at=request.created_at)
		for request, from_name, to_name in zip(items, froms, tos)
	]


async def calls(identity: IdentityService, items: Sequence[Call]) -> List[CallOut]:
	callers = await identity.ids_to_usernames(c.caller_id for c in items)
	recipients = await identity.ids_to_usernames(c.recipient_id for c in items)
	return [
		CallOut(
			id=call.id,
			caller=caller,
			recipient=recipient,
			status=call.status.value,
			start_time=call.start_time,
			accepted_at=call.accepted_at,
			end_time=call.end_time,
		)
		for call, caller, recipient in zip(items, callers, recipients)
	]


async def call(identity: IdentityService, item: Call) -> CallOut:
	return (await calls(identity, [item]))[0]
