"""Friend request state machine and friendship graph.

Requests move ``no-relation -> pending(from->to) -> friends | no-relation``.
Answering a request deletes it; accepting also creates the friendship edge.
The delete is a single compare-and-swap, so of two concurrent accepts only
one observes the pending request.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from app.domain.identity.service import IdentityService
from app.domain.social import audit, policy
from app.domain.social.exceptions import (
	AlreadyFriends,
	FriendNotFound,
	FriendRequestAlreadyExists,
	FriendRequestForbidden,
	FriendRequestNotFound,
	NotFriends,
)
from app.domain.social.models import FriendRequest, Friendship
from app.infra.docstore import DocCollection, DuplicateDocumentError
from app.infra.redis import RedisProxy, redis_client

logger = logging.getLogger(__name__)


class SocialService:
	def __init__(
		self,
		requests: DocCollection,
		friends: DocCollection,
		identity: IdentityService,
		client: RedisProxy = redis_client,
	) -> None:
		self.requests = requests
		self.friends = friends
		self._identity = identity
		self._client = client

	async def _names(self, *user_ids: str) -> List[str]:
		return await self._identity.ids_to_usernames(user_ids)

	def _edge_filter(self, user_one: str, user_two: str) -> dict:
		user_a, user_b = Friendship.canonical(user_one, user_two)
		return {"user_a": user_a, "user_b": user_b}

	async def are_friends(self, user_one: str, user_two: str) -> bool:
		return await self.friends.read_one(self._edge_filter(user_one, user_two)) is not None

	async def assert_are_friends(self, user_one: str, user_two: str, name_one: str, name_two: str) -> None:
		if not await self.are_friends(user_one, user_two):
			raise NotFriends(name_one, name_two)

	async def get_friends(self, user_id: str) -> List[str]:
		"""Return friend ids, oldest friendship first."""
		uid = str(user_id)
		docs = await self.friends.read_many(
			{"$or": [{"user_a": uid}, {"user_b": uid}]},
			sort=[("created_at", 1)],
		)
		return [Friendship.from_document(doc).other(uid) for doc in docs]

	async def get_requests(self, user_id: str) -> Tuple[List[FriendRequest], List[FriendRequest]]:
		"""Return ``(incoming, outgoing)`` pending requests, newest first."""
		uid = str(user_id)
		docs = await self.requests.read_many(
			{"$or": [{"from_id": uid}, {"to_id": uid}]},
			sort=[("created_at", -1)],
		)
		found = [FriendRequest.from_document(doc) for doc in docs]
		incoming = [r for r in found if r.to_id == uid]
		outgoing = [r for r in found if r.from_id == uid]
		return incoming, outgoing

	async def send_request(self, from_id: str, to_id: str) -> FriendRequest:
		policy.guard_not_self(from_id, to_id)
		if await self.are_friends(from_id, to_id):
			raise AlreadyFriends(*await self._names(from_id, to_id))
		try:
			request_id = await self.requests.create_one(
				{"from_id": str(from_id), "to_id": str(to_id)},
				unless=policy.pending_between(from_id, to_id),
			)
		except DuplicateDocumentError as exc:
			existing = FriendRequest.from_document(exc.existing)
			raise FriendRequestAlreadyExists(*await self._names(existing.from_id, existing.to_id)) from None
		await audit.log_friend_event(self._client, "request_sent", {"from": str(from_id), "to": str(to_id)})
		doc = await self.requests.read_one({"id": request_id})
		if doc is None:
			# Cancelled or answered before we could read it back.
			raise FriendRequestNotFound(*await self._names(from_id, to_id))
		return FriendRequest.from_document(doc)

	async def remove_request(self, from_id: str, to_id: str) -> None:
		"""Cancel an outgoing pending request."""
		deleted = await self.requests.delete_one({"from_id": str(from_id), "to_id": str(to_id)})
		if not deleted:
			raise FriendRequestNotFound(*await self._names(from_id, to_id))
		await audit.log_friend_event(self._client, "request_cancelled", {"from": str(from_id), "to": str(to_id)})

	async def _take_request(self, from_id: str, to_id: str) -> None:
		"""Atomically remove the pending ``from -> to`` request or explain why not."""
		deleted = await self.requests.delete_one({"from_id": str(from_id), "to_id": str(to_id)})
		if deleted:
			return
		reverse = await self.requests.read_one({"from_id": str(to_id), "to_id": str(from_id)})
		if reverse is not None:
			raise FriendRequestForbidden()
		raise FriendRequestNotFound(*await self._names(from_id, to_id))

	async def accept_request(self, from_id: str, to_id: str) -> Friendship:
		"""Accept ``from``'s request; ``to`` must be the addressed user."""
		await self._take_request(from_id, to_id)
		user_a, user_b = Friendship.canonical(from_id, to_id)
		try:
			await self.friends.create_one({"user_a": user_a, "user_b": user_b}, unless={"user_a": user_a, "user_b": user_b})
		except DuplicateDocumentError as exc:
			logger.warning("friendship_already_present", extra={"user_a": user_a, "user_b": user_b})
			return Friendship.from_document(exc.existing)
		await audit.log_friend_event(self._client, "request_accepted", {"from": str(from_id), "to": str(to_id)})
		doc = await self.friends.read_one({"user_a": user_a, "user_b": user_b})
		if doc is None:
			raise FriendNotFound(*await self._names(from_id, to_id))
		return Friendship.from_document(doc)

	async def reject_request(self, from_id: str, to_id: str) -> None:
		await self._take_request(from_id, to_id)
		await audit.log_friend_event(self._client, "request_rejected", {"from": str(from_id), "to": str(to_id)})

	async def remove_friend(self, user_id: str, friend_id: str) -> None:
		deleted = await self.friends.delete_one(self._edge_filter(user_id, friend_id))
		if not deleted:
			raise FriendNotFound(*await self._names(user_id, friend_id))
		await audit.log_friend_event(self._client, "friend_removed", {"user": str(user_id), "friend": str(friend_id)})
