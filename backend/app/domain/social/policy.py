"""Guard checks for friend requests & friendships."""

from __future__ import annotations

from app.domain.social.exceptions import FriendRequestSelfError


def guard_not_self(user_id: str, target_id: str) -> None:
	if str(user_id) == str(target_id):
		raise FriendRequestSelfError()


def pending_between(user_a: str, user_b: str) -> dict:
	"""Filter matching a pending request in either direction."""
	return {
		"$or": [
			{"from_id": str(user_a), "to_id": str(user_b)},
			{"from_id": str(user_b), "to_id": str(user_a)},
		]
	}
