"""Domain-level exceptions for friend requests & friendships."""

from __future__ import annotations

from app.domain.common.errors import AlreadyExistsError, BadValuesError, NotAllowedError, NotFoundError


class FriendRequestSelfError(BadValuesError):
	reason = "self_request"
	default_message = "You cannot send a friend request to yourself!"


class FriendRequestAlreadyExists(AlreadyExistsError):
	reason = "request_exists"

	def __init__(self, from_name: str, to_name: str) -> None:
		super().__init__(f"Friend request between {from_name} and {to_name} already exists!")


class AlreadyFriends(AlreadyExistsError):
	reason = "already_friends"

	def __init__(self, user_name: str, friend_name: str) -> None:
		super().__init__(f"{user_name} and {friend_name} are already friends!")


class FriendRequestNotFound(NotFoundError):
	reason = "request_not_found"

	def __init__(self, from_name: str, to_name: str) -> None:
		super().__init__(f"Friend request from {from_name} to {to_name} does not exist!")


class FriendRequestForbidden(NotAllowedError):
	reason = "not_recipient"
	default_message = "Only the recipient of a friend request can answer it."


class FriendNotFound(NotFoundError):
	reason = "friend_not_found"

	def __init__(self, user_name: str, friend_name: str) -> None:
		super().__init__(f"Friendship between {user_name} and {friend_name} not found!")


class NotFriends(NotAllowedError):
	reason = "not_friends"

	def __init__(self, user_name: str, friend_name: str) -> None:
		super().__init__(f"User {user_name} and {friend_name} are not friends!")
