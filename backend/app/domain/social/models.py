"""Domain models for friend requests and friendships."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Tuple


@dataclass(slots=True)
class FriendRequest:
	"""A pending, directional request. Answered requests are deleted."""

	id: str
	from_id: str
	to_id: str
	created_at: datetime

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "FriendRequest":
		return cls(
			id=str(doc["id"]),
			from_id=str(doc["from_id"]),
			to_id=str(doc["to_id"]),
			created_at=doc["created_at"],
		)


@dataclass(slots=True)
class Friendship:
	"""A symmetric edge, stored once with ``user_a < user_b``."""

	id: str
	user_a: str
	user_b: str
	created_at: datetime

	@staticmethod
	def canonical(user_one: str, user_two: str) -> Tuple[str, str]:
		ordered = tuple(sorted((str(user_one), str(user_two))))
		return ordered[0], ordered[1]

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "Friendship":
		return cls(
			id=str(doc["id"]),
			user_a=str(doc["user_a"]),
			user_b=str(doc["user_b"]),
			created_at=doc["created_at"],
		)

	def other(self, user_id: str) -> str:
		return self.user_b if str(user_id) == self.user_a else self.user_a
