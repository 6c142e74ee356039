"""Domain model for per-friend moods."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass(slots=True)
class Mood:
	"""The emoji ``owner_id`` shows to ``friend_id``. One per ordered pair."""

	id: str
	owner_id: str
	friend_id: str
	mood: str
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "Mood":
		return cls(
			id=str(doc["id"]),
			owner_id=str(doc["owner_id"]),
			friend_id=str(doc["friend_id"]),
			mood=str(doc["mood"]),
			created_at=doc["created_at"],
			updated_at=doc["updated_at"],
		)
