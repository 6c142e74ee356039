"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

RecordLike = Mapping[str, Any]


@dataclass(slots=True)
class User:
	id: str
	username: str
	password_hash: str
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_document(cls, doc: RecordLike) -> "User":
		return cls(
			id=str(doc["id"]),
			username=str(doc["username"]),
			password_hash=str(doc["password_hash"]),
			created_at=doc["created_at"],
			updated_at=doc["updated_at"],
		)


DELETED_USERNAME = "DELETED_USER"
