"""Domain models for posts."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional


@dataclass(slots=True)
class PostOptions:
	background_color: Optional[str] = None

	@classmethod
	def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> Optional["PostOptions"]:
		if not raw:
			return None
		return cls(background_color=raw.get("background_color"))

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


@dataclass(slots=True)
class Post:
	id: str
	author_id: str
	content: str
	options: Optional[PostOptions]
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "Post":
		return cls(
			id=str(doc["id"]),
			author_id=str(doc["author_id"]),
			content=str(doc["content"]),
			options=PostOptions.from_mapping(doc.get("options")),
			created_at=doc["created_at"],
			updated_at=doc["updated_at"],
		)
