"""Domain models for direct messages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Tuple


@dataclass(slots=True)
class ConversationKey:
	"""Canonical representation of a 1:1 conversation."""

	user_a: str
	user_b: str

	@classmethod
	def from_participants(cls, user_one: str, user_two: str) -> "ConversationKey":
		ordered = tuple(sorted((str(user_one), str(user_two))))
		return cls(user_a=ordered[0], user_b=ordered[1])

	@property
	def conversation_id(self) -> str:
		return f"chat:{self.user_a}:{self.user_b}"

	def participants(self) -> Tuple[str, str]:
		return (self.user_a, self.user_b)


@dataclass(slots=True)
class ChatMessage:
	id: str
	conversation_id: str
	sender_id: str
	recipient_id: str
	content: str
	timestamp: datetime

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "ChatMessage":
		return cls(
			id=str(doc["id"]),
			conversation_id=str(doc["conversation_id"]),
			sender_id=str(doc["sender_id"]),
			recipient_id=str(doc["recipient_id"]),
			content=str(doc["content"]),
			timestamp=doc["timestamp"],
		)

	def is_participant(self, user_id: str) -> bool:
		return str(user_id) in (self.sender_id, self.recipient_id)
