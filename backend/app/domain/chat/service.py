"""Direct messages: store-then-read, no delivery tracking."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from app.domain.chat.models import ChatMessage, ConversationKey
from app.domain.common.errors import BadValuesError, NotFoundError
from app.infra.docstore import DocCollection
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class EmptyMessageError(BadValuesError):
	reason = "message_empty"
	default_message = "Message content cannot be empty"


class MessageNotFound(NotFoundError):
	reason = "message_not_found"
	default_message = "Message not found"


class ChatService:
	def __init__(self, messages: DocCollection) -> None:
		self.messages = messages

	async def send_message(self, sender_id: str, recipient_id: str, content: str) -> ChatMessage:
		if not content or not content.strip():
			raise EmptyMessageError()
		conversation = ConversationKey.from_participants(sender_id, recipient_id)
		message_id = await self.messages.create_one(
			{
				"conversation_id": conversation.conversation_id,
				"sender_id": str(sender_id),
				"recipient_id": str(recipient_id),
				"content": content,
				"timestamp": datetime.now(timezone.utc),
			}
		)
		obs_metrics.inc_message_sent()
		logger.info("message_sent", extra={"message_id": message_id, "conversation_id": conversation.conversation_id})
		return await self.get_message_by_id(message_id)

	async def get_message_by_id(self, message_id: str) -> ChatMessage:
		doc = await self.messages.read_one({"id": str(message_id)})
		if doc is None:
			raise MessageNotFound()
		return ChatMessage.from_document(doc)

	async def get_messages_between_users(self, user_one: str, user_two: str) -> List[ChatMessage]:
		"""Both directions of a conversation, oldest first."""
		conversation = ConversationKey.from_participants(user_one, user_two)
		docs = await self.messages.read_many(
			{"conversation_id": conversation.conversation_id},
			sort=[("timestamp", 1)],
		)
		return [ChatMessage.from_document(doc) for doc in docs]

	async def get_messages_for_user(self, user_id: str) -> List[ChatMessage]:
		"""Messages addressed to ``user_id``, newest first."""
		docs = await self.messages.read_many(
			{"recipient_id": str(user_id)},
			sort=[("timestamp", -1), ("id", -1)],
		)
		return [ChatMessage.from_document(doc) for doc in docs]

	async def delete_message(self, message_id: str) -> None:
		# Authorisation is the caller's job; a missing id is not an error here.
		deleted = await self.messages.delete_one({"id": str(message_id)})
		if deleted:
			logger.info("message_deleted", extra={"message_id": message_id})
