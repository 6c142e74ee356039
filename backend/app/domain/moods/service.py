"""Mood exchange between friends."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from app.domain.moods import policy
from app.domain.moods.exceptions import MoodNotFound, NoMoodSet
from app.domain.moods.models import Mood
from app.infra.docstore import DocCollection
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _pair(owner_id: str, friend_id: str) -> dict:
	return {"owner_id": str(owner_id), "friend_id": str(friend_id)}


class MoodService:
	def __init__(self, moods: DocCollection) -> None:
		self.moods = moods

	async def set_mood(self, owner_id: str, friend_id: str, mood: str) -> Tuple[str, Mood]:
		"""Set or overwrite the mood shown to ``friend_id``. Returns ``(msg, mood)``."""
		value = policy.normalise_mood(mood)
		doc, created = await self.moods.upsert_one(_pair(owner_id, friend_id), {"mood": value})
		obs_metrics.inc_mood_set("created" if created else "updated")
		logger.info("mood_set", extra={"owner_id": owner_id, "friend_id": friend_id, "mood_created": created})
		msg = "Mood set successfully!" if created else "Mood updated successfully!"
		return msg, Mood.from_document(doc)

	async def get_mood(self, owner_id: str, friend_id: str) -> Mood:
		doc = await self.moods.read_one(_pair(owner_id, friend_id))
		if doc is None:
			raise MoodNotFound()
		return Mood.from_document(doc)

	async def get_both_moods(self, user_id: str, friend_id: str) -> Tuple[Optional[str], Optional[str]]:
		"""Return ``(mine, theirs)``; either side is None when unset."""
		mine = await self.moods.read_one(_pair(user_id, friend_id))
		theirs = await self.moods.read_one(_pair(friend_id, user_id))
		return (mine["mood"] if mine else None, theirs["mood"] if theirs else None)

	async def remove_mood(self, owner_id: str, friend_id: str) -> None:
		deleted = await self.moods.delete_one(_pair(owner_id, friend_id))
		if not deleted:
			raise NoMoodSet()
		logger.info("mood_removed", extra={"owner_id": owner_id, "friend_id": friend_id})
