"""Domain-level exceptions for moods."""

from __future__ import annotations

from app.domain.common.errors import BadValuesError, NotFoundError


class MoodEmptyError(BadValuesError):
	reason = "mood_empty"
	default_message = "Mood cannot be empty!"


class MoodFormatError(BadValuesError):
	reason = "mood_format"
	default_message = "Mood must be a single emoji!"


class MoodNotFound(NotFoundError):
	reason = "mood_not_found"
	default_message = "Mood not found for this user."


class NoMoodSet(NotFoundError):
	reason = "mood_not_found"
	default_message = "No mood was set for this user."
