"""Validation for mood values.

A mood is exactly one emoji: a flag, a keycap, or a pictograph with its
optional variation selector, skin tone and zero-width-joiner continuations.
"""

from __future__ import annotations

import re

from app.domain.moods.exceptions import MoodEmptyError, MoodFormatError

_PICTOGRAPH = (
	"[\u00a9\u00ae\u203c\u2049\u2122\u2139\u2194-\u2199\u21a9\u21aa\u231a\u231b\u2328\u23cf"
	"\u23e9-\u23f3\u23f8-\u23fa\u24c2\u25aa\u25ab\u25b6\u25c0\u25fb-\u25fe\u2600-\u27bf"
	"\u2934\u2935\u2b05-\u2b07\u2b1b\u2b1c\u2b50\u2b55\u3030\u303d\u3297\u3299"
	"\U0001f000-\U0001f1e5\U0001f200-\U0001faff]"
)
_VS16 = "\ufe0f"
_ZWJ = "\u200d"
_KEYCAP_MARK = "\u20e3"
_SKIN_TONE = "[\U0001f3fb-\U0001f3ff]"
_TAGS = "(?:[\U000e0020-\U000e007e]+\U000e007f)"
_ELEMENT = f"{_PICTOGRAPH}{_VS16}?{_SKIN_TONE}?{_TAGS}?"
_FLAG = "[\U0001f1e6-\U0001f1ff]{2}"
_KEYCAP = f"[0-9#*]{_VS16}?{_KEYCAP_MARK}"

EMOJI_RE = re.compile(f"(?:{_FLAG}|{_KEYCAP}|{_ELEMENT}(?:{_ZWJ}{_ELEMENT})*)")


def is_single_emoji(value: str) -> bool:
	return EMOJI_RE.fullmatch(value) is not None


def normalise_mood(value: str | None) -> str:
	mood = (value or "").strip()
	if not mood:
		raise MoodEmptyError()
	if not is_single_emoji(mood):
		raise MoodFormatError()
	return mood
