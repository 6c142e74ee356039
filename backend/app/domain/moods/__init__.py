"""Mood exchange domain exports."""

from .models import Mood  # noqa: F401
from .service import MoodService  # noqa: F401
