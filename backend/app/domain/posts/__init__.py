"""Posting domain exports."""

from .models import Post, PostOptions  # noqa: F401
from .service import PostService  # noqa: F401
