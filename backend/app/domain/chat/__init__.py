"""Chat domain exports."""

from .models import ChatMessage, ConversationKey  # noqa: F401
from .service import ChatService  # noqa: F401
