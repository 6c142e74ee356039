"""Social domain exports."""

from .models import FriendRequest, Friendship  # noqa: F401
from .service import SocialService  # noqa: F401
