"""Identity domain exports."""

from .models import User  # noqa: F401
from .service import IdentityService  # noqa: F401
from .sessions import SessionStore  # noqa: F401
