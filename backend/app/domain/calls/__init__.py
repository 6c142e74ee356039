"""Call session domain exports."""

from .models import Call, CallRole, CallStatus  # noqa: F401
from .service import CallService  # noqa: F401
