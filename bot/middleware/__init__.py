"""Bot middleware package."""

from .sender_guard import SenderGuardMiddleware, is_message_from_person, setup_sender_guard

__all__ = [
    "SenderGuardMiddleware",
    "is_message_from_person",
    "setup_sender_guard",
]
