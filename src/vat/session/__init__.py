"""Chat session wiring."""

from .chat_room import ChatRoom, new_chat_id

__all__ = ["ChatRoom", "new_chat_id"]
