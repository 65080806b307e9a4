"""Frame memory and its persistence."""

from .models import Frame
from .persistence import MemoryFile
from .store import UNSET_SUBJECT, MemoryStore

__all__ = [
    "Frame",
    "MemoryFile",
    "MemoryStore",
    "UNSET_SUBJECT",
]
