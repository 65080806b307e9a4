"""Intent dispatch, slot extraction and reply wording."""

from .capabilities import CAPABILITIES
from .dispatcher import CommandInvocation, DispatchResult, Dispatcher, ReplyKind
from .fallback import levenshtein, suggest
from .responses import Responder

__all__ = [
    "CAPABILITIES",
    "CommandInvocation",
    "DispatchResult",
    "Dispatcher",
    "ReplyKind",
    "Responder",
    "levenshtein",
    "suggest",
]
