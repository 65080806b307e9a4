"""Host command interface and the in-memory scene host."""

from .base import CommandResult, CommandStatus, HostCommand
from .registry import CommandRegistry
from .scene import Scene, SceneCommand, build_scene_registry, parse_length

__all__ = [
    "CommandRegistry",
    "CommandResult",
    "CommandStatus",
    "HostCommand",
    "Scene",
    "SceneCommand",
    "build_scene_registry",
    "parse_length",
]
