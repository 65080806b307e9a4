"""Command registry for managing and dispatching host commands."""

import logging
from collections.abc import Iterator
from typing import Any

from .base import CommandResult, CommandStatus, HostCommand

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Registry for available host commands."""

    def __init__(self) -> None:
        self._commands: dict[str, HostCommand] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[HostCommand]:
        return iter(self._commands.values())

    def register(self, command: HostCommand) -> None:
        """Register a command."""
        if command.name in self._commands:
            raise ValueError(f"Command '{command.name}' already registered")
        self._commands[command.name] = command

    def get(self, name: str) -> HostCommand | None:
        """Get a command by name."""
        return self._commands.get(name)

    async def dispatch(self, name: str, args: dict[str, Any]) -> CommandResult:
        """Dispatch a command call by name with arguments."""
        command = self._commands.get(name)
        if command is None:
            return CommandResult(
                status=CommandStatus.FAILED,
                error=f"Unknown command: {name}",
            )

        valid, error = command.validate_args(args)
        if not valid:
            return CommandResult(status=CommandStatus.FAILED, error=error)

        try:
            return await command.execute(**args)
        except Exception as e:
            logger.exception("Command %s failed", name)
            return CommandResult(
                status=CommandStatus.FAILED,
                error=f"Command execution failed: {e}",
            )
