"""Base host command interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CommandStatus(Enum):
    """Outcome of a host command."""

    DONE = "done"
    NOT_FOUND = "not_found"
    NOTHING_SELECTED = "nothing_selected"
    FAILED = "failed"


@dataclass
class CommandResult:
    """Result from host command execution."""

    status: CommandStatus
    output: str = ""
    error: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def success(self) -> bool:
        return self.status is CommandStatus.DONE


class HostCommand(ABC):
    """Base interface for all host commands."""

    # Follow-up line when the host finds nothing to act on.
    not_found_message: str = "Nothing found!"

    # Silent commands append no completion line when they succeed.
    silent: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique command name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable description."""
        ...

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """JSON Schema for command parameters."""
        ...

    @abstractmethod
    async def execute(self, **kwargs: Any) -> CommandResult:
        """Execute the command with given arguments."""
        ...

    def validate_args(self, args: dict[str, Any]) -> tuple[bool, str | None]:
        """Validate arguments against schema. Returns (valid, error_message)."""
        required = self.parameters.get("required", [])
        properties = self.parameters.get("properties", {})

        for field in required:
            if field not in args:
                return False, f"Missing required argument: {field}"

        for key, value in args.items():
            if key not in properties:
                return False, f"Unexpected argument: {key}"
            expected_type = properties[key].get("type")
            if expected_type == "string" and not isinstance(value, str):
                return False, f"Argument '{key}' must be a string"
            if expected_type == "integer" and (
                not isinstance(value, int) or isinstance(value, bool)
            ):
                return False, f"Argument '{key}' must be an integer"
            if expected_type == "number" and (
                not isinstance(value, (int, float)) or isinstance(value, bool)
            ):
                return False, f"Argument '{key}' must be a number"

        return True, None
