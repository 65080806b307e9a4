"""Structured JSONL event log for chat sessions.

One JSON object per line: utterance classification, host command calls
and results, memory saves and session boundaries.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class LogEntry:
    """A single log entry. Unknown fields go to ``extra``."""

    timestamp: str
    event: str
    chat_id: str | None = None
    command: str | None = None
    status: str | None = None
    intents: list[str] | None = None
    duration_ms: float | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, leaving out unset and empty fields."""
        return {k: v for k, v in asdict(self).items() if v not in (None, {}, [])}


_ENTRY_FIELDS = frozenset(f.name for f in fields(LogEntry)) - {"timestamp", "event", "extra"}


class JSONLLogger:
    """Appends events to ``<log_dir>/events.jsonl``.

    When the file grows past max_size_mb it is shifted to events.1.jsonl,
    events.1 to events.2 and so on; at most ``backups`` old files are kept.
    """

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "events.jsonl",
        max_size_mb: float = 10.0,
        backups: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir) if log_dir is not None else Path.home() / ".vat" / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)
        self.backups = backups
        self._current_chat_id: str | None = None

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.filename

    def backup_path(self, index: int) -> Path:
        """Path of the index-th rotated file (1 is the newest)."""
        stem, suffix = Path(self.filename).stem, Path(self.filename).suffix
        return self.log_dir / f"{stem}.{index}{suffix}"

    def set_chat_id(self, chat_id: str | None) -> None:
        """Default chat_id for events logged without one."""
        self._current_chat_id = chat_id

    def _rotate_if_needed(self) -> None:
        if not self.log_path.exists() or self.log_path.stat().st_size < self.max_size_bytes:
            return

        if self.backups < 1:
            self.log_path.unlink()
            return

        self.backup_path(self.backups).unlink(missing_ok=True)
        for index in range(self.backups - 1, 0, -1):
            older = self.backup_path(index)
            if older.exists():
                older.replace(self.backup_path(index + 1))
        self.log_path.replace(self.backup_path(1))

    def log(self, event: str, *, chat_id: str | None = None, **values: Any) -> None:
        """Log an event.

        Keyword arguments naming a LogEntry field fill that field; the rest
        are stored under ``extra``.
        """
        known = {k: v for k, v in values.items() if k in _ENTRY_FIELDS}
        extra = {k: v for k, v in values.items() if k not in _ENTRY_FIELDS}
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            chat_id=chat_id or self._current_chat_id,
            extra=extra,
            **known,
        )

        self._rotate_if_needed()
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log_utterance(
        self,
        intents: list[str],
        reply_kind: str,
        *,
        chat_id: str | None = None,
        source: str = "user",
    ) -> None:
        """Log how an utterance was classified."""
        self.log("utterance", chat_id=chat_id, intents=intents, reply_kind=reply_kind, source=source)

    def log_command_call(self, command: str, args: dict[str, Any], *, chat_id: str | None = None) -> None:
        self.log("command_call", chat_id=chat_id, command=command, command_args=args)

    def log_command_result(
        self,
        command: str,
        status: str,
        *,
        chat_id: str | None = None,
        duration_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        self.log(
            "command_result",
            chat_id=chat_id,
            command=command,
            status=status,
            duration_ms=duration_ms,
            error=error,
        )

    def log_memory_save(self, frames: int, *, chat_id: str | None = None, error: str | None = None) -> None:
        """Log a memory save; failures get their own event name."""
        event = "memory_save_failed" if error else "memory_save"
        self.log(event, chat_id=chat_id, error=error, frames=frames)


_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the process-wide event logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Replace the process-wide event logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
