"""Append-only chat transcript.

Holds the user and bot lines of a chat session in the order they were
produced. Listeners are notified of each new line, and lines can also be
written to logs/ as one JSONL file per session for later analysis.
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

USER = "user"
BOT = "bot"

SPEAKERS = {USER: "Me", BOT: "Bot"}


@dataclass(frozen=True)
class TranscriptEntry:
    """One line of the conversation."""

    role: str
    text: str
    timestamp: str

    def format(self) -> str:
        return f"{SPEAKERS.get(self.role, self.role)}: {self.text}"


Listener = Callable[[TranscriptEntry], None]


class Transcript:
    """Ordered user/bot lines of one chat session."""

    def __init__(self, chat_id: str, log_dir: Path | str | None = None) -> None:
        """Initialize the transcript.

        Args:
            chat_id: Session identifier, used in the log file name.
            log_dir: Directory for the JSONL file. None keeps the
                transcript in memory only.
        """
        self.chat_id = chat_id
        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self._entries: list[TranscriptEntry] = []
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[TranscriptEntry]:
        return list(self._entries)

    @property
    def log_file(self) -> Path | None:
        """Log file path for this session, if file logging is enabled."""
        if self.log_dir is None:
            return None
        date_str = datetime.now().strftime("%Y-%m-%d")
        return self.log_dir / f"{date_str}_{self.chat_id}.jsonl"

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def user(self, text: str) -> TranscriptEntry:
        """Append a user line."""
        return self._append(USER, text)

    def bot(self, text: str) -> TranscriptEntry:
        """Append a bot line."""
        return self._append(BOT, text)

    def texts(self, role: str | None = None) -> list[str]:
        """Texts of all lines, optionally only those of one role."""
        return [e.text for e in self._entries if role is None or e.role == role]

    def _append(self, role: str, text: str) -> TranscriptEntry:
        entry = TranscriptEntry(
            role=role,
            text=text,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        self._entries.append(entry)

        log_file = self.log_file
        if log_file is not None:
            record = asdict(entry)
            record["chat_id"] = self.chat_id
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")

        for listener in self._listeners:
            listener(entry)
        return entry
