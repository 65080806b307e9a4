"""Configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path

from .memory.persistence import DEFAULT_MEMORY_PATH

DEFAULT_LOG_DIR = Path.home() / ".vat" / "logs"


@dataclass
class ChatConfig:
    """Configuration for a chat room.

    Attributes:
        memory_path: JSON file holding the memory document.
        save_interval: Seconds between memory saves.
        dictation_url: Endpoint polled for dictated sentences, None to
            disable dictation.
        dictation_interval: Seconds between dictation polls.
        user_name: Name used in greetings.
        log_dir: Directory for the event log and transcripts.
        seed: Seed for reply variations, None for random.
    """

    memory_path: Path = DEFAULT_MEMORY_PATH
    save_interval: float = 5.0
    dictation_url: str | None = None
    dictation_interval: float = 1.0
    user_name: str = ""
    log_dir: Path = DEFAULT_LOG_DIR
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.save_interval <= 0:
            raise ValueError("save_interval must be positive")
        if self.dictation_interval <= 0:
            raise ValueError("dictation_interval must be positive")


def config_from_env() -> ChatConfig:
    """Load configuration from environment variables."""
    seed = os.getenv("VAT_SEED")
    return ChatConfig(
        memory_path=Path(os.getenv("VAT_MEMORY_PATH", str(DEFAULT_MEMORY_PATH))).expanduser(),
        save_interval=float(os.getenv("VAT_SAVE_INTERVAL", "5")),
        dictation_url=os.getenv("VAT_DICTATION_URL") or None,
        dictation_interval=float(os.getenv("VAT_DICTATION_INTERVAL", "1")),
        user_name=os.getenv("VAT_USER_NAME") or os.getenv("USER") or os.getenv("USERNAME") or "",
        log_dir=Path(os.getenv("VAT_LOG_DIR", str(DEFAULT_LOG_DIR))).expanduser(),
        seed=int(seed) if seed else None,
    )
