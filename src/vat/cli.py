"""CLI interface for VAT."""

import asyncio
import json

from .agent import CAPABILITIES
from .config import ChatConfig, config_from_env
from .host import CommandRegistry, Scene, build_scene_registry
from .logging import configure_logger, get_logger
from .session import ChatRoom, new_chat_id
from .transcript import BOT, TranscriptEntry

BANNER = """
╔══════════════════════════════════════════╗
║          🤖 VAT Chat Room v0.1.0         ║
║   Virtual Assistant for 3D modelling     ║
╚══════════════════════════════════════════╝

Commands:
  /exit, /quit    - Exit the CLI
  /capabilities   - List example sentences
  /commands       - List host commands
  /memory         - Show what the assistant remembers
  /save           - Save memory now
  /help           - Show this help

Type your message and press Enter.
"""


class CLI:
    """Interactive command-line interface for VAT."""

    def __init__(
        self,
        config: ChatConfig | None = None,
        registry: CommandRegistry | None = None,
        scene: Scene | None = None,
    ) -> None:
        self.config = config or config_from_env()
        self.scene = scene or Scene()
        self.registry = registry or build_scene_registry(self.scene)
        self.logger = get_logger()
        self.room = ChatRoom.create(
            self.config,
            self.registry,
            chat_id=new_chat_id("cli"),
            json_logger=self.logger,
        )
        self.room.transcript.subscribe(self._print_entry)

    @property
    def chat_id(self) -> str:
        return self.room.chat_id

    def _print_entry(self, entry: TranscriptEntry) -> None:
        # The user's own lines are already on screen.
        if entry.role == BOT:
            print(f"\n{entry.format()}")

    def _format_memory(self) -> str:
        document = self.room.memory.to_document()
        if not document:
            return "Memory is empty."
        return json.dumps(document, ensure_ascii=False, indent=2)

    async def _handle_command(self, command: str) -> bool:
        """Handle a special command. Returns True if should continue, False to exit."""
        cmd = command.lower().strip()

        if cmd in ("/exit", "/quit", "exit", "quit"):
            print("\n👋 Goodbye!")
            return False

        if cmd == "/capabilities":
            print("\n".join(f" - {c}" for c in CAPABILITIES))
            return True

        if cmd == "/commands":
            for host_command in self.registry:
                print(f"  {host_command.name:<24} {host_command.description}")
            return True

        if cmd == "/memory":
            print(self._format_memory())
            return True

        if cmd == "/save":
            if self.room.save_memory():
                print(f"✓ Memory saved to {self.config.memory_path}")
            else:
                print("❌ Memory could not be saved, will retry.")
            return True

        if cmd == "/help":
            print(BANNER)
            return True

        return True  # Unknown command, continue

    async def _process_message(self, message: str) -> None:
        """Process a user message through the chat room.

        Host commands keep running after this returns; their completion
        lines are printed by the transcript listener when they finish.
        """
        try:
            await self.room.say(message)
        except Exception as e:
            print(f"\n❌ Error: {e}")
            self.logger.log("error", chat_id=self.chat_id, error=str(e))

    async def run(self) -> None:
        """Run the interactive CLI."""
        print(BANNER)
        print(f"Session: {self.chat_id}\n")

        self.room.start()

        try:
            while not self.room.closed:
                try:
                    user_input = (await asyncio.to_thread(input, "you> ")).strip()

                    # A farewell may have closed the session during the prompt.
                    if self.room.closed:
                        break

                    if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                        if not await self._handle_command(user_input):
                            break
                        continue

                    await self._process_message(user_input)

                except EOFError:
                    print("\n👋 Goodbye!")
                    break
        except KeyboardInterrupt:
            print("\n👋 Goodbye!")
        finally:
            await self.room.wait_for_commands()
            await self.room.stop()


async def run_cli() -> None:
    """Run the CLI with configuration from the environment."""
    config = config_from_env()
    configure_logger(config.log_dir)

    cli = CLI(config=config)
    await cli.run()
