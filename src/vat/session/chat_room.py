"""Chat room: one conversation wired to memory, host and transcript."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
import time
import uuid

from ..agent import CommandInvocation, DispatchResult, Dispatcher, Responder
from ..config import ChatConfig
from ..dictation import DictationSource, HttpDictationSource
from ..host import CommandRegistry
from ..logging import JSONLLogger, get_logger
from ..memory import MemoryFile, MemoryStore
from ..transcript import Transcript

logger = logging.getLogger(__name__)


def new_chat_id(prefix: str = "chat") -> str:
    """Generate a new chat ID."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class ChatRoom:
    """Runs utterances through the dispatcher and host commands.

    Each utterance is handled to completion before the next one: the user
    line and the reply are appended to the transcript, then every queued
    host command starts as its own task. A command's completion line is
    appended whenever it finishes, so it can land after later turns.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        registry: CommandRegistry,
        transcript: Transcript,
        config: ChatConfig | None = None,
        memory_file: MemoryFile | None = None,
        dictation: DictationSource | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.registry = registry
        self.transcript = transcript
        self.config = config or ChatConfig()
        self.memory_file = memory_file
        self.dictation = dictation
        self.json_logger = json_logger or get_logger()
        self._pending: set[asyncio.Task] = set()
        self._background: list[asyncio.Task] = []
        self._closed = False

    @classmethod
    def create(
        cls,
        config: ChatConfig,
        registry: CommandRegistry,
        chat_id: str | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> ChatRoom:
        """Build a chat room, loading memory from config.memory_path."""
        memory_file = MemoryFile(config.memory_path)
        memory = MemoryStore.from_document(memory_file.load())
        dispatcher = Dispatcher(
            memory,
            responder=Responder(random.Random(config.seed)),
            user_name=config.user_name,
        )
        transcript = Transcript(chat_id or new_chat_id(), log_dir=config.log_dir / "transcripts")
        dictation = HttpDictationSource(config.dictation_url) if config.dictation_url else None
        return cls(
            dispatcher,
            registry,
            transcript,
            config=config,
            memory_file=memory_file,
            dictation=dictation,
            json_logger=json_logger,
        )

    @property
    def chat_id(self) -> str:
        return self.transcript.chat_id

    @property
    def memory(self) -> MemoryStore:
        return self.dispatcher.memory

    @property
    def closed(self) -> bool:
        """True once the host has closed the session."""
        return self._closed

    @property
    def pending_commands(self) -> int:
        return len(self._pending)

    async def say(self, text: str, source: str = "user") -> DispatchResult:
        """Handle one utterance and start its host commands."""
        self.transcript.user(text)
        result = self.dispatcher.respond(text)

        self.json_logger.log_utterance(
            result.intents,
            result.kind.value,
            chat_id=self.chat_id,
            source=source,
        )

        if result.reply:
            self.transcript.bot(result.reply)

        for invocation in result.invocations:
            self._launch(invocation)

        return result

    def _launch(self, invocation: CommandInvocation) -> None:
        task = asyncio.create_task(self._run_command(invocation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_command(self, invocation: CommandInvocation) -> None:
        self.json_logger.log_command_call(
            invocation.name, invocation.args, chat_id=self.chat_id
        )

        start_time = time.time()
        result = await self.registry.dispatch(invocation.name, invocation.args)
        duration_ms = (time.time() - start_time) * 1000

        self.json_logger.log_command_result(
            invocation.name,
            result.status.value,
            chat_id=self.chat_id,
            duration_ms=duration_ms,
            error=result.error,
        )

        command = self.registry.get(invocation.name)
        line = self.dispatcher.responder.completion(command, result)
        if line:
            self.transcript.bot(line)

        if invocation.name == "close_session" and result.success:
            self._closed = True

    async def wait_for_commands(self) -> None:
        """Wait until every started host command has reported back."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def save_memory(self) -> bool:
        """Write the whole memory document.

        Returns:
            False if the write failed; the next periodic tick retries.
        """
        if self.memory_file is None:
            return False

        document = self.memory.to_document()
        try:
            self.memory_file.save(document)
        except OSError as e:
            logger.warning("Memory save failed, retrying next tick: %s", e)
            self.json_logger.log_memory_save(len(self.memory), chat_id=self.chat_id, error=str(e))
            return False

        self.json_logger.log_memory_save(len(self.memory), chat_id=self.chat_id)
        return True

    async def _save_loop(self) -> None:
        """Background task for periodic memory saves."""
        while True:
            await asyncio.sleep(self.config.save_interval)
            self.save_memory()

    async def _dictation_loop(self) -> None:
        """Background task feeding dictated sentences as user turns."""
        if self.dictation is None:
            raise RuntimeError("Chat room has no dictation source")
        while True:
            await asyncio.sleep(self.config.dictation_interval)
            sentence = await self.dictation.poll()
            if sentence.strip():
                await self.say(sentence, source="dictation")

    def start(self) -> None:
        """Start the periodic save and dictation polling tasks."""
        if self._background:
            return
        self.json_logger.log("session_start", chat_id=self.chat_id)
        self._background.append(asyncio.create_task(self._save_loop()))
        if self.dictation is not None:
            self._background.append(asyncio.create_task(self._dictation_loop()))

    async def stop(self) -> None:
        """Stop background tasks and save memory one last time."""
        for task in self._background:
            task.cancel()
        for task in self._background:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._background.clear()

        self.save_memory()
        self.json_logger.log("session_end", chat_id=self.chat_id)
