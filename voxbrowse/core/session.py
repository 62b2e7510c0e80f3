"""Voice Session - Connects transcripts to the engine and to spoken feedback.

A VoiceSession holds the state the browser extension kept in globals: the
listening flag and the recognition language. Transcripts are put on an
asyncio queue; a consumer task parses each one and starts an independent
dispatch task for it, so a slow command never blocks the next transcript.

Flow:
    speech recognizer -> VoiceSession.submit() -> queue -> parse ->
    VoxEngine.process_intent() -> feedback lines + SpeechOutput.speak()

Stopping the session sets a cancellation event. Dispatches that are
between retry attempts give up; an attempt already in flight completes.

Example:
    from voxbrowse.core import VoiceSession, VoxEngine
    from voxbrowse.browser import MemoryBrowser

    async with VoiceSession(VoxEngine(MemoryBrowser())) as session:
        await session.submit("open github")
        await session.drain()
        print(session.lines[-1].text)  # "✓ Opened new tab: https://www.github.com"
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Set

from .engine import VoxEngine, NOT_RECOGNIZED_MESSAGE
from .intent_parser import parse
from ..config import LANGUAGE, TRANSCRIPT_HISTORY
from ..intents.base import CommandResult

logger = logging.getLogger(__name__)

FAILURE_SPEECH = "Command failed. Please try again."


class SpeechOutput(ABC):
    """Speech synthesis capability used for spoken feedback."""

    @abstractmethod
    def speak(self, text: str) -> None:
        pass


class LoggingSpeech(SpeechOutput):
    """Speech output that writes to the log instead of a synthesizer."""

    def speak(self, text: str) -> None:
        logger.info(f"[speak] {text}")


@dataclass
class FeedbackLine:
    """One line of the transcript view."""
    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "is_error": self.is_error}


class VoiceSession:
    """Session context for voice-driven browsing.

    Attributes:
        language: Recognition language code (e.g. "en-US")
        lines: The most recent feedback lines, oldest first
        line_count: Total lines appended since the session was created
    """

    def __init__(self, engine: VoxEngine,
                 speech: Optional[SpeechOutput] = None,
                 language: str = LANGUAGE,
                 history: int = TRANSCRIPT_HISTORY):
        self._engine = engine
        self._speech = speech or LoggingSpeech()
        self.language = language
        self.lines: deque = deque(maxlen=history)
        self.line_count = 0

        self._listening = False
        self._queue: Optional[asyncio.Queue] = None
        self._cancel_event: Optional[asyncio.Event] = None
        self._consumer: Optional[asyncio.Task] = None
        self._dispatches: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def engine(self) -> VoxEngine:
        return self._engine

    async def start(self) -> bool:
        """Start listening. Returns True once the session is listening."""
        if self._listening:
            return True

        self._queue = asyncio.Queue()
        self._cancel_event = asyncio.Event()
        self._consumer = asyncio.create_task(self._consume())
        self._listening = True
        self._add_line("Voice control started. Listening...")
        logger.info(f"Voice session started (language: {self.language})")
        return True

    async def stop(self) -> None:
        """Stop listening and wait for in-flight dispatches to settle."""
        if not self._listening:
            return

        self._listening = False
        self._cancel_event.set()

        self._consumer.cancel()
        try:
            await self._consumer
        except asyncio.CancelledError:
            pass
        self._consumer = None
        self._discard_queued()

        if self._dispatches:
            await asyncio.gather(*self._dispatches)
        logger.info("Voice session stopped")

    async def __aenter__(self) -> "VoiceSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Transcript channel
    # ------------------------------------------------------------------

    async def submit(self, transcript: str) -> bool:
        """Queue a transcript for processing.

        Returns:
            False if the session is not listening and the transcript was dropped.
        """
        if not self._listening:
            logger.debug(f"Dropped transcript while not listening: {transcript!r}")
            return False
        await self._queue.put(transcript)
        return True

    async def drain(self) -> None:
        """Wait until every queued transcript has been dispatched and settled."""
        if self._queue is not None:
            await self._queue.join()
        while self._dispatches:
            await asyncio.gather(*list(self._dispatches))

    def _discard_queued(self) -> None:
        while not self._queue.empty():
            transcript = self._queue.get_nowait()
            self._queue.task_done()
            logger.debug(f"Dropped queued transcript on stop: {transcript!r}")

    async def _consume(self) -> None:
        while True:
            transcript = await self._queue.get()
            try:
                task = asyncio.create_task(self.handle_transcript(transcript))
                self._dispatches.add(task)
                task.add_done_callback(self._dispatches.discard)
            finally:
                self._queue.task_done()

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    async def handle_transcript(self, transcript: str) -> CommandResult:
        """Parse one transcript, dispatch it and report the outcome."""
        logger.info(f"Voice input: {transcript}")
        self._add_line(f"You said: {transcript}")

        intent = parse(transcript)
        if intent is None:
            self._add_line(NOT_RECOGNIZED_MESSAGE, is_error=True)
            self._say(NOT_RECOGNIZED_MESSAGE)
            return CommandResult.error_result(error="NO_MATCH", response=NOT_RECOGNIZED_MESSAGE)

        logger.debug(f"Parsed intent: {intent.to_dict()}")
        result = await self._engine.process_intent(intent, cancel_event=self._cancel_event)

        if result.success:
            self._add_line(f"✓ {result.response}")
            self._say(result.response)
        else:
            message = result.response
            if message.startswith("Error: "):
                message = message[len("Error: "):]
            self._add_line(f"✗ Error: {message}", is_error=True)
            self._say(FAILURE_SPEECH)

        return result

    def _add_line(self, text: str, is_error: bool = False) -> None:
        self.lines.append(FeedbackLine(text=text, is_error=is_error))
        self.line_count += 1

    def _say(self, text: str) -> None:
        try:
            self._speech.speak(text)
        except Exception as e:
            logger.error(f"Speech synthesis error: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_lines(self) -> List[Dict[str, Any]]:
        return [line.to_dict() for line in self.lines]

    def lines_since(self, count: int) -> List[FeedbackLine]:
        """Lines appended after line_count was `count`, as far as history allows."""
        added = min(self.line_count - count, len(self.lines))
        if added <= 0:
            return []
        return list(self.lines)[-added:]

    def get_status(self) -> Dict[str, Any]:
        return {
            "listening": self._listening,
            "language": self.language,
            "backend": self._engine.backend.name,
            "pending_dispatches": len(self._dispatches),
        }
