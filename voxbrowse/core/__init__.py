"""Core components for voxbrowse.

This package contains the parsing, execution and session logic for the
voice command layer.

Main Components:
- IntentParser: Converts transcripts to structured Intent objects
- CommandExecutor: Dispatches intents to a browser backend, with retries
- VoxEngine: Processing pipeline combining parsing and execution
- VoiceSession: Listening state, transcript channel and spoken feedback

Example usage:
    from voxbrowse.core import VoxEngine
    from voxbrowse.browser import MemoryBrowser

    engine = VoxEngine(MemoryBrowser())
    result = await engine.process("search youtube for cats")
    print(result.response)  # 'Searching for "cats" on youtube'

    # Or use lower-level components
    from voxbrowse.core import parse, CommandExecutor

    intent = parse("next tab")
    result = await CommandExecutor(MemoryBrowser()).execute(intent)
"""

from .intent_parser import (
    # Main parsing function
    parse,
    normalize_transcript,
    # Utility functions
    get_supported_commands,
    get_command_keywords,
    is_command_keyword,
)

from .executor import CommandExecutor

from .engine import (
    VoxEngine,
    get_engine,
    process,
    NOT_RECOGNIZED_MESSAGE,
)

from .session import (
    VoiceSession,
    SpeechOutput,
    LoggingSpeech,
    FeedbackLine,
)

__all__ = [
    # High-level API
    "VoxEngine",
    "get_engine",
    "process",
    "NOT_RECOGNIZED_MESSAGE",
    # Session
    "VoiceSession",
    "SpeechOutput",
    "LoggingSpeech",
    "FeedbackLine",
    # Executor
    "CommandExecutor",
    # Parser functions
    "parse",
    "normalize_transcript",
    "get_supported_commands",
    "get_command_keywords",
    "is_command_keyword",
]
