#!/usr/bin/env python3
"""
Test script for the voxbrowse voice session

Tests:
- Listening lifecycle and dropped transcripts
- Feedback lines and spoken responses
- Transcript history limit
- Cancellation of pending retries on stop
"""

import asyncio
import os
import sys

# Add voxbrowse to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from voxbrowse.browser import MemoryBrowser
from voxbrowse.core import VoxEngine, VoiceSession, SpeechOutput
from voxbrowse.errors import ExecutionFailure


class RecordingSpeech(SpeechOutput):
    """Collects spoken text instead of synthesizing it."""

    def __init__(self):
        self.spoken = []

    def speak(self, text):
        self.spoken.append(text)


class FailingSpeech(SpeechOutput):
    def speak(self, text):
        raise OSError("audio device busy")


class StuckBrowser(MemoryBrowser):
    """MemoryBrowser whose clicks always fail."""

    def __init__(self):
        super().__init__()
        self.click_calls = 0

    async def click(self, selector):
        self.click_calls += 1
        raise ExecutionFailure("Element not found")


def make_session(backend=None, history=10, retry_delay=0):
    speech = RecordingSpeech()
    engine = VoxEngine(backend or MemoryBrowser(), max_attempts=2, retry_delay=retry_delay)
    return VoiceSession(engine, speech=speech, history=history), speech


def test_lifecycle():
    """Test start/stop and submit while not listening."""
    print("\n" + "=" * 60)
    print("TESTING SESSION LIFECYCLE")
    print("=" * 60)

    async def run():
        session, speech = make_session()

        assert not session.listening
        assert await session.submit("open youtube") is False
        assert list(session.lines) == []
        print("  transcripts are dropped while idle")

        assert await session.start()
        assert session.listening
        assert await session.start()
        assert session.lines[-1].text == "Voice control started. Listening..."
        print("  start is idempotent")

        status = session.get_status()
        assert status == {
            "listening": True,
            "language": "en-US",
            "backend": "memory",
            "pending_dispatches": 0,
        }
        print("  status")

        await session.stop()
        assert not session.listening
        await session.stop()
        print("  stop is idempotent")

        async with session:
            assert session.listening
        assert not session.listening
        print("  async context manager")

    asyncio.run(run())


def test_feedback():
    """Test feedback lines and speech for each outcome."""
    print("\n" + "=" * 60)
    print("TESTING FEEDBACK")
    print("=" * 60)

    async def run():
        session, speech = make_session()

        async with session:
            await session.submit("open github")
            await session.drain()
            texts = [line.text for line in session.lines]
            assert texts[-2:] == ["You said: open github", "✓ Opened new tab: https://www.github.com"]
            assert speech.spoken[-1] == "Opened new tab: https://www.github.com"
            print("  success")

            await session.submit("make me a sandwich")
            await session.drain()
            assert session.lines[-1].text == "Command not recognized. Please try again."
            assert session.lines[-1].is_error
            assert speech.spoken[-1] == "Command not recognized. Please try again."
            print("  not recognized")

            await session.submit("remove bookmark")
            await session.drain()
            assert session.lines[-1].text == "✗ Error: Bookmark not found"
            assert session.lines[-1].is_error
            assert speech.spoken[-1] == "Command failed. Please try again."
            print("  execution failure")

        lines = session.get_lines()
        assert lines[-1] == {"text": "✗ Error: Bookmark not found", "is_error": True}
        print("  get_lines")

    asyncio.run(run())


def test_concurrent_dispatch():
    """Test that several transcripts are dispatched independently."""
    print("\n" + "=" * 60)
    print("TESTING CONCURRENT DISPATCH")
    print("=" * 60)

    async def run():
        browser = MemoryBrowser()
        session, speech = make_session(backend=browser)

        async with session:
            for text in ["open youtube", "open github", "scroll down"]:
                assert await session.submit(text)
            await session.drain()
            assert session.get_status()["pending_dispatches"] == 0

        assert len(browser.tabs) == 3
        assert len([s for s in speech.spoken if s.startswith("Opened new tab")]) == 2
        print("  all transcripts dispatched")

    asyncio.run(run())


def test_history_limit():
    """Test that only the most recent lines are kept."""
    print("\n" + "=" * 60)
    print("TESTING HISTORY LIMIT")
    print("=" * 60)

    async def run():
        session, _ = make_session(history=4)

        async with session:
            for _ in range(5):
                await session.submit("scroll down")
                await session.drain()

        assert len(session.lines) == 4
        assert session.lines[-1].text == "✓ Scrolled down"
        print("  oldest lines are dropped")

    asyncio.run(run())


def test_stop_cancels_retries():
    """Test that stopping the session cancels dispatches waiting to retry."""
    print("\n" + "=" * 60)
    print("TESTING STOP CANCELS RETRIES")
    print("=" * 60)

    async def run():
        browser = StuckBrowser()
        session, speech = make_session(backend=browser, retry_delay=30)

        await session.start()
        await session.submit("click the button")
        while browser.click_calls == 0:
            await asyncio.sleep(0)

        await asyncio.wait_for(session.stop(), timeout=5)

        assert browser.click_calls == 1
        assert session.lines[-1].is_error
        assert session.lines[-1].text.startswith("✗ Error: Cancelled after 1 attempt(s)")
        assert speech.spoken[-1] == "Command failed. Please try again."
        print("  pending retry was cancelled")

    asyncio.run(run())


def test_stop_discards_queued_transcripts():
    """Test that transcripts still queued at stop are dropped and drain returns."""
    print("\n" + "=" * 60)
    print("TESTING STOP WITH QUEUED TRANSCRIPTS")
    print("=" * 60)

    async def run():
        browser = MemoryBrowser()
        session, _ = make_session(backend=browser)

        await session.start()
        await session.submit("scroll down")
        await session.submit("open github")
        await session.stop()

        await asyncio.wait_for(session.drain(), timeout=1)
        assert len(browser.tabs) == 1
        assert browser.active_tab.scroll_y == 0
        print("  queue emptied, drain does not block")

        async with session:
            await session.submit("scroll down")
            await asyncio.wait_for(session.drain(), timeout=1)
        assert browser.active_tab.scroll_y == 500
        print("  session usable after restart")

    asyncio.run(run())


def test_lines_since():
    """Test reading new lines once the history is full."""
    print("\n" + "=" * 60)
    print("TESTING LINES SINCE")
    print("=" * 60)

    async def run():
        session, _ = make_session(history=3)

        async with session:
            for _ in range(4):
                shown = session.line_count
                await session.submit("scroll up")
                await session.drain()
                assert [line.text for line in session.lines_since(shown)] == [
                    "You said: scroll up",
                    "✓ Scrolled up",
                ]

        assert session.line_count == 9
        assert len(session.lines) == 3
        assert len(session.lines_since(0)) == 3
        assert session.lines_since(session.line_count) == []
        print("  new lines reported after history wraps")

    asyncio.run(run())


def test_speech_errors_are_contained():
    """Test that a broken speech output does not break dispatch."""
    print("\n" + "=" * 60)
    print("TESTING SPEECH ERRORS")
    print("=" * 60)

    async def run():
        engine = VoxEngine(MemoryBrowser(), retry_delay=0)
        session = VoiceSession(engine, speech=FailingSpeech())
        result = await session.handle_transcript("scroll up")
        assert result.success
        assert session.lines[-1].text == "✓ Scrolled up"
        print("  speech failure logged, result kept")

    asyncio.run(run())


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("VOXBROWSE SESSION TESTS")
    print("=" * 60)

    tests = [
        ("Lifecycle", test_lifecycle),
        ("Feedback", test_feedback),
        ("Concurrent Dispatch", test_concurrent_dispatch),
        ("History Limit", test_history_limit),
        ("Stop Cancels Retries", test_stop_cancels_retries),
        ("Stop With Queued Transcripts", test_stop_discards_queued_transcripts),
        ("Lines Since", test_lines_since),
        ("Speech Errors", test_speech_errors_are_contained),
    ]

    passed = 0
    failed = 0

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"\n  FAILED: {name}")
            print(f"  Error: {e}")
            failed += 1

    print("\n" + "=" * 60)
    print(f"RESULTS: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
