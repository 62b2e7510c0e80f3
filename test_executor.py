#!/usr/bin/env python3
"""
Test script for the voxbrowse command executor and engine

Tests:
- Dispatch of every command against the in-memory browser
- Retry: replayed intent, fixed attempt count, cancellation between attempts
- Engine error codes (EMPTY_INPUT, NO_MATCH, EXECUTION_FAILED, CANCELLED)
"""

import asyncio
import os
import sys

# Add voxbrowse to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from voxbrowse.browser import MemoryBrowser, create_backend
from voxbrowse.core import CommandExecutor, VoxEngine, parse
from voxbrowse.errors import ExecutionFailure, UnknownCommandError, DispatchCancelled
from voxbrowse.intents import CommandType, Intent


class FlakyBrowser(MemoryBrowser):
    """MemoryBrowser whose clicks fail a set number of times."""

    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.click_calls = []

    async def click(self, selector):
        self.click_calls.append(selector)
        if len(self.click_calls) <= self.failures:
            raise ExecutionFailure(f"Element not found: {selector}")
        return await super().click(selector)


class BrokenBrowser(MemoryBrowser):
    """MemoryBrowser whose reload raises a non-execution error."""

    async def reload_tab(self):
        raise RuntimeError("renderer crashed")


def test_memory_dispatch():
    """Test each command against the in-memory browser."""
    print("\n" + "=" * 60)
    print("TESTING COMMAND DISPATCH")
    print("=" * 60)

    async def run():
        browser = MemoryBrowser()
        executor = CommandExecutor(browser)

        result = await executor.execute(parse("open youtube"))
        assert result.success
        assert result.response == "Opened new tab: https://www.youtube.com"
        assert result.data["command"] == "openTab"
        assert result.data["params"] == {"url": "https://www.youtube.com"}
        assert len(browser.tabs) == 2
        print("  openTab")

        result = await executor.execute(parse("next tab"))
        assert result.response == "Switched to next tab"
        assert browser.active_index == 0
        result = await executor.execute(parse("previous tab"))
        assert browser.active_index == 1
        print("  switchTab wraps around")

        result = await executor.execute(parse("go to example.com"))
        assert result.response == "Navigated to https://example.com"
        assert browser.active_tab.url == "https://example.com"
        print("  navigate")

        result = await executor.execute(parse("search youtube for cats"))
        assert result.response == 'Searching for "cats" on youtube'
        assert browser.active_tab.url == "https://www.youtube.com/results?search_query=cats"
        print("  search")

        await executor.execute(parse("scroll down"))
        await executor.execute(parse("scroll down"))
        await executor.execute(parse("scroll up"))
        assert browser.active_tab.scroll_y == 500
        print("  scroll")

        result = await executor.execute(parse("click the button"))
        assert result.response == "Clicked element: button"
        assert browser.active_tab.clicks == ["button"]
        print("  click")

        result = await executor.execute(parse("fill in the name field with bob"))
        assert result.response.startswith("Filled input: ")
        assert list(browser.active_tab.fields.values()) == ["bob"]
        print("  fill")

        result = await executor.execute(parse("reload"))
        assert result.response == "Tab reloaded"
        assert browser.active_tab.reloads == 1
        print("  reloadTab")

        assert (await executor.execute(parse("add bookmark"))).response == "Bookmark added"
        assert (await executor.execute(parse("remove bookmark"))).response == "Bookmark removed"
        assert browser.bookmarks == []
        print("  bookmark")

        assert (await executor.execute(parse("maximize window"))).response == "Window maximized"
        assert browser.window_state == "maximized"
        print("  window")

        tabs_before = len(browser.tabs)
        assert (await executor.execute(parse("close tab"))).response == "Tab closed"
        assert len(browser.tabs) == tabs_before - 1
        print("  closeTab")

    asyncio.run(run())


def test_execution_failures():
    """Test failure wrapping and unknown commands."""
    print("\n" + "=" * 60)
    print("TESTING EXECUTION FAILURES")
    print("=" * 60)

    async def run():
        executor = CommandExecutor(MemoryBrowser())

        try:
            await executor.execute(parse("remove bookmark"))
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert str(e) == "Bookmark not found"
        print("  backend failure propagates")

        try:
            await executor.execute(Intent(command=CommandType.SWITCH_TAB, params={"direction": "up"}))
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert str(e) == "Invalid direction"
        print("  invalid direction")

        try:
            await executor.execute(Intent(command=CommandType.OPEN_TAB))
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert "Missing parameter" in str(e)
        print("  missing parameter")

        try:
            await CommandExecutor(BrokenBrowser()).execute(parse("reload"))
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert str(e) == "renderer crashed"
            assert isinstance(e.__cause__, RuntimeError)
        print("  unexpected errors are wrapped")

        try:
            await executor.execute(Intent(command="teleport"))
            raise AssertionError("expected UnknownCommandError")
        except UnknownCommandError as e:
            assert str(e) == "Unknown command: teleport"
        print("  unknown command")

        empty = MemoryBrowser(start_url=None)
        try:
            await CommandExecutor(empty).execute(parse("scroll down"))
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert str(e) == "No active tab"
        print("  no active tab")

    asyncio.run(run())


def test_retry():
    """Test that failed dispatches are replayed a fixed number of times."""
    print("\n" + "=" * 60)
    print("TESTING RETRY")
    print("=" * 60)

    async def run():
        intent = parse("click the button")

        browser = FlakyBrowser(failures=1)
        result = await CommandExecutor(browser).execute_with_retry(intent, max_attempts=2, delay=0)
        assert result.success
        assert browser.click_calls == ["button", "button"]
        print("  second attempt succeeds")

        browser = FlakyBrowser(failures=5)
        try:
            await CommandExecutor(browser).execute_with_retry(intent, max_attempts=2, delay=0)
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert str(e) == "Element not found: button"
        assert len(browser.click_calls) == 2
        print("  gives up after two attempts")

        browser = FlakyBrowser(failures=5)
        try:
            await CommandExecutor(browser).execute_with_retry(intent, max_attempts=0, delay=0)
        except ExecutionFailure:
            pass
        assert len(browser.click_calls) == 1
        print("  at least one attempt")

        executor = CommandExecutor(MemoryBrowser())
        try:
            await executor.execute_with_retry(Intent(command="teleport"), max_attempts=3, delay=10)
            raise AssertionError("expected UnknownCommandError")
        except UnknownCommandError:
            pass
        print("  unknown commands are not retried")

    asyncio.run(run())


def test_retry_cancellation():
    """Test that a set cancel event stops retries between attempts."""
    print("\n" + "=" * 60)
    print("TESTING RETRY CANCELLATION")
    print("=" * 60)

    async def run():
        intent = parse("click the button")

        browser = FlakyBrowser(failures=5)
        cancel = asyncio.Event()
        cancel.set()
        try:
            await CommandExecutor(browser).execute_with_retry(
                intent, max_attempts=3, delay=10, cancel_event=cancel
            )
            raise AssertionError("expected DispatchCancelled")
        except DispatchCancelled as e:
            assert "Element not found" in str(e)
        assert len(browser.click_calls) == 1
        print("  pre-set event stops after the first attempt")

        browser = FlakyBrowser(failures=5)
        cancel = asyncio.Event()
        task = asyncio.create_task(CommandExecutor(browser).execute_with_retry(
            intent, max_attempts=3, delay=10, cancel_event=cancel
        ))
        while not browser.click_calls:
            await asyncio.sleep(0)
        cancel.set()
        try:
            await asyncio.wait_for(task, timeout=2)
            raise AssertionError("expected DispatchCancelled")
        except DispatchCancelled:
            pass
        assert len(browser.click_calls) == 1
        print("  event set during the pause wakes the retry loop")

        browser = FlakyBrowser(failures=1)
        result = await CommandExecutor(browser).execute_with_retry(
            intent, max_attempts=2, delay=0.01, cancel_event=asyncio.Event()
        )
        assert result.success
        print("  unset event does not interfere")

    asyncio.run(run())


def test_engine_results():
    """Test the engine's conversion of outcomes to CommandResult."""
    print("\n" + "=" * 60)
    print("TESTING ENGINE RESULTS")
    print("=" * 60)

    async def run():
        engine = VoxEngine(MemoryBrowser(), max_attempts=2, retry_delay=0)

        result = await engine.process("   ")
        assert not result.success
        assert result.error == "EMPTY_INPUT"
        print("  EMPTY_INPUT")

        result = await engine.process("sing me a song")
        assert result.error == "NO_MATCH"
        assert result.response == "Command not recognized. Please try again."
        assert result.data == {"raw_text": "sing me a song"}
        print("  NO_MATCH")

        result = await engine.process("delete bookmark")
        assert result.error == "EXECUTION_FAILED"
        assert result.response == "Error: Bookmark not found"
        assert result.data["intent"] == {"command": "bookmark", "params": {"action": "remove"}}
        print("  EXECUTION_FAILED")

        cancel = asyncio.Event()
        cancel.set()
        flaky = VoxEngine(FlakyBrowser(failures=5), max_attempts=2, retry_delay=1)
        result = await flaky.process("click the button", cancel_event=cancel)
        assert result.error == "CANCELLED"
        assert result.response.startswith("Error: Cancelled after 1 attempt(s)")
        print("  CANCELLED")

        result = await engine.process("Scroll Down")
        assert result.success
        assert result.to_dict()["response"] == "Scrolled down"
        print("  success")

        capabilities = engine.get_capabilities()
        assert capabilities["backend"] == "memory"
        assert capabilities["max_attempts"] == 2
        assert "fill" in capabilities["supported_commands"]
        assert engine.parse("close tab").command is CommandType.CLOSE_TAB
        print("  capabilities")

    asyncio.run(run())


def test_playwright_open_tab_failure():
    """Test that a tab whose navigation fails is closed before the error propagates."""
    print("\n" + "=" * 60)
    print("TESTING PLAYWRIGHT OPEN TAB FAILURE")
    print("=" * 60)

    from playwright.async_api import Error as PlaywrightError
    from voxbrowse.browser.playwright_backend import PlaywrightBrowser

    class UnreachablePage:
        def __init__(self, context):
            self.context = context
            self.url = "about:blank"

        async def goto(self, url, **kwargs):
            raise PlaywrightError("net::ERR_NAME_NOT_RESOLVED at " + url)

        async def close(self):
            self.context.pages.remove(self)

        def is_closed(self):
            return self not in self.context.pages

    class FakeContext:
        def __init__(self):
            self.pages = []
            self.opened = 0

        async def new_page(self):
            page = UnreachablePage(self)
            self.pages.append(page)
            self.opened += 1
            return page

    async def run():
        browser = PlaywrightBrowser(headless=True)
        context = FakeContext()
        browser._context = context

        executor = CommandExecutor(browser)
        try:
            await executor.execute_with_retry(parse("open nowhere.invalid"), max_attempts=2, delay=0)
            raise AssertionError("expected ExecutionFailure")
        except ExecutionFailure as e:
            assert "ERR_NAME_NOT_RESOLVED" in str(e)

        assert context.opened == 2
        assert context.pages == []
        print("  failed tabs are closed, no tab left behind")

    asyncio.run(run())


def test_create_backend():
    """Test backend selection by name."""
    print("\n" + "=" * 60)
    print("TESTING BACKEND FACTORY")
    print("=" * 60)

    assert isinstance(create_backend("memory"), MemoryBrowser)
    assert isinstance(create_backend(" Memory "), MemoryBrowser)
    try:
        create_backend("netscape")
        raise AssertionError("expected ValueError")
    except ValueError:
        pass
    print("  memory backend and unknown names")


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("VOXBROWSE EXECUTOR TESTS")
    print("=" * 60)

    tests = [
        ("Command Dispatch", test_memory_dispatch),
        ("Execution Failures", test_execution_failures),
        ("Retry", test_retry),
        ("Retry Cancellation", test_retry_cancellation),
        ("Engine Results", test_engine_results),
        ("Playwright Open Tab Failure", test_playwright_open_tab_failure),
        ("Backend Factory", test_create_backend),
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
