#!/usr/bin/env python3
"""
voxbrowse console - Interactive Text Mode

Type what you would say; each line is handled as one voice transcript.

Usage:
    python -m voxbrowse [--backend memory|playwright] [--parse-only] [--headless]

Commands:
    - Type any browser command
    - Type 'quit' or 'q' to exit
    - Type 'help' to see examples
"""

import argparse
import asyncio
import json
import logging
import sys

from .browser import create_backend
from .config import BROWSER_BACKEND, configure_logging, validate_config
from .core import VoxEngine, VoiceSession, SpeechOutput, parse

logger = logging.getLogger(__name__)


HELP_TEXT = """
╔══════════════════════════════════════════════════════════════╗
║                  VOXBROWSE - EXAMPLES                        ║
╠══════════════════════════════════════════════════════════════╣
║                                                              ║
║  TABS:                                                       ║
║    • open youtube          - Opens YouTube in a new tab      ║
║    • close this tab        - Closes the current tab          ║
║    • next tab / prev tab   - Switches tabs                   ║
║    • refresh the page      - Reloads the current tab         ║
║                                                              ║
║  NAVIGATION & SEARCH:                                        ║
║    • go to example.com     - Loads a URL in this tab         ║
║    • search for cats       - Google search                   ║
║    • search youtube for X  - YouTube search                  ║
║                                                              ║
║  PAGE:                                                       ║
║    • scroll down / up      - Scrolls by 500 pixels           ║
║    • click the login button                                  ║
║    • fill in the email field with me@example.com             ║
║                                                              ║
║  BOOKMARKS & WINDOW:                                         ║
║    • add bookmark / remove bookmark                          ║
║    • minimize window / maximize window                       ║
║                                                              ║
║  CONTROLS:                                                   ║
║    • help   - Show this help                                 ║
║    • quit   - Exit the program                               ║
║                                                              ║
╚══════════════════════════════════════════════════════════════╝
"""


class ConsoleSpeech(SpeechOutput):
    """Prints what would be spoken."""

    def speak(self, text: str) -> None:
        print(f"  🔊 {text}")


def _read_line(prompt: str) -> str:
    return input(prompt)


async def run_console(backend_name: str, parse_only: bool = False, headless: bool = False):
    backend_kwargs = {"headless": headless} if backend_name == "playwright" else {}
    backend = create_backend(backend_name, **backend_kwargs)
    session = VoiceSession(VoxEngine(backend), speech=ConsoleSpeech())

    print()
    print("╔══════════════════════════════════════════════════════════════╗")
    print("║                VOXBROWSE - Voice Browser Console             ║")
    print("║                                                              ║")
    print("║  Each line you type is handled like a spoken command.        ║")
    print("║  Type 'help' for examples, 'quit' to exit                    ║")
    print("╚══════════════════════════════════════════════════════════════╝")
    print()

    if not parse_only:
        await backend.start()
        await session.start()

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(_read_line, "You: ")).strip()

                if not user_input:
                    continue

                if user_input.lower() in ['quit', 'exit', 'q']:
                    print("\nGoodbye! 👋")
                    break

                if user_input.lower() == 'help':
                    print(HELP_TEXT)
                    continue

                if parse_only:
                    intent = parse(user_input)
                    print(json.dumps(intent.to_dict() if intent else None))
                    continue

                shown = session.line_count
                await session.submit(user_input)
                await session.drain()
                for line in session.lines_since(shown):
                    print(f"  {line.text}")

            except EOFError:
                print("\nGoodbye! 👋")
                break
            except KeyboardInterrupt:
                print("\n\nGoodbye! 👋")
                break
    finally:
        if not parse_only:
            await session.stop()
            await backend.stop()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Drive a browser with typed voice commands")
    parser.add_argument("--backend", default=BROWSER_BACKEND, choices=["memory", "playwright"])
    parser.add_argument("--parse-only", action="store_true", help="print intents without executing")
    parser.add_argument("--headless", action="store_true", help="run Playwright without a window")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")
    for problem in validate_config():
        logger.warning(problem)

    try:
        asyncio.run(run_console(args.backend, parse_only=args.parse_only, headless=args.headless))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
