"""
Configuration for voxbrowse
"""

import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Speech
LANGUAGE = os.getenv("VOXBROWSE_LANGUAGE", "en-US")

# Scroll distance in pixels for every "scroll up/down" command
SCROLL_AMOUNT = 500

# Dispatch retries
RETRY_MAX_ATTEMPTS = int(os.getenv("VOXBROWSE_RETRY_ATTEMPTS", "2"))
RETRY_DELAY_MS = int(os.getenv("VOXBROWSE_RETRY_DELAY_MS", "500"))

# Feedback lines kept for the transcript view
TRANSCRIPT_HISTORY = int(os.getenv("VOXBROWSE_TRANSCRIPT_HISTORY", "10"))

# Browser
BROWSER_BACKEND = os.getenv("VOXBROWSE_BACKEND", "memory").strip().lower()
BROWSER_HEADLESS = os.getenv("VOXBROWSE_HEADLESS", "0").strip() == "1"
NAVIGATION_TIMEOUT_MS = int(os.getenv("VOXBROWSE_NAVIGATION_TIMEOUT_MS", "30000"))

# REST API
API_HOST = os.getenv("VOXBROWSE_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("VOXBROWSE_API_PORT", "8765"))

# Logging
LOG_LEVEL = os.getenv("VOXBROWSE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

SUPPORTED_BACKENDS = ("memory", "playwright")


def configure_logging(level: str = LOG_LEVEL):
    """Set up root logging for the console and server entry points."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


# Validate settings
def validate_config():
    """Check that settings are usable."""
    problems = []
    if BROWSER_BACKEND not in SUPPORTED_BACKENDS:
        problems.append(f"VOXBROWSE_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)}")
    if RETRY_MAX_ATTEMPTS < 1:
        problems.append("VOXBROWSE_RETRY_ATTEMPTS must be at least 1")
    if RETRY_DELAY_MS < 0:
        problems.append("VOXBROWSE_RETRY_DELAY_MS must not be negative")
    if TRANSCRIPT_HISTORY < 1:
        problems.append("VOXBROWSE_TRANSCRIPT_HISTORY must be at least 1")
    return problems
