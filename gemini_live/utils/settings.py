"""
Environment settings for the Gemini Live client.
Values are read from the process environment, after loading a ``.env`` file if one exists.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

API_KEY_ENV_VAR = "GEMINI_API_KEY"
LOG_LEVEL_ENV_VAR = "GEMINI_LIVE_LOG_LEVEL"


def get_api_key(env_file: Optional[str] = None) -> Optional[str]:
    """Return the API key from ``GEMINI_API_KEY``, or None if it is not set."""
    load_dotenv(env_file)
    return os.environ.get(API_KEY_ENV_VAR)


def get_log_level(env_file: Optional[str] = None) -> int:
    """Return the log level named by ``GEMINI_LIVE_LOG_LEVEL`` (default INFO)."""
    load_dotenv(env_file)
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
