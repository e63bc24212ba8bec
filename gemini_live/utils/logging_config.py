"""
Logging setup for applications using the Gemini Live client.

Session lifecycle is logged at INFO by ``gemini_live`` loggers and frame
traffic at DEBUG. The ``websocket`` transport logger is held at WARNING or
above so that DEBUG output shows client frames without raw socket chatter.
"""

import logging
import sys
from typing import List, Optional

from gemini_live.utils.settings import get_log_level

LIBRARY_LOGGER = "gemini_live"
TRANSPORT_LOGGER = "websocket"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    format_str: str = DEFAULT_FORMAT,
) -> None:
    """
    Route client logs to stdout and, optionally, a file.

    Any handlers already attached to the root logger are replaced.

    Args:
        level: Level for the root and client loggers. Defaults to
            GEMINI_LIVE_LOG_LEVEL from the environment or .env, else INFO.
        log_file: Path of an extra log file (appended to).
        format_str: Format shared by every installed handler.
    """
    if level is None:
        level = get_log_level()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(format_str)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger(TRANSPORT_LOGGER).setLevel(max(level, logging.WARNING))
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
