"""Logging configuration for execution-gemini hosts.

Provides a unified log format with emoji prefixes for module identification.
Call once at application startup, next to ``init_redaction()``.

Example:
    >>> from execution_gemini.logging_config import setup_logging
    >>> import logging
    >>> setup_logging(level=logging.DEBUG)
    >>> logger = logging.getLogger("execution_gemini.provider")
    >>> logger.info("Executing request")
    2025.06.05 14:32:07 | INFO    | 🤖 provider: Executing request
"""

import logging
import sys
from datetime import datetime

# Module emoji mapping
EMOJI_MAP: dict[str, str] = {
    "config": "⚙️",
    "provider": "🤖",
    "messages": "💬",
    "schema": "📐",
    "redaction": "🔒",
}

DEFAULT_EMOJI = "📋"


class EmojiFormatter(logging.Formatter):
    """Formatter with emoji prefixes and unified timestamp format.

    Format: YYYY.MM.DD HH:MM:SS | LEVEL   | 🏷️ module: message
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with emoji prefix.

        Args:
            record: Log record to format.

        Returns:
            Formatted log string.
        """
        # "execution_gemini.provider" -> "provider"
        module = record.name.rsplit(".", 1)[-1]
        emoji = EMOJI_MAP.get(module, DEFAULT_EMOJI)

        timestamp = datetime.fromtimestamp(record.created).strftime("%Y.%m.%d %H:%M:%S")
        level = record.levelname.ljust(7)

        return f"{timestamp} | {level} | {emoji} {module}: {record.getMessage()}"


def setup_logging(level: int = logging.INFO, logger_name: str | None = None) -> None:
    """Configure a logger with the emoji formatter.

    Removes existing handlers from the target logger to avoid duplicate output.

    Args:
        level: Logging level (default: logging.INFO).
        logger_name: Logger to configure; root logger if None.
    """
    target = logging.getLogger(logger_name)

    for handler in target.handlers[:]:
        target.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(EmojiFormatter())

    target.addHandler(handler)
    target.setLevel(level)
