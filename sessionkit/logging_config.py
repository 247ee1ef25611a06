"""
Logging configuration with session id redaction
"""

import logging
import re
from typing import Any, Dict

# URL-safe base64 of 32 bytes, as produced by new_session_id()
SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{43}=")


class SessionIdRedactionFilter(logging.Filter):
    """Filter that masks session identifiers in log messages."""

    def __init__(self, keep: int = 6):
        super().__init__()
        self.keep = keep

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with session ids shortened."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed call; the handler reports it when formatting
            return True
        redacted = SESSION_ID_PATTERN.sub(lambda m: m.group(0)[: self.keep] + "...", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True  # Never drop records


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration for the sessionkit logger tree."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "session_id_redaction": {
                "()": SessionIdRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["session_id_redaction"]
            }
        },
        "loggers": {
            "sessionkit": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "INFO",
            "handlers": ["default"]
        }
    }
