import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

REDACTED = "***"


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that gracefully handles closed streams during shutdown.
    """

    def emit(self, record):
        try:
            super().emit(record)
        except (ValueError, OSError) as e:
            # stdio is torn down by the host before we get a chance to flush
            if "closed file" in str(e).lower() or "bad file descriptor" in str(e).lower():
                pass
            else:
                raise


class SecretRedactingFilter(logging.Filter):
    """
    Replaces every occurrence of the configured secrets in a record with ``***``.

    The message is rendered once here so that secrets passed as ``%s`` arguments
    are caught as well as ones baked into the format string.
    """

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = redact(message, self.secrets)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in ("request_id", "tool", "duration_ms"):
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def redact(text: str, secrets: Iterable[str]) -> str:
    """Return ``text`` with each non-empty secret replaced by ``***``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


def configure_logging(
    log_level: str = "INFO",
    secrets: Iterable[str] = (),
    structured: bool = True,
    log_file: Optional[Path] = None,
) -> None:
    """
    Centralized logging configuration for the GitHub MCP server.

    Everything goes to stderr (stdout carries the MCP protocol) and, when
    ``log_file`` is given, to that file at DEBUG level. Records are passed
    through a :class:`SecretRedactingFilter` before any handler formats them.
    """
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        existing.close()
    root_logger.handlers.clear()

    if structured:
        formatter = StructuredLogFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    redacting_filter = SecretRedactingFilter(secrets)

    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.addFilter(redacting_filter)
    root_logger.addHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(redacting_filter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level.upper())
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("aiohttp").setLevel("WARNING")
    logging.getLogger("git").setLevel("WARNING")
    logging.getLogger("mcp").setLevel("WARNING")
