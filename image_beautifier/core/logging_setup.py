"""Logging configuration for adapter entrypoints.

Log lines go to stderr because stdout carries the stdio tool protocol. A
redaction filter replaces the configured credential in every record, so provider
URLs, exception texts or debug payloads can never leak it.
"""

import logging
import sys

REDACTED = "***"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def redact(text: str, secret: str | None) -> str:
    """Replace every occurrence of `secret` in `text`."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


class SecretRedactingFilter(logging.Filter):
    """Scrub a secret value from the fully formatted record message."""

    def __init__(self, secret: str | None) -> None:
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secret:
            return True
        message = record.getMessage()
        if self.secret in message:
            record.msg = redact(message, self.secret)
            record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact(record.exc_text, self.secret)
        return True


def resolve_level(name: str | None) -> int:
    """Map a level name to a `logging` level; unknown names fall back to INFO."""
    return _LEVELS.get((name or "").strip().lower(), logging.INFO)


def configure_logging(level: str | None = "info", secret: str | None = None) -> logging.Logger:
    """Configure the package logger with one stderr handler.

    Args:
        level: Level name (`debug`, `info`, `warn`, `error`).
        secret: Credential value to scrub from records.

    Returns:
        The configured `image_beautifier` logger.
    """
    logger = logging.getLogger("image_beautifier")
    logger.setLevel(resolve_level(level))

    # Repeated configuration replaces the previous handler.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SecretRedactingFilter(secret))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
