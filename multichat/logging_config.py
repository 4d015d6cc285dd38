"""Logging configuration for the Multi-AI Chat server."""

import logging
import sys
from typing import Iterable, List

# Configure root logger
logger = logging.getLogger("multichat")

REDACTED = "***"


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every secret value found in text."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


class SecretRedactingFilter(logging.Filter):
    """Masks credential values in formatted log messages."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        self.secrets: List[str] = [secret for secret in secrets if secret]

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secrets:
            message = record.getMessage()
            cleaned = redact(message, self.secrets)
            if cleaned != message:
                record.msg = cleaned
                record.args = ()
        return True


def configure_logging(secrets: Iterable[str] = ()) -> None:
    """Set up logging configuration."""

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Clear all existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('[%(asctime)s][%(levelname)s] %(message)s'))
    console_handler.addFilter(SecretRedactingFilter(secrets))

    root_logger.addHandler(console_handler)

    # Configure our specific logger
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


def get_logger(name: str = "multichat") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
