"""Observability module for structured logging."""

from .logging import get_logger, redact_secrets, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "redact_secrets",
]
