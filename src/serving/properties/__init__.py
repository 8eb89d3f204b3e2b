"""Serving configuration aggregate, validation and loading."""

from .loader import load_serving_config
from .serving_config import ServingConfig
from .validation import Violation, is_blank, validate, validate_raw

__all__ = [
    "ServingConfig",
    "load_serving_config",
    # Validation
    "Violation",
    "validate",
    "validate_raw",
    "is_blank",
]
