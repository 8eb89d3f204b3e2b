"""Configuration error taxonomy.

Structural problems are raised at load time with every violation attached.
Store lookup and settings decoding problems are raised lazily, on access.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from serving.properties.validation import Violation


class ErrorKind(str, Enum):
    """Category of a configuration failure."""

    STRUCTURAL_VIOLATION = "STRUCTURAL_VIOLATION"
    ACTIVE_STORE_NOT_FOUND = "ACTIVE_STORE_NOT_FOUND"
    UNKNOWN_STORE_TYPE = "UNKNOWN_STORE_TYPE"
    DECODE_FAILURE = "DECODE_FAILURE"


class ConfigurationError(Exception):
    """Base class for all serving configuration errors."""

    kind: ErrorKind


class StructuralViolationError(ConfigurationError):
    """Raised when the configuration fails structural validation."""

    kind = ErrorKind.STRUCTURAL_VIOLATION

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(
            f"Serving configuration is invalid ({len(self.violations)} violations): {details}"
        )


class ActiveStoreNotFoundError(ConfigurationError):
    """Raised when the active store name matches no configured store."""

    kind = ErrorKind.ACTIVE_STORE_NOT_FOUND

    def __init__(self, store_name: str | None):
        self.store_name = store_name
        super().__init__(
            f"Active store is misconfigured. Could not find store: {store_name}."
        )


class UnknownStoreTypeError(ConfigurationError):
    """Raised when a store type tag has no registered handler."""

    kind = ErrorKind.UNKNOWN_STORE_TYPE

    def __init__(self, store_type: str, store_name: str | None = None):
        self.store_type = store_type
        self.store_name = store_name
        where = f" for store '{store_name}'" if store_name else ""
        super().__init__(f"Unknown store type '{store_type}'{where}")


class DecodeFailureError(ConfigurationError):
    """Raised when a store settings key is missing or malformed."""

    kind = ErrorKind.DECODE_FAILURE

    def __init__(self, key: str, reason: str, store_name: str | None = None):
        self.key = key
        self.reason = reason
        self.store_name = store_name
        where = f" of store '{store_name}'" if store_name else ""
        super().__init__(f"Invalid setting '{key}'{where}: {reason}")

    def for_store(self, store_name: str) -> DecodeFailureError:
        """Return a copy of this error bound to a store name."""
        return DecodeFailureError(self.key, self.reason, store_name=store_name)
