"""Store type handlers.

A handler turns the free-form settings map of a store into a typed
connection config and back. Keys are checked in the handler's declared
order and the first missing or malformed key raises DecodeFailureError,
so the same settings always fail on the same key.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, ClassVar

from serving.errors import DecodeFailureError
from serving.models import ReadFrom, RedisClusterStoreConfig, RedisStoreConfig

# ISO-8601 duration restricted to the PnDTnHnMn.nS form
_ISO_DURATION = re.compile(
    r"P(?:(?P<days>[0-9]+)D)?"
    r"(?:T(?=[0-9])(?:(?P<hours>[0-9]+)H)?(?:(?P<minutes>[0-9]+)M)?"
    r"(?:(?P<seconds>[0-9]+)(?:[.,](?P<fraction>[0-9]{1,9}))?S)?)?",
    re.IGNORECASE,
)

_INTEGER = re.compile(r"[+-]?[0-9]+")

_TRUE_TOKENS = frozenset({"true"})
_FALSE_TOKENS = frozenset({"false"})


# =============================================================================
# Key parsers
# =============================================================================


def require(settings: Mapping[str, str], key: str) -> str:
    """Return a required, non-blank setting."""
    value = settings.get(key)
    if value is None:
        raise DecodeFailureError(key, "required setting is missing")
    if not value.strip():
        raise DecodeFailureError(key, "must not be blank")
    return value


def parse_positive_int(key: str, value: str) -> int:
    """Parse a strictly positive base-10 integer."""
    if not _INTEGER.fullmatch(value.strip()):
        raise DecodeFailureError(key, f"expected an integer, got {value!r}")
    number = int(value)
    if number <= 0:
        raise DecodeFailureError(key, f"must be a positive integer, got {number}")
    return number


def parse_bool(key: str, value: str) -> bool:
    """Parse 'true' or 'false', case-insensitively."""
    token = value.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise DecodeFailureError(key, f"expected 'true' or 'false', got {value!r}")


def parse_iso_duration(key: str, value: str) -> timedelta:
    """Parse a non-negative ISO-8601 duration such as 'PT5S' or 'P1DT2H'."""
    match = _ISO_DURATION.fullmatch(value.strip())
    if match is None or not any(
        match.group(part) for part in ("days", "hours", "minutes", "seconds")
    ):
        raise DecodeFailureError(key, f"expected an ISO-8601 duration, got {value!r}")

    fraction = match.group("fraction") or ""
    microseconds = int(fraction[:6].ljust(6, "0")) if fraction else 0
    try:
        return timedelta(
            days=int(match.group("days") or 0),
            hours=int(match.group("hours") or 0),
            minutes=int(match.group("minutes") or 0),
            seconds=int(match.group("seconds") or 0),
            microseconds=microseconds,
        )
    except OverflowError:
        raise DecodeFailureError(key, f"duration out of range: {value!r}") from None


def format_iso_duration(duration: timedelta) -> str:
    """Render a timedelta as an ISO-8601 duration ('PT0S' for zero)."""
    total_us = (duration.days * 86_400 + duration.seconds) * 1_000_000 + duration.microseconds
    if total_us < 0:
        raise ValueError("Negative durations are not supported")

    hours, rest = divmod(total_us, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds, micros = divmod(rest, 1_000_000)

    parts = ["PT"]
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if seconds or micros or total_us == 0:
        if micros:
            parts.append(f"{seconds}.{micros:06d}".rstrip("0") + "S")
        else:
            parts.append(f"{seconds}S")
    return "".join(parts)


# =============================================================================
# Handlers
# =============================================================================


class StoreTypeHandler(ABC):
    """Decodes and encodes the settings of one store type."""

    config_type: ClassVar[type]
    required_keys: ClassVar[tuple[str, ...]] = ()
    optional_keys: ClassVar[tuple[str, ...]] = ()

    def missing_keys(self, settings: Mapping[str, str]) -> list[str]:
        """List required keys absent from the settings, in key order."""
        return [key for key in self.required_keys if key not in settings]

    def check_config(self, config: Any) -> None:
        """Reject a typed config that belongs to another store type."""
        if not isinstance(config, self.config_type):
            raise TypeError(
                f"{type(self).__name__} encodes {self.config_type.__name__}, "
                f"got {type(config).__name__}"
            )

    @abstractmethod
    def decode(self, settings: Mapping[str, str]) -> Any:
        """Build the typed config, failing on the first bad key."""

    @abstractmethod
    def encode(self, config: Any) -> dict[str, str]:
        """Render a typed config back into a settings map."""


class RedisHandler(StoreTypeHandler):
    """Single-node Redis."""

    config_type = RedisStoreConfig
    required_keys = ("host", "port")
    optional_keys = ("ssl", "password")

    def decode(self, settings: Mapping[str, str]) -> RedisStoreConfig:
        host = require(settings, "host")
        port = parse_positive_int("port", require(settings, "port"))

        ssl = False
        if "ssl" in settings:
            ssl = parse_bool("ssl", settings["ssl"])

        return RedisStoreConfig(
            host=host,
            port=port,
            ssl=ssl,
            password=settings.get("password", ""),
        )

    def encode(self, config: RedisStoreConfig) -> dict[str, str]:
        self.check_config(config)
        return {
            "host": config.host,
            "port": str(config.port),
            "ssl": "true" if config.ssl else "false",
            "password": config.password,
        }


class RedisClusterHandler(StoreTypeHandler):
    """Redis cluster."""

    config_type = RedisClusterStoreConfig
    required_keys = ("connection_string", "read_from", "timeout")

    def decode(self, settings: Mapping[str, str]) -> RedisClusterStoreConfig:
        connection_string = require(settings, "connection_string")

        read_from_token = require(settings, "read_from")
        try:
            read_from = ReadFrom.from_token(read_from_token)
        except ValueError as e:
            raise DecodeFailureError("read_from", str(e)) from None

        timeout = parse_iso_duration("timeout", require(settings, "timeout"))

        return RedisClusterStoreConfig(
            connection_string=connection_string,
            read_from=read_from,
            timeout=timeout,
        )

    def encode(self, config: RedisClusterStoreConfig) -> dict[str, str]:
        self.check_config(config)
        return {
            "connection_string": config.connection_string,
            "read_from": config.read_from.value,
            "timeout": format_iso_duration(config.timeout),
        }
