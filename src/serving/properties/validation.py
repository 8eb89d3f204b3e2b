"""Structural validation of the serving configuration.

Every check runs and every violation is collected, so operators see all
problems in one pass. Store settings maps are not inspected here; they are
checked when a store's typed config is decoded.

Field paths use the configuration key names (e.g. ``activeStore``,
``stores[1].name``, ``tracing.tracerName``).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import Field

from serving.models import ServingBaseModel, TracerName, TracingConfig

if TYPE_CHECKING:
    from .serving_config import ServingConfig

# (attribute, configuration key) of fields that must not be blank
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("version", "version"),
    ("registry", "registry"),
    ("active_store_name", "activeStore"),
)


class Violation(ServingBaseModel):
    """A single structural problem in the configuration."""

    field: str = Field(description="Configuration key path")
    message: str = Field(description="What is wrong with the field")

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty or whitespace."""
    return value is None or (isinstance(value, str) and not value.strip())


def validate(config: ServingConfig) -> list[Violation]:
    """Run all structural checks over a parsed configuration.

    Args:
        config: Parsed serving configuration

    Returns:
        Violations found, empty when the configuration is valid
    """
    violations: list[Violation] = []

    for attr, key in REQUIRED_FIELDS:
        if is_blank(getattr(config, attr)):
            violations.append(Violation(field=key, message="must not be blank"))

    if config.logging is None:
        violations.append(Violation(field="logging", message="must not be null"))

    for index, store in enumerate(config.stores):
        violations.extend(_store_violations(index, store.name, store.type))
    violations.extend(_duplicate_name_violations(store.name for store in config.stores))

    if config.tracing is not None:
        violations.extend(_tracing_violations(config.tracing))

    return violations


def validate_raw(raw: Mapping[str, Any]) -> list[Violation]:
    """Best-effort structural checks over an unparsed configuration tree.

    Used when the tree cannot be parsed at all, so that blank required
    fields and duplicate store names are still reported next to the parse
    errors. Entries of the wrong shape are skipped.
    """
    violations: list[Violation] = []

    for attr, key in REQUIRED_FIELDS:
        if is_blank(raw.get(key, raw.get(attr))):
            violations.append(Violation(field=key, message="must not be blank"))

    if raw.get("logging") is None:
        violations.append(Violation(field="logging", message="must not be null"))

    stores = raw.get("stores")
    if isinstance(stores, (list, tuple)):
        entries = [entry for entry in stores if isinstance(entry, Mapping)]
        for index, entry in enumerate(stores):
            if isinstance(entry, Mapping):
                violations.extend(_store_violations(index, entry.get("name"), entry.get("type")))
        violations.extend(_duplicate_name_violations(entry.get("name") for entry in entries))

    return violations


def _store_violations(index: int, name: Any, store_type: Any) -> list[Violation]:
    violations = []
    if is_blank(name):
        violations.append(Violation(field=f"stores[{index}].name", message="must not be blank"))
    if is_blank(store_type):
        violations.append(Violation(field=f"stores[{index}].type", message="must not be blank"))
    return violations


def _duplicate_name_violations(names: Iterable[Any]) -> list[Violation]:
    counts = Counter(name for name in names if not is_blank(name))
    return [
        Violation(
            field="stores",
            message=f"duplicate store name '{name}' ({count} stores)",
        )
        for name, count in counts.items()
        if count > 1
    ]


def _tracing_violations(tracing: TracingConfig) -> list[Violation]:
    if not tracing.enabled:
        return []

    violations = []
    if is_blank(tracing.tracer_name):
        violations.append(
            Violation(
                field="tracing.tracerName",
                message="must not be blank when tracing is enabled",
            )
        )
    elif tracing.tracer_name != TracerName.JAEGER.value:
        violations.append(
            Violation(
                field="tracing.tracerName",
                message=(
                    f"unsupported tracer '{tracing.tracer_name}' "
                    f"(expected '{TracerName.JAEGER.value}')"
                ),
            )
        )
    if is_blank(tracing.service_name):
        violations.append(
            Violation(
                field="tracing.serviceName",
                message="must not be blank when tracing is enabled",
            )
        )
    return violations
