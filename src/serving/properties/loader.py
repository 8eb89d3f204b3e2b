"""Serving configuration loading.

Turns an already-parsed configuration tree into a validated, immutable
``ServingConfig``. Either every check passes or StructuralViolationError
is raised carrying all violations; nothing partially valid is returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn

from pydantic import ValidationError

from serving.config import get_settings
from serving.errors import StructuralViolationError
from serving.observability import get_logger

from .serving_config import ServingConfig
from .validation import Violation, validate, validate_raw

logger = get_logger(__name__)


def load_serving_config(
    raw: Mapping[str, Any],
    *,
    build_version: str | None = None,
) -> ServingConfig:
    """Build and validate the serving configuration.

    Args:
        raw: Configuration tree (keys as in the configuration file)
        build_version: Version injected by the build, used when the tree
            does not set ``version`` itself (defaults to settings.build_version)

    Returns:
        Validated serving configuration

    Raises:
        StructuralViolationError: If any structural check fails
    """
    data = dict(raw)
    if "version" not in data:
        data["version"] = build_version or get_settings().build_version

    try:
        config = ServingConfig.model_validate(data)
    except ValidationError as e:
        violations = _merge(
            [_violation_from_error(error) for error in e.errors()],
            validate_raw(data),
        )
        _reject(violations)

    violations = validate(config)
    if violations:
        _reject(violations)

    for store in config.stores:
        logger.debug(
            "Store configured",
            store_name=store.name,
            store_type=store.type,
            keys=sorted(store.config),
        )
    logger.info(
        "Serving configuration loaded",
        version=config.version,
        active_store=config.active_store_name,
        store_count=len(config.stores),
        registry=config.registry,
    )
    return config


def _violation_from_error(error: Any) -> Violation:
    """Convert a pydantic error into a violation with a key path."""
    path = ""
    for part in error["loc"]:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return Violation(field=path or "<root>", message=error["msg"])


def _merge(first: list[Violation], second: list[Violation]) -> list[Violation]:
    """Concatenate violations, dropping exact repeats."""
    merged: list[Violation] = []
    for violation in first + second:
        if violation not in merged:
            merged.append(violation)
    return merged


def _reject(violations: list[Violation]) -> NoReturn:
    logger.error(
        "Serving configuration is invalid",
        violation_count=len(violations),
        violations=[str(v) for v in violations],
    )
    raise StructuralViolationError(violations)
