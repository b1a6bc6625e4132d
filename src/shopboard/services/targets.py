"""Persistence of the sales targets setting."""

from __future__ import annotations

import json
from typing import Any

from ..domain.repositories import SettingsRepository
from ..logging_config import get_logger
from .sales_calculator import SalesTargets

SALES_TARGETS_KEY = "salesTargets"
_DESCRIPTION = "Sales targets in yen per period"

logger = get_logger(__name__)


def load_targets(repository: SettingsRepository, *, defaults: SalesTargets) -> SalesTargets:
    """Return stored targets, saving ``defaults`` first when none exist yet."""

    setting = repository.get(SALES_TARGETS_KEY)
    if setting is None:
        repository.set(SALES_TARGETS_KEY, json.dumps(defaults.as_dict()), _DESCRIPTION)
        logger.info("Stored default sales targets", extra={"targets": defaults.as_dict()})
        return defaults

    try:
        data = json.loads(setting.value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Stored sales targets are not valid JSON: {setting.value!r}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Stored sales targets must be a JSON object: {setting.value!r}")
    # Keys missing from storage keep the configured defaults.
    known = defaults.as_dict().keys()
    return defaults.merged(**{key: value for key, value in data.items() if key in known})


def update_targets(
    repository: SettingsRepository, *, defaults: SalesTargets, **changes: Any
) -> SalesTargets:
    """Merge a partial update into the stored targets and persist the result."""

    current = load_targets(repository, defaults=defaults)
    updated = current.merged(**changes)
    repository.set(SALES_TARGETS_KEY, json.dumps(updated.as_dict()), _DESCRIPTION)
    logger.info("Sales targets updated", extra={"targets": updated.as_dict()})
    return updated
