"""
Pass the Pigs - Snapshot Migrations

Upgrades older stored snapshot shapes before validation.

Version history:
    1: players, scores, current-turn rolls and final-round state only
    2: adds ``scoreHistory``, ``currentTurnNumber`` and ``needsToPassPigs``
"""

from collections.abc import Mapping
from typing import Any, Callable

from pass_the_pigs.persistence.models import CURRENT_SCHEMA_VERSION


def _v1_to_v2(data: dict[str, Any]) -> dict[str, Any]:
    if not isinstance(data.get("scoreHistory"), list):
        data["scoreHistory"] = []
    if not isinstance(data.get("currentTurnNumber"), int):
        data["currentTurnNumber"] = 1
    if not isinstance(data.get("needsToPassPigs"), bool):
        data["needsToPassPigs"] = False
    return data


# from_version -> step producing from_version + 1
MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    1: _v1_to_v2,
}


def schema_version(raw: Mapping[str, Any]) -> int:
    """Stored schema version; snapshots without one are version 1."""
    version = raw.get("schemaVersion", 1)
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        return 1
    return version


def migrate(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring a stored snapshot up to the current schema.

    Args:
        raw: Decoded snapshot as stored

    Returns:
        A new dict stamped with the current schema version

    Raises:
        ValueError: If the payload is not a mapping
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"Snapshot must be a JSON object, got {type(raw).__name__}.")

    data = dict(raw)
    version = schema_version(data)
    while version < CURRENT_SCHEMA_VERSION:
        data = MIGRATIONS[version](data)
        version += 1

    data["schemaVersion"] = CURRENT_SCHEMA_VERSION
    return data
