"""
Pass the Pigs - Snapshot Models

Pydantic models describing the stored shape of a game snapshot. Keys are
camelCase, matching the snapshots written by the browser edition of the
game, so those load without conversion.

Every field has a default and malformed list items are dropped, so a
partially corrupted payload still validates into something usable.
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from pass_the_pigs.engine.base import (
    DEFAULT_TARGET_SCORE,
    DEFAULT_WEIGHTS,
    MIN_TARGET_SCORE,
    Pose,
    TurnAction,
)

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 2


def _keep_valid(model: type[BaseModel], items: Any, field_name: str) -> list[Any]:
    """Drop list items that do not validate as ``model``."""
    if not isinstance(items, list):
        return []
    kept = []
    for item in items:
        try:
            kept.append(model.model_validate(item))
        except ValidationError:
            logger.warning("Dropping malformed %s entry: %r", field_name, item)
    return kept


class _StoredModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PlayerModel(_StoredModel):
    """Mirrors one entry of ``players``."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = "Player"
    score: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        if value is None or value == "":
            return uuid4().hex
        return str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value
        return "Player"

    @field_validator("score", mode="before")
    @classmethod
    def _non_negative(cls, value: Any) -> int:
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            return 0


class RollModel(_StoredModel):
    """Mirrors one entry of ``history`` (the rolls of the current turn)."""

    pigs: list[Pose] = Field(min_length=2, max_length=2)
    points: int = 0
    event: str = ""

    @field_validator("pigs", mode="before")
    @classmethod
    def _unwrap_poses(cls, value: Any) -> Any:
        # Stored as [{"pose": "Trotter"}, ...]; bare pose strings are accepted too
        if isinstance(value, list):
            return [item.get("pose") if isinstance(item, dict) else item for item in value]
        return value

    @field_serializer("pigs")
    def _wrap_poses(self, pigs: list[Pose]) -> list[dict[str, str]]:
        return [{"pose": pose.value} for pose in pigs]


class ScoreEntryModel(_StoredModel):
    """Mirrors one entry of ``scoreHistory``."""

    player_id: str
    player_name: str = ""
    turn_number: int = 1
    previous_score: int = 0
    new_score: int = 0
    points_earned: int = 0
    action: TurnAction = TurnAction.HOLD
    # Integer timestamps in milliseconds (as written by the browser) are accepted
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class SettingsModel(_StoredModel):
    """Mirrors ``settings``.

    Presentation keys (sounds, confetti and so on) are kept as extra fields
    so they survive a load and save.
    """

    model_config = ConfigDict(extra="allow")

    weights: dict[Pose, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    @field_validator("weights", mode="before")
    @classmethod
    def _coerce_weights(cls, value: Any) -> dict[Pose, float]:
        weights = dict(DEFAULT_WEIGHTS)
        if not isinstance(value, dict):
            return weights
        for key, raw in value.items():
            try:
                pose = Pose(key)
            except ValueError:
                continue
            if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                weights[pose] = float(raw)
        return weights

    @field_serializer("weights")
    def _weights_by_name(self, weights: dict[Pose, float]) -> dict[str, float]:
        return {pose.value: weight for pose, weight in weights.items()}


class SnapshotModel(_StoredModel):
    """Mirrors a whole stored snapshot."""

    schema_version: int = CURRENT_SCHEMA_VERSION
    started: bool = False
    target: int = DEFAULT_TARGET_SCORE
    players: list[PlayerModel] = Field(default_factory=list)
    current_index: int = 0
    turn_points: int = 0
    history: list[RollModel] = Field(default_factory=list)
    score_history: list[ScoreEntryModel] = Field(default_factory=list)
    current_turn_number: int = 1
    settings: SettingsModel = Field(default_factory=SettingsModel)
    final_round: bool = False
    final_leader_index: int | None = None
    final_leader_score: int = 0
    final_turns: dict[str, bool] | None = None
    needs_to_pass_pigs: bool = False

    @field_validator("players", mode="before")
    @classmethod
    def _valid_players(cls, value: Any) -> list[Any]:
        return _keep_valid(PlayerModel, value, "player")

    @field_validator("history", mode="before")
    @classmethod
    def _valid_rolls(cls, value: Any) -> list[Any]:
        return _keep_valid(RollModel, value, "roll")

    @field_validator("score_history", mode="before")
    @classmethod
    def _valid_entries(cls, value: Any) -> list[Any]:
        return _keep_valid(ScoreEntryModel, value, "score history")

    @field_validator("target", mode="before")
    @classmethod
    def _sane_target(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            return DEFAULT_TARGET_SCORE
        return max(MIN_TARGET_SCORE, value)

    @field_validator("current_turn_number", mode="before")
    @classmethod
    def _sane_turn_number(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            return 1
        return value

    @field_validator("current_index", "final_leader_score", "turn_points", mode="before")
    @classmethod
    def _non_negative_int(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return 0
        return value

    @field_validator("settings", mode="before")
    @classmethod
    def _settings_object(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, SettingsModel)) else {}

    @field_validator("final_turns", mode="before")
    @classmethod
    def _flags_only(cls, value: Any) -> dict[str, bool] | None:
        if not isinstance(value, dict):
            return None
        return {str(k): bool(v) for k, v in value.items()}

    @field_validator("final_leader_index", mode="before")
    @classmethod
    def _optional_index(cls, value: Any) -> int | None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    @field_validator("started", "final_round", "needs_to_pass_pigs", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        if isinstance(value, (bool, int)):
            return bool(value)
        return False
