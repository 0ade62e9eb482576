"""
Pass the Pigs - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses); the engine
builds new instances instead of mutating old ones.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from pass_the_pigs.engine.validators import (
    validate_player_count,
    validate_player_name,
    validate_target_score,
)


class Pose(Enum):
    """Resting orientation of a single pig.

    Declaration order is the fixed order walked by the outcome sampler.
    """
    SIDER_LEFT = "Sider-Left"
    SIDER_RIGHT = "Sider-Right"
    RAZORBACK = "Razorback"
    TROTTER = "Trotter"
    SNOUTER = "Snouter"
    LEANING_JOWLER = "Leaning Jowler"

    @property
    def is_sider(self) -> bool:
        """Returns True for either sider pose."""
        return self in (Pose.SIDER_LEFT, Pose.SIDER_RIGHT)

    @property
    def base_points(self) -> int:
        """Points this pose is worth on its own (siders are worth 0)."""
        return POSE_VALUES[self]

    @property
    def short_label(self) -> str:
        return POSE_SHORT_LABELS[self]


POSE_VALUES: dict[Pose, int] = {
    Pose.SIDER_LEFT: 0,  # only meaningful in sider/sider combinations
    Pose.SIDER_RIGHT: 0,
    Pose.RAZORBACK: 5,
    Pose.TROTTER: 5,
    Pose.SNOUTER: 10,
    Pose.LEANING_JOWLER: 15,
}

POSE_SHORT_LABELS: dict[Pose, str] = {
    Pose.SIDER_LEFT: "Sider L",
    Pose.SIDER_RIGHT: "Sider R",
    Pose.RAZORBACK: "Razorback",
    Pose.TROTTER: "Trotter",
    Pose.SNOUTER: "Snouter",
    Pose.LEANING_JOWLER: "Jowler",
}

# Rough real-world landing frequencies, in percent
DEFAULT_WEIGHTS: dict[Pose, float] = {
    Pose.SIDER_LEFT: 34.9,
    Pose.SIDER_RIGHT: 30.2,
    Pose.RAZORBACK: 22.4,
    Pose.TROTTER: 8.8,
    Pose.SNOUTER: 3.0,
    Pose.LEANING_JOWLER: 0.7,
}

DEFAULT_TARGET_SCORE = 100
MIN_TARGET_SCORE = 10
MIN_PLAYERS = 2


def read_only(mapping: Mapping[Any, Any]) -> Mapping[Any, Any]:
    """Read-only copy of a mapping, for fields of frozen dataclasses."""
    return MappingProxyType(dict(mapping))


class TurnAction(Enum):
    """How a turn ended."""
    HOLD = "hold"
    PASS_PIGS = "pass_pigs"  # forced end of turn after a Pig Out


class GamePhase(Enum):
    """Coarse state of a match, derived from a snapshot."""
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    BLOCKED_ON_PASS = "blocked_on_pass"
    FINAL_ROUND = "final_round"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ScoringResult:
    """
    Result of scoring a pair of poses.

    Attributes:
        points: Points awarded (0 on a Pig Out)
        label: Human-readable outcome
        is_pig_out: Whether the roll ends the turn
    """
    points: int
    label: str
    is_pig_out: bool = False

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Roll:
    """
    One throw of both pigs.

    Attributes:
        pigs: The two poses, in throw order
        points: Points awarded for the pair
        label: Human-readable outcome
        is_pig_out: Whether the throw was a Pig Out
    """
    pigs: tuple[Pose, Pose]
    points: int
    label: str
    is_pig_out: bool = False

    def __post_init__(self) -> None:
        if len(self.pigs) != 2:
            raise ValueError(f"A roll needs exactly 2 pigs, got {len(self.pigs)}.")
        if self.points < 0:
            raise ValueError(f"Roll points cannot be negative, got {self.points}.")

    @property
    def is_double(self) -> bool:
        """Both pigs landed in the same non-sider pose."""
        a, b = self.pigs
        return a == b and not a.is_sider

    @property
    def is_special(self) -> bool:
        """Rolls worth celebrating: more than 5 points, or any double."""
        return self.points > 5 or self.is_double

    @classmethod
    def from_result(cls, pigs: Sequence[Pose], result: ScoringResult) -> "Roll":
        return cls(
            pigs=(pigs[0], pigs[1]),
            points=result.points,
            label=result.label,
            is_pig_out=result.is_pig_out,
        )


@dataclass(frozen=True)
class Player:
    """
    A participant in the match.

    Attributes:
        id: Stable identifier (uuid4 hex)
        name: Display name
        score: Banked score, never negative
    """
    id: str
    name: str
    score: int = 0

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"Player score cannot be negative, got {self.score}.")

    @classmethod
    def create(cls, name: str) -> "Player":
        """Create a player with a fresh id and a zero score."""
        return cls(id=uuid.uuid4().hex, name=name)


@dataclass(frozen=True)
class FinalRoundState:
    """
    Bookkeeping for the Final Round.

    Attributes:
        leader_index: Index of the player whose hold triggered the final round
        leader_score: Score to beat; running max of all final-round holds
        turns: Player id -> whether that player has used their final turn
    """
    leader_index: int
    leader_score: int
    turns: Mapping[str, bool] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "turns", read_only(self.turns))

    @classmethod
    def trigger(
        cls,
        players: Sequence[Player],
        leader_index: int,
    ) -> "FinalRoundState":
        """Open the final round; the triggering hold uses the leader's own turn."""
        leader = players[leader_index]
        turns = {p.id: False for p in players}
        turns[leader.id] = True
        return cls(leader_index=leader_index, leader_score=leader.score, turns=turns)

    def mark_used(self, player_id: str) -> "FinalRoundState":
        turns = dict(self.turns)
        turns[player_id] = True
        return FinalRoundState(
            leader_index=self.leader_index,
            leader_score=self.leader_score,
            turns=turns,
        )

    def record_hold(self, player_id: str, new_score: int) -> "FinalRoundState":
        """Mark the player's turn used and raise the score to beat if needed."""
        used = self.mark_used(player_id)
        return FinalRoundState(
            leader_index=used.leader_index,
            leader_score=max(self.leader_score, new_score),
            turns=used.turns,
        )

    def has_used(self, player_id: str) -> bool:
        return self.turns.get(player_id, False)

    @property
    def is_done(self) -> bool:
        """Every player recorded when the final round opened has had their turn."""
        return all(self.turns.values())

    @property
    def remaining(self) -> tuple[str, ...]:
        """Ids of players still owed a final turn, in insertion order."""
        return tuple(pid for pid, used in self.turns.items() if not used)


@dataclass(frozen=True)
class ScoreHistoryEntry:
    """
    A single turn-ending event.

    Attributes:
        player_id: Id of the player whose turn ended
        player_name: Name of that player at the time
        turn_number: Round the turn belonged to (starts at 1)
        previous_score: Banked score before the turn ended
        new_score: Banked score after the turn ended
        points_earned: Points banked (0 for a forced pass)
        action: How the turn ended
        timestamp: When the turn ended (UTC)
    """
    player_id: str
    player_name: str
    turn_number: int
    previous_score: int
    new_score: int
    points_earned: int
    action: TurnAction
    timestamp: datetime


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a new match.

    Attributes:
        target_score: Score that triggers the final round
        player_names: Names of the starting players, in turn order
    """
    target_score: int = DEFAULT_TARGET_SCORE
    player_names: tuple[str, ...] = ("Player 1", "Player 2")

    def __post_init__(self) -> None:
        """Validate configuration."""
        validate_target_score(self.target_score, minimum=MIN_TARGET_SCORE)
        validate_player_count(len(self.player_names), minimum=MIN_PLAYERS)
        for name in self.player_names:
            validate_player_name(name)

    @classmethod
    def with_player_count(
        cls,
        num_players: int,
        target_score: int = DEFAULT_TARGET_SCORE,
    ) -> "GameConfig":
        """Config with default "Player N" names."""
        return cls(
            target_score=target_score,
            player_names=tuple(f"Player {i + 1}" for i in range(num_players)),
        )
