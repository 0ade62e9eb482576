"""
Pass the Pigs - Game Event Definitions

Event types and payloads describing what changed between two snapshots.
Presentation code uses these to trigger sounds, animations and the like
without inspecting snapshots itself.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from pass_the_pigs.engine.base import TurnAction
from pass_the_pigs.engine.state import GameSnapshot


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    PIGS_ROLLED = auto()
    PIG_OUT = auto()
    TURN_BANKED = auto()
    PIGS_PASSED = auto()
    TURN_ADVANCED = auto()
    FINAL_ROUND_STARTED = auto()
    GAME_WON = auto()
    PLAYER_JOINED = auto()
    PLAYER_LEFT = auto()
    GAME_RESET = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for event data."""

    event: GameEvent
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


_TURN_END_EVENTS: dict[TurnAction, GameEvent] = {
    TurnAction.HOLD: GameEvent.TURN_BANKED,
    TurnAction.PASS_PIGS: GameEvent.PIGS_PASSED,
}


def _is_reset(before: GameSnapshot, after: GameSnapshot) -> bool:
    return (before.started and not after.started) or (
        len(after.score_history) < len(before.score_history)
    )


def classify_roster_change(before: GameSnapshot, after: GameSnapshot) -> list[EventPayload]:
    """Players that joined or left between two snapshots."""
    before_ids = {p.id for p in before.players}
    after_ids = {p.id for p in after.players}

    events = [
        EventPayload(GameEvent.PLAYER_JOINED, p.id, {"name": p.name})
        for p in after.players if p.id not in before_ids
    ]
    events.extend(
        EventPayload(GameEvent.PLAYER_LEFT, p.id, {"name": p.name})
        for p in before.players if p.id not in after_ids
    )
    return events


def classify_roll(before: GameSnapshot, after: GameSnapshot) -> list[EventPayload]:
    """A new roll appended to the turn ledger, and a Pig Out if it was one."""
    if len(after.turn.ledger) <= len(before.turn.ledger):
        return []

    roll = after.turn.ledger.last_roll
    player_id = after.current_player.id
    data = {
        "pigs": [pose.value for pose in roll.pigs],
        "points": roll.points,
        "label": roll.label,
        "is_special": roll.is_special,
        "turn_points": after.turn_points,
    }
    events = [EventPayload(GameEvent.PIGS_ROLLED, player_id, data)]
    if roll.is_pig_out:
        events.append(EventPayload(GameEvent.PIG_OUT, player_id, data))
    return events


def classify_turn_end(before: GameSnapshot, after: GameSnapshot) -> list[EventPayload]:
    """Banking or passing, the resulting rotation, and final-round milestones."""
    if len(after.score_history) <= len(before.score_history):
        return []

    entry = after.score_history.latest
    events = [
        EventPayload(
            _TURN_END_EVENTS[entry.action],
            entry.player_id,
            {
                "points_earned": entry.points_earned,
                "new_score": entry.new_score,
                "turn_number": entry.turn_number,
            },
        )
    ]

    if before.final_round is None and after.final_round is not None:
        events.append(EventPayload(
            GameEvent.FINAL_ROUND_STARTED,
            entry.player_id,
            {"leader_score": after.final_round.leader_score},
        ))

    if after.is_complete and not before.is_complete:
        winner = after.winner
        events.append(EventPayload(
            GameEvent.GAME_WON,
            winner.id,
            {"name": winner.name, "score": winner.score},
        ))
    else:
        events.append(EventPayload(
            GameEvent.TURN_ADVANCED,
            after.current_player.id,
            {"current_index": after.current_index, "turn_number": after.current_turn_number},
        ))
    return events


def classify_transition(before: GameSnapshot, after: GameSnapshot) -> list[EventPayload]:
    """Determine the game events produced by moving from one snapshot to another."""
    if before is after:
        return []

    if _is_reset(before, after):
        return [EventPayload(GameEvent.GAME_RESET)]

    events = classify_roster_change(before, after)
    if after.started and not before.started:
        events.append(EventPayload(GameEvent.GAME_STARTED))
    events.extend(classify_roll(before, after))
    events.extend(classify_turn_end(before, after))

    if not events and before != after:
        events.append(EventPayload(GameEvent.STATE_UPDATED))
    return events
