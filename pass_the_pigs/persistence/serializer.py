"""
Pass the Pigs - Snapshot Serializer

Converts between the engine's GameSnapshot and the stored SnapshotModel.
Loading repairs anything the models could not: an empty player list, an
out-of-range current index, or final-round flags without a flag map.
"""

import json
from collections.abc import Mapping
from typing import Any

from pass_the_pigs.engine.base import (
    MIN_PLAYERS,
    FinalRoundState,
    Player,
    Roll,
    ScoreHistoryEntry,
)
from pass_the_pigs.engine.ledger import ScoreHistory, TurnLedger
from pass_the_pigs.engine.scoring import score_pair
from pass_the_pigs.engine.state import GameSnapshot, TurnState
from pass_the_pigs.persistence.migrations import migrate
from pass_the_pigs.persistence.models import (
    PlayerModel,
    RollModel,
    ScoreEntryModel,
    SettingsModel,
    SnapshotModel,
)


def snapshot_to_model(snapshot: GameSnapshot) -> SnapshotModel:
    """Build the stored representation of a snapshot."""
    final_round = snapshot.final_round
    return SnapshotModel(
        started=snapshot.started,
        target=snapshot.target_score,
        players=[PlayerModel(id=p.id, name=p.name, score=p.score) for p in snapshot.players],
        current_index=snapshot.current_index,
        turn_points=snapshot.turn_points,
        history=[
            RollModel(pigs=list(r.pigs), points=r.points, event=r.label)
            for r in snapshot.turn.ledger
        ],
        score_history=[
            ScoreEntryModel(
                player_id=e.player_id,
                player_name=e.player_name,
                turn_number=e.turn_number,
                previous_score=e.previous_score,
                new_score=e.new_score,
                points_earned=e.points_earned,
                action=e.action,
                timestamp=e.timestamp,
            )
            for e in snapshot.score_history
        ],
        current_turn_number=snapshot.current_turn_number,
        settings=SettingsModel.model_validate(
            {**snapshot.preferences, "weights": dict(snapshot.weights)}
        ),
        final_round=final_round is not None,
        final_leader_index=final_round.leader_index if final_round else None,
        final_leader_score=final_round.leader_score if final_round else 0,
        final_turns=dict(final_round.turns) if final_round else None,
        needs_to_pass_pigs=snapshot.needs_to_pass,
    )


def model_to_snapshot(model: SnapshotModel) -> GameSnapshot:
    """Rebuild an engine snapshot from its stored representation.

    Roll points and labels are recomputed from the stored poses, and turn
    points are derived from those rolls; the stored ``turnPoints`` is not
    trusted.
    """
    players = tuple(Player(id=p.id, name=p.name, score=p.score) for p in model.players)
    if not players:
        players = tuple(Player.create(f"Player {i + 1}") for i in range(MIN_PLAYERS))

    index = model.current_index if model.current_index < len(players) else 0

    ledger = TurnLedger()
    for stored in model.history:
        pigs = (stored.pigs[0], stored.pigs[1])
        ledger = ledger.append(Roll.from_result(pigs, score_pair(*pigs)))

    last = ledger.last_roll
    needs_to_pass = model.needs_to_pass_pigs or (last is not None and last.is_pig_out)

    history = ScoreHistory(entries=tuple(
        ScoreHistoryEntry(
            player_id=e.player_id,
            player_name=e.player_name,
            turn_number=e.turn_number,
            previous_score=e.previous_score,
            new_score=e.new_score,
            points_earned=e.points_earned,
            action=e.action,
            timestamp=e.timestamp,
        )
        for e in model.score_history
    ))

    return GameSnapshot(
        players=players,
        target_score=model.target,
        started=model.started,
        turn=TurnState(current_index=index, ledger=ledger, needs_to_pass=needs_to_pass),
        score_history=history,
        current_turn_number=model.current_turn_number,
        weights=dict(model.settings.weights),
        final_round=_final_round(model, players),
        preferences=dict(model.settings.model_extra or {}),
    )


def _final_round(model: SnapshotModel, players: tuple[Player, ...]) -> FinalRoundState | None:
    if not model.final_round:
        return None

    leader_index = model.final_leader_index
    if leader_index is None or leader_index >= len(players):
        leader_index = 0

    turns = model.final_turns
    if turns is None:
        turns = {p.id: False for p in players}
        turns[players[leader_index].id] = True

    return FinalRoundState(
        leader_index=leader_index,
        leader_score=model.final_leader_score,
        turns=turns,
    )


def dump_snapshot(snapshot: GameSnapshot) -> dict[str, Any]:
    """Snapshot as a JSON-compatible dict with camelCase keys."""
    return snapshot_to_model(snapshot).model_dump(mode="json", by_alias=True)


def load_snapshot(data: Mapping[str, Any]) -> GameSnapshot:
    """
    Load a stored snapshot of any schema version.

    Args:
        data: Decoded snapshot dict

    Returns:
        A structurally valid GameSnapshot

    Raises:
        ValueError: If ``data`` is not a mapping at all
    """
    return model_to_snapshot(SnapshotModel.model_validate(migrate(data)))


def dumps(snapshot: GameSnapshot) -> str:
    return json.dumps(dump_snapshot(snapshot), indent=2)


def loads(text: str) -> GameSnapshot:
    return load_snapshot(json.loads(text))
