"""
Pass the Pigs - Game Engine

Turn rotation, Pig Out handling, banking and the Final Round.

All methods are class methods operating on immutable snapshots: state is
passed in and a new snapshot is returned, never stored. Calling an action
when it is not legal returns the very same snapshot, so callers may check
``result is state`` to detect an ignored action.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import ClassVar, Mapping, Sequence

from pass_the_pigs.engine.base import (
    DEFAULT_WEIGHTS,
    MIN_PLAYERS,
    MIN_TARGET_SCORE,
    FinalRoundState,
    GameConfig,
    Player,
    Pose,
    Roll,
    ScoreHistoryEntry,
    TurnAction,
)
from pass_the_pigs.engine.ledger import ScoreHistory
from pass_the_pigs.engine.sampler import RandomSource, sample_pair
from pass_the_pigs.engine.scoring import score_pair
from pass_the_pigs.engine.state import GameSnapshot, TurnState
from pass_the_pigs.engine.validators import (
    validate_player_name,
    validate_target_score,
    validate_weight,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameEngine:
    """
    Stateless engine for a Pass the Pigs match.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    MIN_PLAYERS: ClassVar[int] = MIN_PLAYERS
    MIN_TARGET_SCORE: ClassVar[int] = MIN_TARGET_SCORE

    # -- Setup -----------------------------------------------------------

    @classmethod
    def new_game(cls, config: GameConfig | None = None) -> GameSnapshot:
        """Create a match in the setup phase."""
        config = config or GameConfig()
        return GameSnapshot(
            players=tuple(Player.create(name) for name in config.player_names),
            target_score=config.target_score,
        )

    @classmethod
    def start(cls, state: GameSnapshot) -> GameSnapshot:
        """Leave setup. No-op if the match has already started."""
        if state.started:
            return state
        logger.debug("Match started with %d players", len(state.players))
        return replace(state, started=True)

    # -- Guards ----------------------------------------------------------

    @classmethod
    def can_roll(cls, state: GameSnapshot) -> bool:
        return (
            state.started
            and bool(state.players)
            and not state.turn.needs_to_pass
            and not state.is_complete
        )

    @classmethod
    def can_hold(cls, state: GameSnapshot) -> bool:
        """Holding zero points is legal; it banks nothing and ends the turn."""
        return cls.can_roll(state)

    @classmethod
    def can_pass(cls, state: GameSnapshot) -> bool:
        return state.started and state.turn.needs_to_pass and not state.is_complete

    # -- Actions ---------------------------------------------------------

    @classmethod
    def roll(
        cls,
        state: GameSnapshot,
        rng: RandomSource | None = None,
        pigs: tuple[Pose, Pose] | None = None,
    ) -> GameSnapshot:
        """Throw both pigs and record the result in the turn ledger.

        A Pig Out blocks the turn until ``pass_pigs`` is called; the turn's
        earlier rolls stay in the ledger until then.

        Args:
            state: Current snapshot
            rng: Uniform source for the sampler
            pigs: Optional pre-determined poses (for testing and replays)

        Returns:
            New snapshot, or ``state`` itself if rolling is not allowed
        """
        if not cls.can_roll(state):
            logger.debug("Ignoring roll in phase %s", state.phase.name)
            return state

        if pigs is None:
            pigs = sample_pair(state.weights, rng)

        roll = Roll.from_result(pigs, score_pair(*pigs))
        turn = replace(
            state.turn,
            ledger=state.turn.ledger.append(roll),
            needs_to_pass=roll.is_pig_out,
        )
        if roll.is_pig_out:
            logger.debug("%s pigged out", state.current_player.name)
        return replace(state, turn=turn)

    @classmethod
    def pass_pigs(cls, state: GameSnapshot, now: datetime | None = None) -> GameSnapshot:
        """Acknowledge a Pig Out: end the turn with nothing banked."""
        if not cls.can_pass(state):
            logger.debug("Ignoring pass in phase %s", state.phase.name)
            return state

        player = state.current_player
        entry = ScoreHistoryEntry(
            player_id=player.id,
            player_name=player.name,
            turn_number=state.current_turn_number,
            previous_score=player.score,
            new_score=player.score,
            points_earned=0,
            action=TurnAction.PASS_PIGS,
            timestamp=now or _utcnow(),
        )

        final_round = state.final_round
        if final_round is not None:
            final_round = final_round.mark_used(player.id)

        return cls._end_turn(state, state.players, entry, final_round)

    @classmethod
    def hold(cls, state: GameSnapshot, now: datetime | None = None) -> GameSnapshot:
        """Bank the turn points and end the turn.

        The first hold that reaches the target opens the final round. During
        the final round each hold uses up that player's last turn and may
        raise the score to beat.
        """
        if not cls.can_hold(state):
            logger.debug("Ignoring hold in phase %s", state.phase.name)
            return state

        index = state.current_index
        before = state.current_player
        earned = state.turn_points
        after = replace(before, score=before.score + earned)
        players = state.players[:index] + (after,) + state.players[index + 1:]

        entry = ScoreHistoryEntry(
            player_id=after.id,
            player_name=after.name,
            turn_number=state.current_turn_number,
            previous_score=before.score,
            new_score=after.score,
            points_earned=earned,
            action=TurnAction.HOLD,
            timestamp=now or _utcnow(),
        )

        final_round = state.final_round
        if final_round is None and after.score >= state.target_score:
            final_round = FinalRoundState.trigger(players, index)
            logger.info(
                "Final round triggered by %s with %d points (target %d)",
                after.name, after.score, state.target_score,
            )
        elif final_round is not None:
            final_round = final_round.record_hold(after.id, after.score)

        return cls._end_turn(state, players, entry, final_round)

    @classmethod
    def winner(cls, state: GameSnapshot) -> Player | None:
        return state.winner

    @classmethod
    def _end_turn(
        cls,
        state: GameSnapshot,
        players: tuple[Player, ...],
        entry: ScoreHistoryEntry,
        final_round: FinalRoundState | None,
    ) -> GameSnapshot:
        """Record the entry, clear the turn and hand the pigs to the next player."""
        next_index = (state.current_index + 1) % len(players)
        turn_number = state.current_turn_number + 1 if next_index == 0 else state.current_turn_number

        result = replace(
            state,
            players=players,
            turn=TurnState(current_index=next_index),
            score_history=state.score_history.append(entry),
            current_turn_number=turn_number,
            final_round=final_round,
        )
        if result.is_complete:
            winner = result.winner
            logger.info("Match complete; %s wins with %d", winner.name, winner.score)
        return result

    # -- Field setters ---------------------------------------------------

    @classmethod
    def add_player(cls, state: GameSnapshot, name: str | None = None) -> GameSnapshot:
        """Append a player to the end of the turn order.

        A player added during the final round is not owed a final turn.
        """
        if name is None:
            name = f"Player {len(state.players) + 1}"
        player = Player.create(validate_player_name(name))
        return replace(state, players=state.players + (player,))

    @classmethod
    def remove_player(cls, state: GameSnapshot, player_id: str) -> GameSnapshot:
        """Remove a player before the match starts.

        Ignored once the match has started, when the player is unknown, or
        when it would leave fewer than the minimum number of players. The
        turn passes back to the first player.
        """
        if state.started:
            logger.debug("Ignoring removal of %s during a match", player_id)
            return state
        if len(state.players) <= cls.MIN_PLAYERS or state.index_of(player_id) is None:
            return state

        players = tuple(p for p in state.players if p.id != player_id)
        return replace(state, players=players, turn=replace(state.turn, current_index=0))

    @classmethod
    def rename_player(cls, state: GameSnapshot, player_id: str, name: str) -> GameSnapshot:
        """Change a display name; past history entries keep the old one."""
        index = state.index_of(player_id)
        if index is None:
            return state
        renamed = replace(state.players[index], name=validate_player_name(name))
        players = state.players[:index] + (renamed,) + state.players[index + 1:]
        return replace(state, players=players)

    @classmethod
    def set_target_score(cls, state: GameSnapshot, target: int) -> GameSnapshot:
        """Set the target, raising anything below the minimum up to it."""
        target = max(cls.MIN_TARGET_SCORE, validate_target_score(target, minimum=None))
        return replace(state, target_score=target)

    @classmethod
    def set_weight(cls, state: GameSnapshot, pose: Pose, value: float) -> GameSnapshot:
        """Set one outcome weight. Negative values are stored; the sampler treats them as 0."""
        weights = dict(state.weights)
        weights[pose] = validate_weight(value)
        return replace(state, weights=weights)

    @classmethod
    def set_weights(cls, state: GameSnapshot, weights: Mapping[Pose, float]) -> GameSnapshot:
        """Replace several weights at once; poses not given keep their weight."""
        merged = dict(state.weights)
        for pose, value in weights.items():
            merged[Pose(pose)] = validate_weight(value)
        return replace(state, weights=merged)

    @classmethod
    def reset_weights(cls, state: GameSnapshot) -> GameSnapshot:
        return replace(state, weights=dict(DEFAULT_WEIGHTS))

    @classmethod
    def reset(cls, state: GameSnapshot, hard: bool = False) -> GameSnapshot:
        """Return to setup, keeping the target, weights and preferences.

        A soft reset keeps the players (ids and names) with zeroed scores.
        A hard reset replaces them with two fresh default players.
        """
        if hard:
            players: Sequence[Player] = tuple(
                Player.create(f"Player {i + 1}") for i in range(cls.MIN_PLAYERS)
            )
        else:
            players = tuple(replace(p, score=0) for p in state.players)

        return GameSnapshot(
            players=tuple(players),
            target_score=state.target_score,
            started=False,
            turn=TurnState(),
            score_history=ScoreHistory(),
            current_turn_number=1,
            weights=dict(state.weights),
            final_round=None,
            preferences=state.preferences,
        )
