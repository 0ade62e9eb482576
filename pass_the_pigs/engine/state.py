"""
Pass the Pigs - Game Snapshot

The immutable read model handed to callers after every action. Everything
a renderer needs (including the winner) is either stored here or derived
from the stored fields.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from pass_the_pigs.engine.base import (
    DEFAULT_TARGET_SCORE,
    DEFAULT_WEIGHTS,
    FinalRoundState,
    GamePhase,
    Player,
    Pose,
    read_only,
)
from pass_the_pigs.engine.ledger import ScoreHistory, TurnLedger


@dataclass(frozen=True)
class TurnState:
    """
    Per-turn data, reset whenever a turn ends.

    Attributes:
        current_index: Index of the player whose turn it is
        ledger: Rolls made so far this turn
        needs_to_pass: Turn is blocked after a Pig Out until the pigs are passed
    """
    current_index: int = 0
    ledger: TurnLedger = field(default_factory=TurnLedger)
    needs_to_pass: bool = False

    @property
    def turn_points(self) -> int:
        """Unbanked points; always the ledger total."""
        return self.ledger.total_points


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete state of a match.

    Attributes:
        players: Players in turn order
        target_score: Banked score that triggers the final round
        started: Whether the match has left setup
        turn: The turn in progress
        score_history: Every turn-ending event so far
        current_turn_number: Round counter, starts at 1
        weights: Outcome weights used by the sampler
        final_round: Final-round bookkeeping, None until triggered
        preferences: Presentation settings carried through unchanged
    """
    players: tuple[Player, ...]
    target_score: int = DEFAULT_TARGET_SCORE
    started: bool = False
    turn: TurnState = field(default_factory=TurnState)
    score_history: ScoreHistory = field(default_factory=ScoreHistory)
    current_turn_number: int = 1
    weights: Mapping[Pose, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS), hash=False)
    final_round: FinalRoundState | None = None
    preferences: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", read_only(self.weights))
        object.__setattr__(self, "preferences", read_only(self.preferences))

    @property
    def current_index(self) -> int:
        return self.turn.current_index

    @property
    def current_player(self) -> Player:
        return self.players[self.turn.current_index]

    @property
    def turn_points(self) -> int:
        return self.turn.turn_points

    @property
    def needs_to_pass(self) -> bool:
        return self.turn.needs_to_pass

    @property
    def is_final_round(self) -> bool:
        return self.final_round is not None

    @property
    def is_complete(self) -> bool:
        """The match is over once every final-round turn has been used."""
        return self.final_round is not None and self.final_round.is_done

    @property
    def winner(self) -> Player | None:
        """Highest banked score once the match is complete.

        Ties go to the first tied player in turn order.
        """
        if not self.is_complete:
            return None

        best: Player | None = None
        for player in self.players:
            if best is None or player.score > best.score:
                best = player
        return best

    @property
    def leaders(self) -> tuple[Player, ...]:
        """All players sharing the top banked score."""
        if not self.players:
            return ()
        top = max(p.score for p in self.players)
        return tuple(p for p in self.players if p.score == top)

    @property
    def phase(self) -> GamePhase:
        if not self.started:
            return GamePhase.SETUP
        if self.is_complete:
            return GamePhase.COMPLETE
        if self.turn.needs_to_pass:
            return GamePhase.BLOCKED_ON_PASS
        if self.is_final_round:
            return GamePhase.FINAL_ROUND
        return GamePhase.IN_PROGRESS

    def player_by_id(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: str) -> int | None:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return None
