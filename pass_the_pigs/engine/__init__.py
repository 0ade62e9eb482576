"""
Pass the Pigs Game Engine.

Pure Python game logic with zero UI/persistence dependencies.
Handles pose sampling, scoring, turn rotation and the Final Round.
"""

from pass_the_pigs.engine.base import (
    DEFAULT_TARGET_SCORE,
    DEFAULT_WEIGHTS,
    FinalRoundState,
    GameConfig,
    GamePhase,
    Player,
    Pose,
    Roll,
    ScoreHistoryEntry,
    ScoringResult,
    TurnAction,
)
from pass_the_pigs.engine.game import GameEngine
from pass_the_pigs.engine.ledger import ScoreHistory, TurnLedger
from pass_the_pigs.engine.sampler import sample, sample_pair
from pass_the_pigs.engine.scoring import is_pig_out, score_pair
from pass_the_pigs.engine.state import GameSnapshot, TurnState

__all__ = [
    # Data Classes
    "FinalRoundState",
    "GameConfig",
    "GameSnapshot",
    "Player",
    "Roll",
    "ScoreHistory",
    "ScoreHistoryEntry",
    "ScoringResult",
    "TurnLedger",
    "TurnState",
    # Enums
    "GamePhase",
    "Pose",
    "TurnAction",
    # Constants
    "DEFAULT_TARGET_SCORE",
    "DEFAULT_WEIGHTS",
    # Engine
    "GameEngine",
    "is_pig_out",
    "sample",
    "sample_pair",
    "score_pair",
]
