"""
Pass the Pigs - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from datetime import datetime, timezone
from typing import Sequence

import pytest

from pass_the_pigs.engine.base import GameConfig, Pose
from pass_the_pigs.engine.game import GameEngine
from pass_the_pigs.engine.state import GameSnapshot


class ScriptedRNG:
    """Uniform source that replays predefined draws in order."""

    def __init__(self, draws: Sequence[float]) -> None:
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self._draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def setup_game() -> GameSnapshot:
    """Two players, target 20, not started."""
    return GameEngine.new_game(GameConfig(target_score=20, player_names=("Alice", "Bob")))


@pytest.fixture
def two_player_game(setup_game) -> GameSnapshot:
    """Two players, target 20, started."""
    return GameEngine.start(setup_game)


@pytest.fixture
def three_player_game() -> GameSnapshot:
    """Three players, target 20, started."""
    config = GameConfig(target_score=20, player_names=("Alice", "Bob", "Carol"))
    return GameEngine.start(GameEngine.new_game(config))


def play_turn(state: GameSnapshot, *pigs: tuple[Pose, Pose], now=None) -> GameSnapshot:
    """Roll each pair in order, then hold (or pass after a Pig Out)."""
    for pair in pigs:
        state = GameEngine.roll(state, pigs=pair)
    if state.needs_to_pass:
        return GameEngine.pass_pigs(state, now=now)
    return GameEngine.hold(state, now=now)


@pytest.fixture
def play():
    """Helper that plays a whole turn from a list of pose pairs."""
    return play_turn
