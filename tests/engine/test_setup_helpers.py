"""
Pass the Pigs - Setup Helper Tests

Tests for the field setters: roster changes, target score, weights and
resets.
"""

import math

import pytest

from pass_the_pigs.engine.base import DEFAULT_WEIGHTS, Pose
from pass_the_pigs.engine.game import GameEngine

SL, SR = Pose.SIDER_LEFT, Pose.SIDER_RIGHT
TR, SN, LJ = Pose.TROTTER, Pose.SNOUTER, Pose.LEANING_JOWLER


# === Add Player ===


class TestAddPlayer:

    def test_appends_with_default_name(self, setup_game):
        state = GameEngine.add_player(setup_game)
        assert [p.name for p in state.players] == ["Alice", "Bob", "Player 3"]
        assert state.players[2].score == 0

    def test_custom_name_is_stripped(self, setup_game):
        state = GameEngine.add_player(setup_game, "  Carol ")
        assert state.players[-1].name == "Carol"

    def test_blank_name_raises(self, setup_game):
        with pytest.raises(ValueError):
            GameEngine.add_player(setup_game, "")

    def test_allowed_mid_match(self, two_player_game, play):
        state = play(two_player_game, (TR, SL))
        state = GameEngine.add_player(state, "Carol")
        assert len(state.players) == 3
        assert state.current_index == 1

    def test_player_added_in_final_round_is_not_owed_a_turn(self, two_player_game, play):
        state = play(two_player_game, (LJ, SN))
        state = GameEngine.add_player(state, "Carol")
        state = play(state, (TR, SL))
        assert state.is_complete is True
        assert state.winner.name == "Alice"


# === Remove Player ===


class TestRemovePlayer:

    def test_removes_before_start(self, setup_game):
        state = GameEngine.add_player(setup_game, "Carol")
        bob = state.players[1]
        state = GameEngine.remove_player(state, bob.id)
        assert [p.name for p in state.players] == ["Alice", "Carol"]
        assert state.current_index == 0

    def test_keeps_minimum_players(self, setup_game):
        alice = setup_game.players[0]
        assert GameEngine.remove_player(setup_game, alice.id) is setup_game

    def test_unknown_id_is_ignored(self, setup_game):
        state = GameEngine.add_player(setup_game)
        assert GameEngine.remove_player(state, "nobody") is state

    def test_ignored_once_started(self, three_player_game):
        carol = three_player_game.players[2]
        assert GameEngine.remove_player(three_player_game, carol.id) is three_player_game


# === Rename Player ===


class TestRenamePlayer:

    def test_renames(self, setup_game):
        alice = setup_game.players[0]
        state = GameEngine.rename_player(setup_game, alice.id, "Alicia")
        assert state.players[0].name == "Alicia"
        assert state.players[0].id == alice.id

    def test_history_keeps_old_name(self, two_player_game, play):
        state = play(two_player_game, (TR, SL))
        state = GameEngine.rename_player(state, state.players[0].id, "Alicia")
        assert state.score_history.latest.player_name == "Alice"

    def test_unknown_id_is_ignored(self, setup_game):
        assert GameEngine.rename_player(setup_game, "nobody", "Zed") is setup_game

    def test_too_long_name_raises(self, setup_game):
        with pytest.raises(ValueError):
            GameEngine.rename_player(setup_game, setup_game.players[0].id, "x" * 40)


# === Target Score ===


class TestSetTargetScore:

    def test_sets_target(self, setup_game):
        assert GameEngine.set_target_score(setup_game, 50).target_score == 50

    @pytest.mark.parametrize("target", [9, 0, -20])
    def test_clamps_to_minimum(self, setup_game, target):
        assert GameEngine.set_target_score(setup_game, target).target_score == 10

    def test_non_integer_raises(self, setup_game):
        with pytest.raises(ValueError):
            GameEngine.set_target_score(setup_game, "fifty")


# === Weights ===


class TestWeights:

    def test_set_weight(self, setup_game):
        state = GameEngine.set_weight(setup_game, LJ, 10)
        assert state.weights[LJ] == 10.0
        assert setup_game.weights[LJ] == 0.7

    def test_negative_weight_is_stored(self, setup_game):
        state = GameEngine.set_weight(setup_game, SL, -1)
        assert state.weights[SL] == -1.0

    def test_non_finite_weight_raises(self, setup_game):
        with pytest.raises(ValueError):
            GameEngine.set_weight(setup_game, SL, math.nan)

    def test_set_weights_merges(self, setup_game):
        state = GameEngine.set_weights(setup_game, {"Snouter": 5, TR: 0})
        assert state.weights[SN] == 5.0
        assert state.weights[TR] == 0.0
        assert state.weights[SR] == DEFAULT_WEIGHTS[SR]

    def test_reset_weights(self, setup_game):
        state = GameEngine.set_weight(setup_game, LJ, 50)
        assert GameEngine.reset_weights(state).weights == DEFAULT_WEIGHTS


# === Reset ===


class TestReset:

    @pytest.fixture
    def played(self, two_player_game, play):
        state = GameEngine.set_weight(two_player_game, LJ, 5)
        state = GameEngine.set_target_score(state, 30)
        state = play(state, (TR, SL))
        return GameEngine.roll(state, pigs=(SN, SL))

    def test_soft_reset_keeps_players(self, played):
        state = GameEngine.reset(played)
        assert [p.id for p in state.players] == [p.id for p in played.players]
        assert [p.name for p in state.players] == ["Alice", "Bob"]
        assert all(p.score == 0 for p in state.players)

    def test_soft_reset_returns_to_setup(self, played):
        state = GameEngine.reset(played)
        assert state.started is False
        assert state.current_index == 0
        assert state.current_turn_number == 1
        assert state.turn_points == 0
        assert len(state.score_history) == 0
        assert state.final_round is None

    def test_reset_keeps_target_and_weights(self, played):
        for hard in (False, True):
            state = GameEngine.reset(played, hard=hard)
            assert state.target_score == 30
            assert state.weights[LJ] == 5.0

    def test_hard_reset_replaces_players(self, played):
        state = GameEngine.reset(played, hard=True)
        assert [p.name for p in state.players] == ["Player 1", "Player 2"]
        assert not {p.id for p in state.players} & {p.id for p in played.players}
