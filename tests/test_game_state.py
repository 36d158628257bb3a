"""
Tests for the game state machine.
"""

from colors_to_collect.core.game_state import GameState, Phase


class TestGameState:
    """Test INIT -> PLAYING -> GAME_OVER transitions."""

    def test_initial_state(self):
        """A new state waits for the first touch."""
        state = GameState()
        assert state.score == 0
        assert not state.is_alive
        assert not state.is_game_over
        assert state.phase is Phase.INIT

    def test_start(self):
        """start moves INIT to PLAYING."""
        state = GameState()
        assert state.start()
        assert state.is_alive
        assert state.phase is Phase.PLAYING

    def test_start_twice(self):
        """A running game cannot be started again."""
        state = GameState()
        state.start()
        assert not state.start()
        assert state.phase is Phase.PLAYING

    def test_catch_scores_one(self):
        """Each catch adds exactly one point."""
        state = GameState()
        state.start()
        assert state.record_catch() == 1
        assert state.record_catch() == 2

    def test_catch_before_start_ignored(self):
        """No points before the game starts."""
        state = GameState()
        assert state.record_catch() == 0

    def test_end_keeps_score(self):
        """Game over leaves the score unchanged."""
        state = GameState()
        state.start()
        state.record_catch()
        assert state.end()
        assert state.score == 1
        assert state.is_game_over
        assert not state.is_alive
        assert state.phase is Phase.GAME_OVER

    def test_end_before_start(self):
        """INIT cannot go straight to GAME_OVER."""
        state = GameState()
        assert not state.end()
        assert not state.is_game_over
        assert state.phase is Phase.INIT

    def test_no_restart_from_game_over(self):
        """GAME_OVER never goes back to PLAYING."""
        state = GameState()
        state.start()
        state.end()
        assert not state.start()
        assert not state.is_alive
        assert state.is_game_over

    def test_flags_never_both_true(self):
        """is_alive and is_game_over are never both set."""
        state = GameState()
        for action in (state.start, state.record_catch, state.end, state.start, state.end):
            action()
            assert not (state.is_alive and state.is_game_over)

    def test_no_points_after_game_over(self):
        """Catches after game over are ignored."""
        state = GameState()
        state.start()
        state.end()
        state.record_catch()
        assert state.score == 0
