"""
Tests for the game session.

Tests cover the move, spawn and terminal check sequence, the scores, and the persistence record.
"""

import json
from unittest import TestCase, main

import numpy as np

from base2048.addons.config import GameConfig, default_config
from base2048.core.gameboard import move, spawn_random_tile
from base2048.core.gamemove import Direction
from base2048.envs.session import GameSession

# ##>: After a left move the only empty cell is (0, 3); whatever spawns there, no pair remains.
ALMOST_STUCK = np.array(
    [[0, 8, 16, 32], [64, 128, 256, 512], [8, 16, 32, 64], [64, 128, 256, 1024]],
    dtype=np.int64,
)


class TestSessionInterface(TestCase):
    """Test GameSession state management."""

    def setUp(self):
        self.session = GameSession(seed=42)

    def test_new_game_state(self):
        """A new game has two tiles, zero score and cleared flags."""
        grid = self.session.grid

        self.assertEqual(grid.shape, (4, 4))
        self.assertEqual(np.count_nonzero(grid), 2)
        self.assertTrue(np.all(np.isin(grid[grid != 0], [2, 4])))
        self.assertEqual(self.session.score, 0)
        self.assertFalse(self.session.won)
        self.assertFalse(self.session.game_over)

    def test_seed_reproducibility(self):
        np.testing.assert_array_equal(GameSession(seed=3).grid, GameSession(seed=3).grid)

    def test_grid_property_is_a_copy(self):
        grid = self.session.grid
        grid[:] = 0
        self.assertEqual(np.count_nonzero(self.session.grid), 2)

    def test_effective_move(self):
        """An effective move adds its score and spawns one tile."""
        self.session._grid = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        result = self.session.step(Direction.LEFT)

        self.assertTrue(result.moved)
        self.assertEqual(result.score, 4)
        np.testing.assert_array_equal(result.grid[0], [4, 0, 0, 0])

        # ##>: One merged tile plus one spawned tile.
        self.assertEqual(np.count_nonzero(self.session.grid), 2)
        self.assertEqual(self.session.score, 4)
        self.assertEqual(self.session.best_score, 4)

    def test_no_op_move(self):
        """A move that changes nothing spawns no tile."""
        grid = np.array([[2, 0, 0, 0], [4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.session._grid = grid.copy()
        result = self.session.step(Direction.LEFT)

        self.assertFalse(result.moved)
        np.testing.assert_array_equal(self.session.grid, grid)
        self.assertEqual(self.session.score, 0)

    def test_no_op_result_does_not_alias_session_grid(self):
        """Editing the grid returned by an ineffective move leaves the session untouched."""
        self.session._grid = np.array([[2, 0, 0, 0], [4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        result = self.session.step(Direction.LEFT)

        self.assertFalse(result.moved)
        result.grid[3, 3] = 1024
        self.assertEqual(self.session.grid[3, 3], 0)

    def test_win_does_not_end_game(self):
        """Reaching the target sets the win flag and play continues."""
        self.session._grid = np.array([[1024, 1024, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.session.step(Direction.LEFT)

        self.assertTrue(self.session.won)
        self.assertFalse(self.session.game_over)
        self.assertTrue(self.session.step(Direction.RIGHT).moved)
        self.assertTrue(self.session.won)

    def test_custom_target(self):
        session = GameSession(config=GameConfig(target=8), seed=0)
        session._grid = np.array([[4, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        session.step(Direction.LEFT)
        self.assertTrue(session.won)

    def test_game_over_after_spawn(self):
        """The stalemate check runs on the grid after the spawn."""
        self.session._grid = ALMOST_STUCK.copy()
        result = self.session.step(Direction.LEFT)

        self.assertTrue(result.moved)
        self.assertFalse(0 in result.grid[:, :3])
        self.assertTrue(self.session.game_over)
        self.assertEqual(self.session.legal_directions, [])

    def test_moves_ignored_after_game_over(self):
        self.session._grid = ALMOST_STUCK.copy()
        self.session.step(Direction.LEFT)
        grid = self.session.grid

        result = self.session.step(Direction.RIGHT)
        self.assertFalse(result.moved)
        self.assertEqual(result.score, 0)
        np.testing.assert_array_equal(self.session.grid, grid)

    def test_new_game_keeps_best_score(self):
        self.session._grid = np.array([[8, 8, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.session.step(Direction.LEFT)
        self.session.new_game()

        self.assertEqual(self.session.score, 0)
        self.assertEqual(self.session.best_score, 16)

    def test_best_score_not_lowered(self):
        session = GameSession(seed=1, best_score=1000)
        session._grid = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        session.step(Direction.LEFT)
        self.assertEqual(session.best_score, 1000)

    def test_separate_sessions_do_not_share_random_state(self):
        """Playing in one session does not change another session's spawns."""
        first, second = GameSession(seed=5), GameSession(seed=5)
        for direction in first.legal_directions:
            first.step(direction)

        np.testing.assert_array_equal(second.new_game(), GameSession(seed=5).new_game())

    def test_play_until_game_over(self):
        """Random play ends in a stalemate."""
        generator = np.random.default_rng(0)
        session = GameSession(rng=generator)
        for _ in range(5000):
            directions = session.legal_directions
            if not directions:
                break
            session.step(directions[generator.integers(len(directions))])

        self.assertTrue(session.game_over)
        self.assertTrue(session.score > 0)


class TestSessionRecord(TestCase):
    """Test the persistence record."""

    def test_record_keys(self):
        record = GameSession(seed=0).to_record()
        self.assertEqual(set(record), {'grid', 'score', 'bestScore', 'gameOver', 'gameWon'})
        self.assertIsInstance(record['grid'][0][0], int)

    def test_record_round_trip(self):
        session = GameSession(seed=8)
        session._grid = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 4, 0, 0], [0, 0, 0, 2048]])
        session.step(Direction.LEFT)

        restored = GameSession.from_record(session.to_record())
        np.testing.assert_array_equal(restored.grid, session.grid)
        self.assertEqual(restored.score, session.score)
        self.assertEqual(restored.best_score, session.best_score)
        self.assertEqual(restored.won, session.won)
        self.assertEqual(restored.game_over, session.game_over)

    def test_json_round_trip(self):
        session = GameSession(seed=8)
        text = session.to_json()
        self.assertEqual(json.loads(text)['grid'], session.grid.tolist())
        np.testing.assert_array_equal(GameSession.from_json(text).grid, session.grid)

    def test_restore_browser_record(self):
        """Records without a best score restore with the saved score as best."""
        record = {'grid': [[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 4]], 'score': 12, 'gameOver': False}
        session = GameSession.from_record(record)

        self.assertEqual(session.score, 12)
        self.assertEqual(session.best_score, 12)
        self.assertFalse(session.won)
        self.assertTrue(session.step(Direction.UP).moved)

    def test_restored_game_over_ignores_moves(self):
        record = {'grid': ALMOST_STUCK.tolist(), 'score': 100, 'gameOver': True, 'gameWon': False}
        session = GameSession.from_record(record)
        self.assertFalse(session.step(Direction.LEFT).moved)

    def test_missing_grid(self):
        with self.assertRaises(ValueError):
            GameSession.from_record({'score': 4})

    def test_wrong_size(self):
        record = {'grid': [[0, 0, 0], [0, 0, 0], [0, 0, 0]], 'score': 0}
        with self.assertRaises(ValueError):
            GameSession.from_record(record, config=default_config())

    def test_invalid_tile(self):
        record = {'grid': [[3, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]}
        with self.assertRaises(ValueError):
            GameSession.from_record(record)

    def test_restore_leaves_random_source_untouched(self):
        """A restored session spawns exactly as a fresh generator with the same seed would."""
        grid = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 4, 0, 0], [0, 0, 0, 8]])
        record = {'grid': grid.tolist(), 'score': 20}

        with self.assertNoLogs('base2048.envs.session', level='INFO'):
            session = GameSession.from_record(record, seed=7)
        session.step(Direction.LEFT)

        expected = spawn_random_tile(move(grid, Direction.LEFT).grid, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(session.grid, expected)

    def test_score_of_wrong_type(self):
        grid = ALMOST_STUCK.tolist()
        for score in ([1], {'value': 1}, '12', 1.5, True):
            with self.assertRaises(ValueError):
                GameSession.from_record({'grid': grid, 'score': score})

    def test_best_score_of_wrong_type(self):
        with self.assertRaises(ValueError):
            GameSession.from_record({'grid': ALMOST_STUCK.tolist(), 'bestScore': {'value': 1}})

    def test_negative_score(self):
        with self.assertRaises(ValueError):
            GameSession.from_record({'grid': ALMOST_STUCK.tolist(), 'score': -4})

    def test_flags_of_wrong_type(self):
        """A string flag such as "false" is rejected instead of read as True."""
        for key in ('gameOver', 'gameWon'):
            with self.assertRaises(ValueError):
                GameSession.from_record({'grid': ALMOST_STUCK.tolist(), key: 'false'})
            with self.assertRaises(ValueError):
                GameSession.from_record({'grid': ALMOST_STUCK.tolist(), key: 1})

    def test_invalid_json(self):
        with self.assertRaises(ValueError):
            GameSession.from_json('{not json')


class TestGameConfig(TestCase):
    def test_defaults(self):
        config = default_config()
        self.assertEqual((config.size, config.target, config.start_tiles), (4, 2048, 2))
        self.assertEqual(config.spawn_probs, {2: 0.9, 4: 0.1})

    def test_invalid_probs(self):
        with self.assertRaises(ValueError):
            GameConfig(spawn_probs={2: 0.5, 4: 0.1})

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            GameConfig(size=1)

    def test_larger_grid(self):
        session = GameSession(config=GameConfig(size=5), seed=0)
        self.assertEqual(session.grid.shape, (5, 5))


if __name__ == '__main__':
    main()
