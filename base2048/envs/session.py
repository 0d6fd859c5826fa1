"""2048 game session: the caller that holds the grid, the scores and the terminal flags."""

import json
import logging
from typing import Any

from numpy import asarray, int64, ndarray
from numpy.random import Generator, default_rng

from base2048.addons.config import GameConfig
from base2048.core.gameboard import (
    MoveResult,
    create_empty_grid,
    has_reached_target,
    has_stalemate,
    initial_grid,
    is_valid_grid,
    move,
    spawn_random_tile,
)
from base2048.core.gamemove import Direction, legal_directions
from base2048.utils.render import render_grid

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def _record_value(record: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Read an optional field of a saved record, rejecting values of the wrong type."""
    value = record.get(key)
    if value is None:
        return default

    # ##>: bool is a subclass of int, so a flag is never accepted as a score.
    if type(value) is not kind:
        raise ValueError(f'Record field {key!r} must be {kind.__name__}, got {value!r}')
    return value


class GameSession:
    """
    One game of 2048.

    The session applies each move to its grid, spawns a tile only after an effective move, then
    checks the win and stalemate conditions against the post-spawn grid. Once the game is over
    further moves are ignored.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
        best_score: int = 0,
        _start: bool = True,
    ):
        """
        Initialize a session and start a new game.

        Parameters
        ----------
        config : GameConfig, optional
            Rules of the game (default is a 4x4 game up to 2048).
        rng : Generator, optional
            Random source owned by this session. Takes precedence over ``seed``.
        seed : int, optional
            Seed for the session's random source.
        best_score : int, optional
            Best score of previous games (default is 0).
        """
        self.config = config or GameConfig()
        self._rng = rng if rng is not None else default_rng(seed)
        self._best_score = best_score

        self._grid: ndarray = create_empty_grid(self.config.size)
        self._score = 0
        self._won = False
        self._game_over = False

        if _start:
            self.new_game()

    @property
    def grid(self) -> ndarray:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def won(self) -> bool:
        """True once a tile reached the target during this game."""
        return self._won

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def legal_directions(self) -> list[Direction]:
        """Directions that would change the grid, empty once the game is over."""
        if self._game_over:
            return []
        return legal_directions(self._grid)

    def new_game(self) -> ndarray:
        """
        Start a new game: an empty grid with the starting tiles, a zero score and cleared flags.

        Returns
        -------
        ndarray
            The starting grid.
        """
        self._grid = initial_grid(
            self.config.size,
            number_tile=self.config.start_tiles,
            rng=self._rng,
            probs=self.config.spawn_probs,
        )
        self._score = 0
        self._won = False
        self._game_over = False

        _logger.info('New game on a %dx%d grid', self.config.size, self.config.size)
        return self.grid

    def step(self, direction: Direction) -> MoveResult:
        """
        Play one move.

        Parameters
        ----------
        direction : Direction
            Direction of the move.

        Returns
        -------
        MoveResult
            The outcome of the move, before the new tile is spawned.

        Notes
        -----
        - A move that changes nothing spawns no tile and leaves the score as is.
        - Nothing happens once the game is over.
        """
        if self._game_over:
            return MoveResult(self.grid, 0, False)

        result = move(self._grid, direction)
        if not result.moved:
            _logger.debug('Move %s changed nothing', direction.name)
            return MoveResult(self.grid, 0, False)

        # ##: Update the scores.
        self._score += result.score
        self._best_score = max(self._best_score, self._score)

        # ##: Spawn a tile, then check the terminal conditions.
        self._grid = spawn_random_tile(result.grid, rng=self._rng, probs=self.config.spawn_probs)
        _logger.debug('Move %s scored %d, score is %d', direction.name, result.score, self._score)

        if not self._won and has_reached_target(self._grid, self.config.target):
            self._won = True
            _logger.info('Reached %d with a score of %d', self.config.target, self._score)

        if has_stalemate(self._grid):
            self._game_over = True
            _logger.info('Game over with a score of %d', self._score)

        return result

    def to_record(self) -> dict[str, Any]:
        """
        Serialize the session into a plain record.

        Returns
        -------
        dict[str, Any]
            The grid, the score, the best score and the two flags.
        """
        return {
            'grid': self._grid.tolist(),
            'score': int(self._score),
            'bestScore': int(self._best_score),
            'gameOver': self._game_over,
            'gameWon': self._won,
        }

    def to_json(self) -> str:
        """Serialize the session into a JSON string."""
        return json.dumps(self.to_record())

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        config: GameConfig | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> 'GameSession':
        """
        Restore a session from a record made by ``to_record``.

        Parameters
        ----------
        record : dict[str, Any]
            The saved session.
        config : GameConfig, optional
            Rules of the game. The grid size must match the saved grid.
        rng : Generator, optional
            Random source for the restored session.
        seed : int, optional
            Seed for the restored session's random source.

        Returns
        -------
        GameSession
            A session with the saved state.

        Raises
        ------
        ValueError
            If the record has no grid, the grid is malformed, or a score or flag has the wrong type.
        """
        if not isinstance(record, dict) or not isinstance(record.get('grid'), list):
            raise ValueError('Record has no grid')

        config = config or GameConfig(size=len(record['grid']))
        if not is_valid_grid(record['grid'], size=config.size):
            raise ValueError(f'Invalid grid for a {config.size}x{config.size} game: {record["grid"]!r}')

        score = _record_value(record, 'score', int, 0)
        best_score = _record_value(record, 'bestScore', int, 0)
        if score < 0 or best_score < 0:
            raise ValueError(f'Scores must be non-negative, got {score} and {best_score}')

        # ##: Restore without starting a game, so the random source is left untouched.
        session = cls(config=config, rng=rng, seed=seed, best_score=max(best_score, score), _start=False)
        session._grid = asarray(record['grid'], dtype=int64)
        session._score = score
        session._game_over = _record_value(record, 'gameOver', bool, False)
        session._won = _record_value(record, 'gameWon', bool, False)
        _logger.debug('Restored session with a score of %d', session._score)
        return session

    @classmethod
    def from_json(cls, text: str, **kwargs) -> 'GameSession':
        """
        Restore a session from a JSON string made by ``to_json``.

        Raises
        ------
        ValueError
            If the text is not JSON or the record is malformed.
        """
        return cls.from_record(json.loads(text), **kwargs)

    def render(self) -> None:
        """
        Print the grid and the scores to the console.
        """
        print(render_grid(self._grid))
        print(f'score={self._score} best={self._best_score}')
