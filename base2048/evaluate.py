# -*- coding: utf-8 -*-
"""
Play random games and report how far they get.
"""
import logging
from collections import Counter

from numpy.random import default_rng
from tqdm import trange

from base2048.envs.session import GameSession

_logger = logging.getLogger(__name__)


def evaluate(length: int = 10, seed: int | None = None) -> dict[int, int]:
    """
    Play games choosing a random effective direction at each step.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 10).
    seed : int, optional
        Seed for reproducible games.

    Returns
    -------
    dict[int, int]
        How many games ended with each maximum tile.
    """
    rng = default_rng(seed)
    session = GameSession(rng=rng)
    max_tiles = []

    with trange(length) as period:
        for num in period:
            session.new_game()

            # ##: Play a game.
            while not session.game_over:
                directions = session.legal_directions
                direction = directions[rng.integers(len(directions))]
                session.step(direction)

                # ##: Log.
                period.set_description(f'Evaluation: {num + 1}')
                period.set_postfix(score=session.score, max=int(session.grid.max()))

            # ##: Save max cells.
            max_tiles.append(int(session.grid.max()))
            _logger.debug('Game %d ended with a score of %d', num + 1, session.score)

    frequency = Counter(max_tiles)
    return dict(sorted(frequency.items()))


def main(argv: list[str] | None = None):
    from argparse import ArgumentParser

    parser = ArgumentParser(description='Play random games of 2048.')
    parser.add_argument('--games', type=int, default=10)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    result = evaluate(length=args.games, seed=args.seed)
    print(f'Max tile frequency over {args.games} games: {result}')


if __name__ == '__main__':
    main()
