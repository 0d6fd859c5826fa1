# -*- coding: utf-8 -*-
"""
Play 2048 in the terminal.
"""
import logging
from argparse import ArgumentParser
from pathlib import Path

from base2048.addons.config import GameConfig
from base2048.core.gamemove import Direction
from base2048.envs.session import GameSession
from base2048.utils.controls import key_to_direction

_logger = logging.getLogger(__name__)

HELP = "Use w/a/s/d (or up/down/left/right) to move, 'n' for a new game, 'q' to quit."


def load_session(path: Path, config: GameConfig, seed: int | None = None) -> GameSession:
    """
    Restore a saved session, or start a new one.

    Parameters
    ----------
    path : Path
        JSON file written by ``save_session``.
    config : GameConfig
        Rules of the game.
    seed : int, optional
        Seed of the session's random source.

    Returns
    -------
    GameSession
        The restored session, or a new game when the file is missing or invalid.
    """
    if not path.exists():
        return GameSession(config=config, seed=seed)

    try:
        return GameSession.from_json(path.read_text(encoding='utf-8'), config=config, seed=seed)
    except ValueError as error:
        _logger.warning('Ignoring saved session %s: %s', path, error)
        return GameSession(config=config, seed=seed)


def save_session(session: GameSession, path: Path):
    """Write the session to a JSON file."""
    path.write_text(session.to_json(), encoding='utf-8')
    _logger.debug('Saved session to %s', path)


def handle_key(session: GameSession, key: str) -> bool:
    """
    Apply one key press to the session.

    Parameters
    ----------
    session : GameSession
        The current game.
    key : str
        The typed key.

    Returns
    -------
    bool
        False when the player quits, True otherwise.
    """
    if key == 'q':
        return False

    if key == 'n':
        session.new_game()
        return True

    # ##: Bound keys first, then direction names typed in full.
    direction = key_to_direction(key)
    if direction is None:
        try:
            direction = Direction.from_name(key)
        except ValueError:
            print(f'Unknown key {key!r}. {HELP}')
            return True

    result = session.step(direction)
    if not result.moved and not session.game_over:
        print('Nothing moved. Try another direction.')
    elif result.score:
        print(f'+{result.score}')
    return True


def main(argv: list[str] | None = None):
    parser = ArgumentParser(description='Play 2048 in the terminal.')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--size', type=int, default=4)
    parser.add_argument('--target', type=int, default=2048)
    parser.add_argument('--save', type=Path, default=None, help='JSON file to restore and save the session.')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = GameConfig(size=args.size, target=args.target)
    except ValueError as error:
        parser.error(str(error))

    if args.save is not None:
        session = load_session(args.save, config, seed=args.seed)
    else:
        session = GameSession(config=config, seed=args.seed)

    print(HELP)
    announced_win = session.won
    playing = True
    while playing:
        session.render()

        # ##: Announce the win once, the game goes on.
        if session.won and not announced_win:
            print(f'You reached {config.target}! Keep going.')
            announced_win = True
        if session.game_over:
            print("Game over! Press 'n' for a new game or 'q' to quit.")

        try:
            key = input('> ').strip()
        except EOFError:
            break
        playing = handle_key(session, key)
        if key == 'n':
            announced_win = False

        if args.save is not None:
            save_session(session, args.save)


if __name__ == '__main__':
    main()
