from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .board import Board, player_symbol
from .config import SUPPORTED_PLAYER_COUNTS, GameConfig
from .events import GameEvent, GameOver
from .grid import Coord


def parse_move(text: str) -> Optional[Coord]:
    """Parses 'r,c' or 'r c' into a coordinate; None if the text is not two integers."""
    sep = ',' if ',' in text else ' '
    parts = [t.strip() for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def format_scores(board: Board) -> str:
    return ' | '.join(f'P{p} ({player_symbol(p)}): {board.get_player_score(p)}' for p in board.players())


def main(argv: Optional[Sequence[str]] = None) -> None:
    defaults = GameConfig.from_env()
    parser = argparse.ArgumentParser(description='Chain Reaction hot-seat play in the terminal')
    parser.add_argument('--width', type=int, default=defaults.width, help='Board width (columns)')
    parser.add_argument('--height', type=int, default=defaults.height, help='Board height (rows)')
    parser.add_argument('--players', type=int, choices=list(SUPPORTED_PLAYER_COUNTS),
                        default=defaults.num_players, help='Number of players')
    parser.add_argument('--verbose', action='store_true', help='Log moves and explosions')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        config = GameConfig(width=args.width, height=args.height, num_players=args.players)
    except ValueError as e:
        parser.error(str(e))

    def on_event(event: GameEvent) -> None:
        if isinstance(event, GameOver):
            print(f'Player {event.winner} ({player_symbol(event.winner)}) wins!')

    board = Board(config.width, config.height, config.num_players, sink=on_event)
    print('Initial board:')
    print(board.pretty())

    while True:
        if board.is_game_over():
            prompt = "Type 'reset' for a new game or 'quit': "
        else:
            p = board.get_current_player()
            prompt = f'Player {p} ({player_symbol(p)}), enter your move as r,c or r c: '
        try:
            text = input(prompt).strip().lower()
        except EOFError:
            # Ctrl-D ends the session like 'quit'
            print()
            return
        if text in ('q', 'quit', 'exit'):
            return
        if text == 'reset':
            board.reset()
            print(board.pretty())
            continue
        if board.is_game_over():
            continue
        move = parse_move(text)
        if move is None:
            print('Could not parse. Try again.')
            continue
        if not board.make_move(*move):
            print('Illegal move. Try again.')
            continue
        if board.last_explosions:
            print(f'{board.last_explosions} explosion(s)!')
        print(board.pretty())
        print(format_scores(board))


if __name__ == '__main__':
    main()
