from __future__ import annotations

# Facade module that re-exports the Chain Reaction core.
# The Flask app and the tests import from here; single-responsibility
# modules live under chain_reaction_core/*.

from chain_reaction_core.grid import (
    Coord,
    DIRECTIONS,
    in_bounds,
    neighbors,
    cell_capacity,
    coords,
)
from chain_reaction_core.cell import Cell
from chain_reaction_core.board import Board, player_symbol
from chain_reaction_core.events import (
    StateChanged,
    GameOver,
    GameEvent,
    EventSink,
    EventRecorder,
    event_name,
)
from chain_reaction_core.animation import OrbTransit
from chain_reaction_core.config import (
    GameConfig,
    SUPPORTED_PLAYER_COUNTS,
    validate_board_args,
)
from chain_reaction_core.cli import parse_move, main as cli_main

__all__ = [
    'Coord',
    'DIRECTIONS',
    'in_bounds',
    'neighbors',
    'cell_capacity',
    'coords',
    'Cell',
    'Board',
    'player_symbol',
    'StateChanged',
    'GameOver',
    'GameEvent',
    'EventSink',
    'EventRecorder',
    'event_name',
    'OrbTransit',
    'GameConfig',
    'SUPPORTED_PLAYER_COUNTS',
    'validate_board_args',
    'parse_move',
    'cli_main',
]


if __name__ == '__main__':
    cli_main()
