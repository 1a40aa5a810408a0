from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .animation import OrbTransit
from .cell import Cell
from .config import validate_board_args
from .events import EventSink, GameEvent, GameOver, StateChanged
from .grid import Coord, coords, in_bounds, neighbors

logger = logging.getLogger(__name__)

PLAYER_SYMBOLS = 'RGY'  # red, green, yellow

# (owner, exploding cell, neighbors still to receive an orb)
_Frame = Tuple[int, Coord, Iterator[Coord]]


class Board:
    """A fixed-size grid of cells plus the turn, score and game-over state of one game.

    make_move() runs to completion, including every explosion it triggers,
    before returning. Each accepted move sends exactly one event to the sink:
    GameOver when it ends the game, StateChanged otherwise.
    """

    def __init__(self, width: int, height: int, num_players: int = 2,
                 sink: Optional[EventSink] = None) -> None:
        validate_board_args(width, height, num_players)
        self.width = width
        self.height = height
        self.num_players = num_players
        self.sink = sink
        self.cells: List[List[Cell]] = [
            [Cell.at(r, c, width, height) for c in range(width)] for r in range(height)
        ]
        self.current_player = 1
        self.move_count = 0
        self.game_over = False
        self.winner: Optional[int] = None
        self.scores: Dict[int, int] = {p: 0 for p in self.players()}
        self.last_transits: List[OrbTransit] = []
        self.last_explosions = 0
        self.last_cascade_endless = False
        logger.debug('Board %dx%d created for %d players', width, height, num_players)

    # ---------- Queries ----------

    def players(self) -> range:
        return range(1, self.num_players + 1)

    def get_cell(self, row: int, col: int) -> Cell:
        if not in_bounds(self.width, self.height, row, col):
            raise IndexError(f'({row},{col}) is outside the {self.width}x{self.height} board')
        return self.cells[row][col]

    def get_current_player(self) -> int:
        return self.current_player

    def get_player_score(self, player_id: int) -> int:
        """Orbs currently owned by player_id; 0 for ids that are not in the game."""
        return self.scores.get(player_id, 0)

    def is_game_over(self) -> bool:
        return self.game_over

    def total_orbs(self) -> int:
        return sum(cell.orb_count for row in self.cells for cell in row)

    def is_valid_move(self, row: int, col: int) -> bool:
        if self.game_over or not in_bounds(self.width, self.height, row, col):
            return False
        owner = self.cells[row][col].owner_id
        return owner == 0 or owner == self.current_player

    def legal_moves(self) -> List[Coord]:
        """Every cell the current player may play, in row-major order."""
        return [(r, c) for (r, c) in coords(self.width, self.height) if self.is_valid_move(r, c)]

    # ---------- Moves ----------

    def make_move(self, row: int, col: int) -> bool:
        """Places an orb for the current player; returns False, changing nothing, if the move is not allowed."""
        player = self.current_player
        if self.game_over:
            logger.debug('Game is over, move (%d,%d) rejected', row, col)
            return False
        if not self.is_valid_move(row, col):
            logger.debug('Invalid move (%d,%d) for player %d', row, col, player)
            return False

        self.last_transits = []
        self.last_explosions = 0
        self.last_cascade_endless = False
        if self.cells[row][col].add_orb(player):
            self._resolve(row, col)
        self.move_count += 1
        self._update_scores()
        logger.debug('Player %d played (%d,%d): %d explosions, move %d',
                     player, row, col, self.last_explosions, self.move_count)

        winner = self._find_winner()
        if winner is not None:
            self.game_over = True
            self.winner = winner
            logger.info('Game over, player %d wins with %d orbs', winner, self.scores[winner])
            self._emit(GameOver(winner=winner))
            return True

        self._rotate_turn()
        self._emit(StateChanged())
        return True

    def reset(self) -> None:
        """Empties every cell and starts a new game with player 1 to move."""
        for row in self.cells:
            for cell in row:
                cell.reset()
        self.current_player = 1
        self.move_count = 0
        self.game_over = False
        self.winner = None
        self.last_transits = []
        self.last_explosions = 0
        self.last_cascade_endless = False
        self._update_scores()
        logger.debug('Board reset, player 1 to move')
        self._emit(StateChanged())

    # ---------- Cascade ----------

    def _explode(self, row: int, col: int, fired: Set[Coord]) -> _Frame:
        cell = self.cells[row][col]
        owner = cell.owner_id
        cell.reset()
        fired.add((row, col))
        self.last_explosions += 1
        return owner, (row, col), iter(neighbors(self.width, self.height, (row, col)))

    def _resolve(self, row: int, col: int) -> None:
        """Explodes (row, col) and every cell that overflows as a result.

        Works depth first with an explicit stack: a neighbor that overflows is
        fully resolved before the exploding cell hands an orb to its next
        neighbor, in up, down, left, right order.

        A cascade that settles always leaves at least one cell that never
        exploded. Once every cell has exploded during this move the cascade
        can never settle, so it is abandoned there and last_cascade_endless is
        set. By then every orb belongs to the exploding player.
        """
        fired: Set[Coord] = set()
        size = self.width * self.height
        stack: List[_Frame] = [self._explode(row, col, fired)]
        while stack:
            owner, (sr, sc), pending = stack[-1]
            nxt = next(pending, None)
            if nxt is None:
                stack.pop()
                continue
            nr, nc = nxt
            self.last_transits.append(OrbTransit(sr, sc, nr, nc, owner))
            if not self.cells[nr][nc].add_orb(owner):
                continue
            if len(fired) == size:
                self.last_cascade_endless = True
                logger.debug('Cascade never settles, stopped after %d explosions; player %d holds every orb',
                             self.last_explosions, owner)
                return
            stack.append(self._explode(nr, nc, fired))

    # ---------- Scores, game over, turns ----------

    def _update_scores(self) -> None:
        scores = {p: 0 for p in self.players()}
        for row in self.cells:
            for cell in row:
                if cell.owner_id in scores:
                    scores[cell.owner_id] += cell.orb_count
        self.scores = scores

    def _find_winner(self) -> Optional[int]:
        """The only player still holding orbs, once everyone has moved; otherwise None."""
        if self.move_count < self.num_players:
            return None
        holders = [p for p in self.players() if self.scores[p] > 0]
        if len(holders) == 1:
            return holders[0]
        return None

    def _rotate_turn(self) -> None:
        self.current_player = self.current_player % self.num_players + 1
        logger.debug('Turn passes to player %d', self.current_player)

    def _emit(self, event: GameEvent) -> None:
        if self.sink is not None:
            self.sink(event)

    # ---------- Text rendering ----------

    def pretty(self) -> str:
        """Generates a human-readable view: '.' for empty cells, else orb count and player symbol."""
        lines: List[str] = []
        for row in self.cells:
            parts: List[str] = []
            for cell in row:
                if cell.is_empty:
                    parts.append(' .')
                else:
                    parts.append(f'{cell.orb_count}{player_symbol(cell.owner_id)}')
            lines.append(' '.join(parts))
        return '\n'.join(lines)


def player_symbol(player_id: int) -> str:
    if 1 <= player_id <= len(PLAYER_SYMBOLS):
        return PLAYER_SYMBOLS[player_id - 1]
    return str(player_id)
