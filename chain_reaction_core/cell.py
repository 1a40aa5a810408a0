from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .grid import Coord, cell_capacity

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """A single grid slot holding orbs for at most one player.

    Capacity is fixed by the cell's position when the board is built; the
    orb count and owner change through add_orb() and reset() only.
    """
    row: int
    col: int
    capacity: int
    orb_count: int = field(default=0)
    owner_id: int = field(default=0)  # 0 means unowned

    @classmethod
    def at(cls, row: int, col: int, width: int, height: int) -> 'Cell':
        """Builds the cell for (row, col) on a width x height board."""
        return cls(row=row, col=col, capacity=cell_capacity(width, height, row, col))

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_empty(self) -> bool:
        return self.orb_count == 0

    @property
    def is_critical(self) -> bool:
        """True when one more orb makes the cell explode."""
        return self.orb_count == self.capacity - 1

    def add_orb(self, player_id: int) -> bool:
        """Adds one orb for player_id and returns True if the cell must now explode.

        A cell owned by another player is captured: its existing orbs switch to
        player_id and the new orb lands on top of them.
        """
        if player_id < 1:
            raise ValueError(f'Invalid player id: {player_id}')
        if self.owner_id not in (0, player_id):
            logger.debug('Player %d captures (%d,%d) from player %d with %d orbs',
                          player_id, self.row, self.col, self.owner_id, self.orb_count)
        self.owner_id = player_id
        self.orb_count += 1
        return self.orb_count >= self.capacity

    def reset(self) -> None:
        self.orb_count = 0
        self.owner_id = 0
