from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class OrbTransit:
    """One orb travelling from an exploding cell to a neighbor.

    Presentation data only: the board records these while resolving a move so
    a renderer can animate them, but nothing in the rules reads them back.
    """
    from_row: int
    from_col: int
    to_row: int
    to_col: int
    player_id: int
    progress: float = 0.0  # 0.0 at the source, 1.0 at the destination
    finished: bool = False

    def advance(self, delta: float) -> None:
        if delta < 0:
            raise ValueError(f'delta must be non-negative, got {delta}')
        self.progress += delta
        if self.progress >= 1.0:
            self.progress = 1.0
            self.finished = True

    def position(self) -> Tuple[float, float]:
        """Fractional (row, col) point along the path at the current progress."""
        p = self.progress
        return (
            self.from_row + (self.to_row - self.from_row) * p,
            self.from_col + (self.to_col - self.from_col) * p,
        )
