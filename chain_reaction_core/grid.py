from __future__ import annotations

from typing import Iterator, List, Tuple

Coord = Tuple[int, int]

# Explosion order: up, down, left, right.
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def in_bounds(width: int, height: int, r: int, c: int) -> bool:
    return 0 <= r < height and 0 <= c < width


def neighbors(width: int, height: int, coord: Coord) -> List[Coord]:
    """Gets the orthogonal neighbors of a coordinate that lie on the board, in explosion order."""
    r, c = coord
    out: List[Coord] = []
    for dr, dc in DIRECTIONS:
        nr, nc = r + dr, c + dc
        if in_bounds(width, height, nr, nc):
            out.append((nr, nc))
    return out


def cell_capacity(width: int, height: int, r: int, c: int) -> int:
    """Orbs a cell can take before exploding: 2 in corners, 3 on edges, 4 inside."""
    on_row_edge = r == 0 or r == height - 1
    on_col_edge = c == 0 or c == width - 1
    if on_row_edge and on_col_edge:
        return 2
    if on_row_edge or on_col_edge:
        return 3
    return 4


def coords(width: int, height: int) -> Iterator[Coord]:
    """Iterates over all coordinates row by row."""
    for r in range(height):
        for c in range(width):
            yield (r, c)
