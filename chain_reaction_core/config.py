from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_WIDTH = 6
DEFAULT_HEIGHT = 12
DEFAULT_PLAYERS = 2
SUPPORTED_PLAYER_COUNTS: Tuple[int, ...] = (2, 3)
MIN_DIMENSION = 2  # capacity per position matches the neighbor count from 2x2 up


def validate_board_args(width: int, height: int, num_players: int) -> None:
    """Raises ValueError unless the arguments describe a playable board."""
    for name, value in (('width', width), ('height', height), ('num_players', num_players)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f'{name} must be an integer, got {value!r}')
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise ValueError(f'Board must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, got {width}x{height}')
    if num_players not in SUPPORTED_PLAYER_COUNTS:
        raise ValueError(f'Unsupported player count {num_players}; expected one of {SUPPORTED_PLAYER_COUNTS}')


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and player count, the only options a game has."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    num_players: int = DEFAULT_PLAYERS

    def __post_init__(self) -> None:
        validate_board_args(self.width, self.height, self.num_players)

    @classmethod
    def from_env(cls) -> 'GameConfig':
        """Reads CHAIN_REACTION_WIDTH, CHAIN_REACTION_HEIGHT and CHAIN_REACTION_PLAYERS."""
        return cls(
            width=_env_int('CHAIN_REACTION_WIDTH', DEFAULT_WIDTH),
            height=_env_int('CHAIN_REACTION_HEIGHT', DEFAULT_HEIGHT),
            num_players=_env_int('CHAIN_REACTION_PLAYERS', DEFAULT_PLAYERS),
        )

    def with_overrides(self, width: Optional[int] = None, height: Optional[int] = None,
                       num_players: Optional[int] = None) -> 'GameConfig':
        return GameConfig(
            width=self.width if width is None else width,
            height=self.height if height is None else height,
            num_players=self.num_players if num_players is None else num_players,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None
