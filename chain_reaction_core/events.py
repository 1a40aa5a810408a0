from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Union


@dataclass(frozen=True)
class StateChanged:
    """Emitted after every accepted move that does not end the game, and after reset()."""


@dataclass(frozen=True)
class GameOver:
    """Emitted once per game, after the move that leaves a single player holding orbs."""
    winner: int


GameEvent = Union[StateChanged, GameOver]
EventSink = Callable[[GameEvent], None]


def event_name(event: GameEvent) -> str:
    return 'gameOver' if isinstance(event, GameOver) else 'stateChanged'


class EventRecorder:
    """Sink that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[GameEvent] = []

    def __call__(self, event: GameEvent) -> None:
        self.events.append(event)

    def drain(self) -> List[GameEvent]:
        """Returns the recorded events and forgets them."""
        out, self.events = self.events, []
        return out
