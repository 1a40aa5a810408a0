"""
Chain Reaction core Python package.

This package holds the rules engine: the grid model, the explosion cascade,
turn rotation, scoring and win detection. Presentation layers (the CLI and the
Flask API) sit on top of it and only talk to Board.
Modules:
- grid.py: Coord, bounds and neighbour helpers, capacity rule
- cell.py: Cell
- board.py: Board
- events.py: StateChanged, GameOver, EventRecorder
- animation.py: OrbTransit
- config.py: GameConfig
- cli.py: terminal hot-seat play
"""
