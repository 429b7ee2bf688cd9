"""Conway's Game of Life on a finite, optionally toroidal grid."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.grid import Grid, InvalidLayoutError
from .core.game import GameOfLife, SimulationResult
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "Grid",
    "InvalidLayoutError",
    "GameOfLife",
    "SimulationResult",
    "Pattern",
    "PatternLibrary",
]
