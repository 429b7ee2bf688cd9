"""Core Game of Life engine."""

from .cell import Cell, ALIVE, DEAD
from .grid import Grid, InvalidLayoutError
from .game import GameOfLife, SimulationResult
from .patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "ALIVE",
    "DEAD",
    "Grid",
    "InvalidLayoutError",
    "GameOfLife",
    "SimulationResult",
    "Pattern",
    "PatternLibrary",
]
