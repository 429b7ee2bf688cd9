"""Conway's Game of Life implementation."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple
import numpy as np

from .cell import Cell
from .grid import Grid


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of :meth:`GameOfLife.run_until_stable`."""

    final: "GameOfLife"
    reason: str  # 'extinction', 'cycle' or 'max_generations'
    cycle_start: int = 0
    cycle_length: int = 0


class GameOfLife:
    """Conway's Game of Life simulation state.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    A state is a grid plus a generation counter. It is never modified:
    ``step()`` returns a new state and leaves this one valid, so callers
    can keep as much history as they like.
    """

    def __init__(self, grid: Grid, generation: int = 0) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate; its edge policy is the game's
            generation: Generation number of ``grid``
        """
        self._grid = grid
        self._generation = generation

    @classmethod
    def random(cls, width: int, height: int, seed: int, wrapping: bool = False) -> "GameOfLife":
        """Start a game from a seeded random grid (see :meth:`Grid.random`)."""
        return cls(Grid.random(width, height, seed, wrap_edges=wrapping))

    @classmethod
    def from_layout(cls, layout: str, wrapping: bool = False) -> "GameOfLife":
        """Start a game from a text layout.

        Raises:
            InvalidLayoutError: If the layout's rows differ in length
        """
        return cls(Grid.from_layout(layout, wrap_edges=wrapping))

    @property
    def grid(self) -> Grid:
        """Grid of the current generation."""
        return self._grid

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def wrapping(self) -> bool:
        """Whether the grid edges wrap around."""
        return self._grid.wrap_edges

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._grid.population

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Rows of cells of the current generation, top to bottom."""
        return self._grid.rows()

    def step(self) -> "GameOfLife":
        """Advance the simulation by one generation.

        Returns:
            New state for the next generation
        """
        next_grid = Grid(
            self._grid.width,
            self._grid.height,
            self._grid.wrap_edges,
            cells=self._apply_rules(),
        )
        return GameOfLife(next_grid, self._generation + 1)

    def _apply_rules(self) -> np.ndarray:
        """Compute the next cell array from the current grid snapshot."""
        # Every count is taken from the current grid before anything is written
        neighbor_counts = self._grid.count_all_neighbors()
        alive = self._grid.cells > 0

        # Birth: dead cell with exactly 3 neighbors
        birth_mask = ~alive & (neighbor_counts == 3)

        # Survival: live cell with 2 or 3 neighbors
        survive_mask = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))

        return birth_mask | survive_mask

    def run(self, generations: int) -> Iterator["GameOfLife"]:
        """Yield the next ``generations`` states in order.

        The current state itself is not yielded.
        """
        state = self
        for _ in range(generations):
            state = state.step()
            yield state

    def run_until_stable(self, max_generations: int = 10000) -> SimulationResult:
        """Run simulation until it becomes stable or cycles.

        A still life is reported as a cycle of length 1.

        Args:
            max_generations: Maximum generations to run

        Returns:
            SimulationResult with the last state reached and why the run stopped
        """
        seen: Dict[Grid, int] = {self._grid: self._generation}
        state = self

        for _ in range(max_generations):
            state = state.step()

            if state.population == 0:
                return SimulationResult(state, "extinction")

            first_occurrence = seen.get(state.grid)
            if first_occurrence is not None:
                return SimulationResult(
                    state,
                    "cycle",
                    cycle_start=first_occurrence,
                    cycle_length=state.generation - first_occurrence,
                )
            seen[state.grid] = state.generation

        return SimulationResult(state, "max_generations")

    def get_statistics(self) -> Dict[str, Any]:
        """Get summary statistics for the current generation.

        Returns:
            Dictionary with various statistics
        """
        area = self._grid.width * self._grid.height
        bbox: Optional[Tuple[int, int, int, int]] = self._grid.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self._generation,
            "population": self.population,
            "grid_size": self._grid.shape,
            "wrapping": self.wrapping,
            "population_density": self.population / area if area else 0.0,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats

    def render(self) -> str:
        """Text rendering: a generation header line, then the grid layout."""
        return f"Generation {self._generation}\n{self._grid.to_layout()}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameOfLife):
            return NotImplemented
        return self._generation == other._generation and self._grid == other._grid

    def __hash__(self) -> int:
        return hash((self._generation, self._grid))

    def __repr__(self) -> str:
        return f"GameOfLife(generation={self._generation}, grid={self._grid!r})"

    def __str__(self) -> str:
        return self.render()
