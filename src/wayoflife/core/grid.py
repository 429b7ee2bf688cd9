"""Immutable grid data structure for the Game of Life."""

from typing import Iterable, Optional, Sequence, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F

from .cell import ALIVE, ALIVE_GLYPH, DEAD, DEAD_GLYPH, Cell

# Moore neighborhood, center excluded
_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class InvalidLayoutError(ValueError):
    """Raised when the rows of a layout do not all have the same length."""


def _is_alive(value: Union[Cell, bool, int]) -> bool:
    if isinstance(value, Cell):
        return value.alive
    return bool(value)


class Grid:
    """A fixed-size 2D grid of cells for one generation.

    Cells are stored row-major in a read-only numpy array of shape
    ``(height, width)``; 1 means alive. A grid never changes after
    construction, the next generation is always a new grid. Edges either
    wrap around (toroidal topology) or are bounded, where everything past
    the border counts as dead.
    """

    def __init__(
        self,
        width: int,
        height: int,
        wrap_edges: bool = False,
        cells: Optional[np.ndarray] = None,
    ) -> None:
        """Initialize a new grid.

        Args:
            width: Number of columns
            height: Number of rows
            wrap_edges: Whether edges wrap around (toroidal topology)
            cells: Optional array of shape (height, width); non-zero entries are alive.
                The array is copied. All cells are dead when omitted.

        Raises:
            ValueError: If a dimension is negative or ``cells`` has the wrong shape
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        if cells is None:
            data = np.zeros((height, width), dtype=np.int8)
        else:
            data = (np.asarray(cells) > 0).astype(np.int8)
            if data.shape != (height, width):
                raise ValueError(f"Cell data shape {data.shape} doesn't match grid ({height}, {width})")

        data.flags.writeable = False
        self._width = width
        self._height = height
        self._wrap_edges = wrap_edges
        self._cells = data

        # Set single-threaded; steps run synchronously
        torch.set_num_threads(1)

    @classmethod
    def empty(cls, width: int, height: int, wrap_edges: bool = False) -> "Grid":
        """Create a grid with every cell dead."""
        return cls(width, height, wrap_edges)

    @classmethod
    def random(cls, width: int, height: int, seed: int, wrap_edges: bool = False) -> "Grid":
        """Create a randomly populated grid.

        One bit is drawn per cell, row by row, from a numpy generator seeded
        with ``seed``; a cell is alive when its bit is 0. The same seed always
        produces the same grid.

        Args:
            width: Number of columns
            height: Number of rows
            seed: Seed for the random bit stream
            wrap_edges: Whether edges wrap around

        Returns:
            New Grid instance
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        rng = np.random.default_rng(seed)
        bits = rng.integers(0, 2, size=(height, width))
        return cls(width, height, wrap_edges, cells=bits == 0)

    @classmethod
    def from_layout(cls, layout: str, wrap_edges: bool = False) -> "Grid":
        """Create a grid from a text layout.

        Each line is one row, top to bottom. ``#`` is a living cell and any
        other character is dead. A trailing line break does not add a row.

        Args:
            layout: Text block of equally long lines
            wrap_edges: Whether edges wrap around

        Returns:
            New Grid instance

        Raises:
            InvalidLayoutError: If a line's length differs from the first line's
        """
        # Only "\n" and "\r\n" break lines; every other character is a cell
        lines = [line[:-1] if line.endswith("\r") else line for line in layout.split("\n")]
        if lines[-1] == "":
            lines.pop()
        if not lines:
            return cls(0, 0, wrap_edges)

        width = len(lines[0])
        for row_number, line in enumerate(lines[1:], start=2):
            if len(line) != width:
                raise InvalidLayoutError(
                    f"invalid layout: inconsistent row length "
                    f"(row {row_number} has {len(line)} characters, expected {width})"
                )

        cells = np.array([[char == ALIVE_GLYPH for char in line] for line in lines], dtype=bool)
        return cls(width, len(lines), wrap_edges, cells=cells.reshape(len(lines), width))

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Union[Cell, bool]]], wrap_edges: bool = False) -> "Grid":
        """Create a grid from rows of cells (or truthy values).

        Raises:
            InvalidLayoutError: If the rows differ in length
        """
        rows = [list(row) for row in rows]
        if not rows:
            return cls(0, 0, wrap_edges)

        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidLayoutError("invalid layout: inconsistent row length")

        cells = np.array([[_is_alive(value) for value in row] for row in rows], dtype=bool)
        return cls(width, len(rows), wrap_edges, cells=cells.reshape(len(rows), width))

    @classmethod
    def from_coordinates(
        cls,
        width: int,
        height: int,
        coordinates: Iterable[Tuple[int, int]],
        wrap_edges: bool = False,
    ) -> "Grid":
        """Create a grid with living cells at the given (x, y) coordinates.

        Coordinates wrap around on a toroidal grid; on a bounded grid the ones
        falling outside are skipped.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        cells = np.zeros((height, width), dtype=np.int8)
        for x, y in coordinates:
            if wrap_edges and width > 0 and height > 0:
                x, y = x % width, y % height
            elif not (0 <= x < width and 0 <= y < height):
                continue
            cells[y, x] = 1

        return cls(width, height, wrap_edges, cells=cells)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def wrap_edges(self) -> bool:
        """Whether edges wrap around."""
        return self._wrap_edges

    @property
    def cells(self) -> np.ndarray:
        """Read-only (height, width) cell array."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Rows of cells, top to bottom.

        The result is built from tuples, so it cannot be used to modify the grid.
        """
        return tuple(tuple(ALIVE if value else DEAD for value in row) for row in self._cells)

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds and wrap_edges is False,
                or the grid is empty
        """
        if self._wrap_edges and self._cells.size:
            x = x % self._width
            y = y % self._height
        elif not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds")

        return bool(self._cells[y, x])

    def get_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        On a toroidal grid every cell has eight neighbors; on grids narrower
        than three cells the same position may be counted more than once.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy

                if self._wrap_edges:
                    count += int(self._cells[ny % self._height, nx % self._width])
                elif 0 <= nx < self._width and 0 <= ny < self._height:
                    count += int(self._cells[ny, nx])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch convolution.

        Returns:
            (height, width) array with the living-neighbor count of each cell
        """
        if self._cells.size == 0:
            return np.zeros((self._height, self._width), dtype=np.int8)

        board = torch.from_numpy(self._cells.astype(np.float32)).reshape(1, 1, self._height, self._width)

        if self._wrap_edges:
            # Circular padding is the modulo wrap of row/column -1 and width/height
            padded = F.pad(board, (1, 1, 1, 1), mode="circular")
            neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)
        else:
            neighbors = F.conv2d(board, _NEIGHBOR_KERNEL, padding=1)

        return neighbors[0, 0].round().numpy().astype(np.int8)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self._cells)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def to_list(self) -> list:
        """Convert grid to a nested list of rows of 0/1 values."""
        return self._cells.tolist()

    def to_layout(self) -> str:
        """Render the grid as text, one line per row, each ending with a line break."""
        return "".join(
            "".join(ALIVE_GLYPH if value else DEAD_GLYPH for value in row) + "\n" for row in self._cells
        )

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.shape == other.shape
            and self._wrap_edges == other._wrap_edges
            and np.array_equal(self._cells, other._cells)
        )

    def __hash__(self) -> int:
        return hash((self.shape, self._wrap_edges, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, wrap_edges={self._wrap_edges})"

    def __str__(self) -> str:
        """Text layout showing living cells as '#' and dead as '.'."""
        return self.to_layout()
