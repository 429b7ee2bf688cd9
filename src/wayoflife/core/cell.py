"""Cell value type and the glyphs used for text layouts."""

from dataclasses import dataclass

ALIVE_GLYPH = "#"
DEAD_GLYPH = "."


@dataclass(frozen=True)
class Cell:
    """A single grid cell. Immutable; a new generation builds new rows of cells."""

    alive: bool

    @property
    def glyph(self) -> str:
        """Layout character for this cell."""
        return ALIVE_GLYPH if self.alive else DEAD_GLYPH

    @classmethod
    def from_glyph(cls, char: str) -> "Cell":
        """Map a layout character to a cell; anything but the alive glyph is dead."""
        return ALIVE if char == ALIVE_GLYPH else DEAD


ALIVE = Cell(True)
DEAD = Cell(False)
