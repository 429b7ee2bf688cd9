"""Tests for the Pattern and PatternLibrary classes."""

from wayoflife.core.game import GameOfLife
from wayoflife.core.grid import Grid
from wayoflife.core.patterns import Pattern, PatternLibrary


class TestPattern:
    """Test cases for the Pattern class."""

    def test_initialization(self):
        """Test pattern initialization."""
        cells = [(0, 0), (1, 0), (2, 0)]
        pattern = Pattern("Blinker", cells, "Period-2 oscillator")

        assert pattern.name == "Blinker"
        assert pattern.cells == cells
        assert pattern.description == "Period-2 oscillator"
        assert pattern.metadata == {}

    def test_to_grid(self):
        """Test placing a pattern on a grid."""
        pattern = Pattern("Line", [(0, 0), (1, 0), (2, 0)])

        grid = pattern.to_grid(10, 10)

        assert grid.shape == (10, 10)
        assert grid.get_cell(0, 0)
        assert grid.get_cell(1, 0)
        assert grid.get_cell(2, 0)
        assert not grid.get_cell(0, 1)
        assert grid.population == 3

    def test_to_grid_with_offset(self):
        """Test placing a pattern with an offset."""
        pattern = Pattern("Line", [(0, 0), (1, 0), (2, 0)])

        grid = pattern.to_grid(10, 10, offset_x=5, offset_y=3)

        assert grid.get_cell(5, 3)
        assert grid.get_cell(6, 3)
        assert grid.get_cell(7, 3)
        assert not grid.get_cell(0, 0)
        assert grid.population == 3

    def test_to_grid_out_of_bounds(self):
        """Test that cells beyond a bounded grid are dropped."""
        pattern = Pattern("Line", [(0, 0), (1, 0), (2, 0), (3, 0)])

        grid = pattern.to_grid(3, 3)

        assert grid.population == 3  # Fourth cell skipped

    def test_to_grid_wraps(self):
        """Test that cells beyond a toroidal grid wrap around."""
        pattern = Pattern("Line", [(0, 0), (1, 0), (2, 0), (3, 0)])

        grid = pattern.to_grid(3, 3, wrap_edges=True)

        assert grid.wrap_edges is True
        assert grid.population == 3  # Fourth cell lands on (0, 0)
        assert grid.get_cell(0, 0)

    def test_to_layout(self):
        """Test rendering a pattern as its smallest layout."""
        glider = Pattern("Glider", [(6, 5), (7, 6), (5, 7), (6, 7), (7, 7)])

        assert glider.to_layout() == ".#.\n..#\n###\n"
        assert Pattern("Nothing", []).to_layout() == ""

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        assert Pattern("Empty", []).get_bounding_box() == (0, 0, 0, 0)
        assert Pattern("Single", [(5, 3)]).get_bounding_box() == (5, 3, 5, 3)
        assert Pattern("Spread", [(0, 2), (3, 0), (1, 4)]).get_bounding_box() == (0, 0, 3, 4)

    def test_get_size(self):
        """Test pattern size calculation."""
        assert Pattern("Single", [(5, 3)]).get_size() == (1, 1)
        assert Pattern("Rect", [(0, 0), (2, 1)]).get_size() == (3, 2)

    def test_normalize(self):
        """Test coordinate normalization."""
        pattern = Pattern("Offset", [(5, 5), (6, 5), (7, 5)], "desc", {"k": 1})
        normalized = pattern.normalize()

        assert normalized.cells == [(0, 0), (1, 0), (2, 0)]
        assert normalized.name == pattern.name
        assert normalized.metadata == {"k": 1}
        assert normalized.metadata is not pattern.metadata
        assert Pattern("Empty", []).normalize().cells == []

    def test_from_grid(self):
        """Test creating a pattern from the living cells of a grid."""
        grid = Grid.from_layout(".....\n.###.\n.....\n")

        pattern = Pattern.from_grid(grid, "From Grid", "Test pattern")

        assert pattern.name == "From Grid"
        assert pattern.cells == [(1, 1), (2, 1), (3, 1)]
        assert pattern.metadata["source_grid_size"] == (5, 3)
        assert pattern.metadata["population"] == 3

    def test_from_grid_round_trip(self):
        """Test that a pattern taken from a grid places back identically."""
        grid = Grid.random(9, 7, seed=21)

        pattern = Pattern.from_grid(grid, "Snapshot")

        assert pattern.to_grid(9, 7) == grid


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self):
        """Test that built-in patterns are loaded."""
        library = PatternLibrary()

        assert len(library.get_pattern("Block").cells) == 4
        assert len(library.get_pattern("Blinker").cells) == 3
        assert len(library.get_pattern("Glider").cells) == 5
        assert len(library.get_pattern("Pulsar").cells) == 48
        assert library.get_pattern("Pulsar").get_size() == (13, 13)

    def test_add_and_get_pattern(self):
        """Test adding custom patterns."""
        library = PatternLibrary()
        pattern = Pattern("Diagonal", [(0, 0), (1, 1), (2, 2)], "Test diagonal")

        library.add_pattern(pattern)

        assert library.get_pattern("Diagonal") is pattern
        assert "Diagonal" in library.list_patterns()
        assert library.get_pattern("NonExistent") is None

    def test_patterns_by_category(self):
        """Test category grouping, with custom patterns collected separately."""
        library = PatternLibrary()
        categories = library.get_patterns_by_category()

        assert "Block" in categories["Still Life"]
        assert "Glider" in categories["Spaceships"]
        assert "Custom" not in categories

        library.add_pattern(Pattern("Mine", [(0, 0)]))
        assert library.get_patterns_by_category()["Custom"] == ["Mine"]

    def test_still_lifes_are_stable(self):
        """Test that every still life pattern survives a step unchanged."""
        library = PatternLibrary()

        for name in library.get_patterns_by_category()["Still Life"]:
            game = GameOfLife(library.get_pattern(name).to_grid(8, 8, 2, 2))
            assert game.step().grid == game.grid, name

    def test_oscillators_return(self):
        """Test that period-2 oscillators come back after two steps."""
        library = PatternLibrary()

        for name in ("Blinker", "Toad", "Beacon"):
            game = GameOfLife(library.get_pattern(name).to_grid(8, 8, 2, 2))
            first, second = game.run(2)
            assert first.grid != game.grid, name
            assert second.grid == game.grid, name
