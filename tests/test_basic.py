"""Basic tests for the wayoflife package."""

from wayoflife import Cell, GameOfLife, Grid, InvalidLayoutError, PatternLibrary


def test_grid_creation():
    """Test basic grid creation and cell access."""
    grid = Grid.from_layout("...\n.#.\n")
    assert grid.width == 3
    assert grid.height == 2
    assert grid.get_cell(0, 0) is False
    assert grid.get_cell(1, 1) is True


def test_cell_value():
    """Test that cells compare by value and cannot be changed."""
    assert Cell(True) == Cell(True)
    assert Cell(True).glyph == "#"
    assert Cell.from_glyph("x") == Cell(False)


def test_game_creation():
    """Test basic game creation."""
    game = GameOfLife.random(5, 5, seed=0)
    assert game.generation == 0
    assert 0 <= game.population <= 25


def test_invalid_layout_exported():
    """Test that the layout error is importable from the package root."""
    assert issubclass(InvalidLayoutError, ValueError)


def test_pattern_library():
    """Test pattern library has some patterns."""
    library = PatternLibrary()
    patterns = library.list_patterns()
    assert len(patterns) > 0
    assert "Glider" in patterns


def test_blinker_pattern():
    """Test the blinker pattern oscillates correctly."""
    game = GameOfLife.from_layout(".....\n..#..\n..#..\n..#..\n.....\n")
    assert game.population == 3

    # Step once - should become horizontal
    game = game.step()
    assert game.population == 3
    assert game.grid.get_cell(1, 2) is True
    assert game.grid.get_cell(2, 2) is True
    assert game.grid.get_cell(3, 2) is True

    # Step again - should return to vertical
    game = game.step()
    assert game.population == 3
    assert game.grid.get_cell(2, 1) is True
    assert game.grid.get_cell(2, 2) is True
    assert game.grid.get_cell(2, 3) is True
