"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import Optional

from ..core.game import GameOfLife, SimulationResult
from ..core.grid import Grid, InvalidLayoutError
from ..core.patterns import PatternLibrary


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_game(
        self,
        width: int,
        height: int,
        seed: int,
        toroidal: bool,
        layout: Optional[str] = None,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
        verbose: bool = False,
    ) -> GameOfLife:
        """Create the initial simulation state.

        A layout takes precedence over a pattern, and a pattern over the
        seeded random fill.

        Args:
            width: Grid width (ignored for layouts)
            height: Grid height (ignored for layouts)
            seed: Seed for the random fill
            toroidal: Whether grid edges wrap around
            layout: Optional text layout
            pattern: Optional pattern name to place on an empty grid
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            verbose: Print setup information

        Returns:
            GameOfLife at generation 0

        Raises:
            InvalidLayoutError: If the layout rows differ in length
            ValueError: If the pattern is unknown
        """
        if layout is not None:
            game = GameOfLife.from_layout(layout, wrapping=toroidal)
            if verbose:
                print(f"Loaded {game.width}x{game.height} layout (toroidal: {toroidal})")
            return game

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            if verbose:
                print(f"Loading pattern '{pattern}' at ({pattern_x}, {pattern_y}) on {width}x{height} grid")
            grid = loaded_pattern.to_grid(width, height, pattern_x, pattern_y, wrap_edges=toroidal)
            return GameOfLife(grid)

        if verbose:
            print(f"Generating random {width}x{height} grid (seed: {seed}, toroidal: {toroidal})")
        return GameOfLife(Grid.random(width, height, seed, wrap_edges=toroidal))

    def run_animation(
        self,
        game: GameOfLife,
        generations: Optional[int] = None,
        delay: float = 1.0,
    ) -> GameOfLife:
        """Print each generation, pausing ``delay`` seconds between frames.

        Args:
            game: Starting state
            generations: Number of steps to take, or None to run until interrupted
            delay: Seconds to sleep between frames

        Returns:
            The last state printed
        """
        start_generation = game.generation
        while True:
            print(game.render(), end="", flush=True)
            if generations is not None and game.generation - start_generation >= generations:
                return game
            game = game.step()
            time.sleep(delay)

    def run_until_stable(self, game: GameOfLife, max_generations: int, verbose: bool = False) -> SimulationResult:
        """Run without intermediate output until extinction, a cycle or the generation limit."""
        if verbose:
            print(f"Initial population: {game.population} cells")
            print(f"Running simulation (max {max_generations} generations)...")

        start_time = time.time()
        result = game.run_until_stable(max_generations)
        duration = time.time() - start_time

        if verbose:
            print(f"Finished in {duration:.3f}s")

        return result

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 10x20 grid, one frame per second, forever
  wayoflife

  # Reproducible random 40x20 torus, 50 generations, fast
  wayoflife -W 40 -H 20 --seed 7 --toroidal -n 50 -d 0.1

  # Glider on a 20x20 toroidal grid
  wayoflife -W 20 -H 20 --pattern Glider --toroidal

  # Start from a text layout ('#' alive, anything else dead)
  wayoflife --layout start.txt

  # Find out how an R-pentomino ends
  wayoflife -W 80 -H 80 --pattern R-pentomino --until-stable --verbose

  # List available patterns
  wayoflife --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=10, help="Grid width (default: 10)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Grid height (default: 20)")

    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=1234,
        help="Seed for the random initial grid (default: 1234)",
    )

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Enable toroidal (wraparound) edges",
    )

    # Initial state configuration
    parser.add_argument(
        "--layout",
        type=str,
        help="Text file with the initial layout ('#' alive); sets the grid size",
    )

    parser.add_argument(
        "--pattern",
        type=str,
        help="Place a library pattern instead of a random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: centered)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: centered)",
    )

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        help="Number of generations to advance; the starting frame is shown too (default: run until interrupted)",
    )

    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=1.0,
        help="Seconds between generations (default: 1.0)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Run without animation until extinction or a cycle and print the outcome",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=10000,
        help="Generation limit for --until-stable (default: 10000)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print setup and progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_finish_reason(result: SimulationResult) -> str:
    """Format the simulation finish reason for display."""
    generations = result.final.generation
    if result.reason == "extinction":
        return f"Extinction after {generations} generations"
    if result.reason == "cycle":
        if result.cycle_length == 1:
            return f"Still life reached at generation {result.cycle_start}"
        return f"Cycle of length {result.cycle_length} detected (started at generation {result.cycle_start})"
    return f"Reached maximum generations ({generations})"


def print_results(result: SimulationResult, verbose: bool) -> None:
    """Print the final state and outcome of a run."""
    print(result.final.render(), end="")
    print(format_finish_reason(result))

    if verbose:
        stats = result.final.get_statistics()
        print(f"Population: {stats['population']} ({stats['population_density']:.2%} density)")
        if stats["bounding_box"] is not None:
            box_width, box_height = stats["bounding_box_size"]
            print(f"Bounding box: {box_width}x{box_height} at {stats['bounding_box'][:2]}")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.seed < 0:
        errors.append("Seed must be non-negative")

    if args.generations is not None and args.generations <= 0:
        errors.append("Generations must be positive")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if args.layout and args.pattern:
        errors.append("Use either --layout or --pattern, not both")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    layout = None
    if args.layout:
        try:
            with open(args.layout, "r", encoding="utf-8") as f:
                layout = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Cannot read layout file '{args.layout}': {e}")
            return 1

    if args.pattern:
        pattern = cli.pattern_library.get_pattern(args.pattern)
        if not pattern:
            available = cli.pattern_library.list_patterns()
            print(f"Error: Pattern '{args.pattern}' not found")
            print(f"Available patterns: {', '.join(available)}")
            print("Use --list-patterns to see detailed information")
            return 1

        # Auto-center pattern if no offset specified
        if args.pattern_x == 0 and args.pattern_y == 0:
            pattern_size = pattern.get_size()
            args.pattern_x = max(0, (args.width - pattern_size[0]) // 2)
            args.pattern_y = max(0, (args.height - pattern_size[1]) // 2)
            if args.verbose:
                print(f"Auto-centering pattern at ({args.pattern_x}, {args.pattern_y})")

    try:
        game = cli.build_game(
            width=args.width,
            height=args.height,
            seed=args.seed,
            toroidal=args.toroidal,
            layout=layout,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            verbose=args.verbose,
        )
    except InvalidLayoutError as e:
        print(f"Error: {e}")
        return 1

    try:
        if args.until_stable:
            result = cli.run_until_stable(game, args.max_generations, verbose=args.verbose)
            print_results(result, args.verbose)
        else:
            cli.run_animation(game, generations=args.generations, delay=args.delay)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
