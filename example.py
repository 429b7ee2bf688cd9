#!/usr/bin/env python3
"""
Example usage of the wayoflife package.
"""

from wayoflife import GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the wayoflife package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    # Glider in the middle of a 12x12 torus
    game = GameOfLife(glider.to_grid(12, 12, offset_x=5, offset_y=5, wrap_edges=True))
    print(game.render())

    # Earlier states stay valid, so the whole history can be kept
    history = [game]
    for state in game.run(8):
        print(state.render())
        history.append(state)

    print(f"Kept {len(history)} generations, first population {history[0].population}, "
          f"last population {history[-1].population}")

    # A seeded random start always plays out the same way
    result = GameOfLife.random(20, 20, seed=1234).run_until_stable(max_generations=2000)
    print(f"Random 20x20 (seed 1234): {result.reason} at generation {result.final.generation}")
    if result.reason == "cycle":
        print(f"Cycle length: {result.cycle_length}")

    print("Final statistics:")
    for key, value in result.final.get_statistics().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
