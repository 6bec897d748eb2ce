#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Simulation, PatternLibrary


def main():
    """Run a glider across a small grid and print each generation."""
    sim = Simulation(width=12, height=12)

    glider = PatternLibrary().get_pattern("Glider")
    glider.apply_to_grid(sim.grid, offset_x=1, offset_y=1)

    print("Initial state:")
    print(sim.grid.to_text(alive="*", dead="."))
    print()

    for _ in range(8):
        sim.step()
        print(f"Generation {sim.generation} (population {sim.population}):")
        print(sim.grid.to_text(alive="*", dead="."))
        print()


if __name__ == "__main__":
    main()
