"""Basic tests for the lifegrid package."""

import lifegrid
from lifegrid import Cell, Grid, PatternLibrary, Simulation


def test_package_exports():
    """Test the public names are importable from the package root."""
    for name in lifegrid.__all__:
        assert hasattr(lifegrid, name)


def test_grid_creation():
    """Test basic grid creation and staged cell operations."""
    grid = Grid(10, 10)
    assert grid.width == 10
    assert grid.height == 10
    assert grid.get(0, 0) is Cell.DEAD

    grid.set(5, 5, Cell.ALIVE)
    assert grid.get(5, 5) is Cell.DEAD

    grid.commit()
    assert grid.get(5, 5) is Cell.ALIVE


def test_simulation_creation():
    """Test basic simulation creation."""
    sim = Simulation(Grid(5, 5))
    assert sim.population == 0

    sim.seed([(2, 2)])
    assert sim.population == 1


def test_blinker_pattern():
    """Test the blinker pattern oscillates correctly."""
    sim = Simulation(width=5, height=5)
    PatternLibrary().get_pattern("Blinker").apply_to_grid(sim.grid, 1, 1)
    grid = sim.grid

    assert grid.to_text(alive="*", dead=".") == ".....\n.....\n.***.\n.....\n....."

    sim.step()
    assert sim.population == 3
    assert grid.get(2, 1) is Cell.ALIVE
    assert grid.get(2, 2) is Cell.ALIVE
    assert grid.get(2, 3) is Cell.ALIVE

    sim.step()
    assert grid.get(1, 2) is Cell.ALIVE
    assert grid.get(2, 2) is Cell.ALIVE
    assert grid.get(3, 2) is Cell.ALIVE
