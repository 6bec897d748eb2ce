"""Conway's Game of Life on a fixed-size grid with staged, atomic updates."""

__version__ = "0.1.0"

from .core.grid import Cell, CellHolder, Grid, GridLike, OutOfBoundsError, SparseGrid
from .core.simulation import Simulation
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "CellHolder",
    "Grid",
    "GridLike",
    "OutOfBoundsError",
    "SparseGrid",
    "Simulation",
    "Pattern",
    "PatternLibrary",
]
