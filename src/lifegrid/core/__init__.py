"""Core grid and simulation logic."""

from .grid import Cell, CellHolder, Grid, GridLike, OutOfBoundsError, SparseGrid
from .simulation import Simulation, next_cell
from .patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "CellHolder",
    "Grid",
    "GridLike",
    "OutOfBoundsError",
    "SparseGrid",
    "Simulation",
    "next_cell",
    "Pattern",
    "PatternLibrary",
]
