"""Conway's Game of Life simulation engine."""

import logging
from typing import Iterable, Optional, Tuple

from .grid import Cell, Grid, GridLike

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 12
DEFAULT_HEIGHT = 12


def next_cell(neighbors: int) -> Optional[Cell]:
    """Apply the Game of Life rule to a neighbor count.

    Args:
        neighbors: Number of living neighbors (0-8)

    Returns:
        The state to stage, or None when the cell keeps its current state
    """
    if neighbors == 2:
        return None
    if neighbors == 3:
        return Cell.ALIVE
    # Underpopulation (0-1) or overpopulation (4+)
    return Cell.DEAD


class Simulation:
    """Derives each generation from the previous one.

    Implements the classic rules:
    - Cell with 0-1 or 4+ neighbors dies or stays dead
    - Cell with exactly 2 neighbors keeps its state
    - Cell with exactly 3 neighbors survives or is born

    All decisions for a generation are staged on the grid and applied with a
    single commit, so every cell is judged against the same snapshot.
    """

    def __init__(
        self,
        grid: Optional[GridLike] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        """Initialize the simulation.

        Args:
            grid: Grid to simulate; a dense Grid(width, height) is created if omitted
            width: Width of the created grid
            height: Height of the created grid
        """
        self._grid = grid if grid is not None else Grid(width, height)
        self._generation = 0

    @property
    def grid(self) -> GridLike:
        """The simulated grid."""
        return self._grid

    @property
    def generation(self) -> int:
        """Number of generations advanced so far."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._grid.population

    def step(self) -> None:
        """Advance the simulation by one generation."""
        grid = self._grid

        if grid.has_pending:
            logger.debug("Committing staged edits before generation %d", self._generation + 1)
            grid.commit()

        # Counts come from committed state only, so staging below cannot affect them
        neighbor_counts = grid.neighbor_counts()

        for x, y in grid.coordinates():
            cell = next_cell(int(neighbor_counts[x, y]))
            if cell is not None:
                grid.set(x, y, cell)

        grid.commit()
        self._generation += 1
        logger.debug("Advanced to generation %d (population %d)", self._generation, grid.population)

    def run(self, generations: int) -> int:
        """Advance the simulation by several generations.

        Args:
            generations: Number of generations to run

        Returns:
            The generation reached

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"Generations must be non-negative, got {generations}")

        for _ in range(generations):
            self.step()
        return self._generation

    def seed(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Bring cells to life and commit them.

        Args:
            cells: (x, y) coordinates to activate

        Raises:
            OutOfBoundsError: If any coordinate lies outside the grid; nothing is staged
        """
        coords = list(cells)
        for x, y in coords:
            self._grid.get(x, y)

        for x, y in coords:
            self._grid.set(x, y, Cell.ALIVE)
        self._grid.commit()

    def reset(self) -> None:
        """Kill every cell and restart the generation count."""
        self._grid.clear()
        self._grid.commit()
        self._generation = 0
