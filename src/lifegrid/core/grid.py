"""Grid data structures for Conway's Game of Life.

Every grid keeps two layers of state per cell: the committed value that
readers see, and an optional pending value staged by ``set``. Staged values
only become visible when ``commit`` applies all of them at once, so a full
rule sweep always reads one consistent generation.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)

# Marker stored in the dense pending array for "nothing staged"
_NOTHING_STAGED = -1

_MOORE_OFFSETS = tuple((dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0))


class Cell(Enum):
    """State of a single cell."""

    DEAD = 0
    ALIVE = 1

    def __bool__(self) -> bool:
        return self is Cell.ALIVE

    @classmethod
    def from_bool(cls, alive: bool) -> "Cell":
        """Convert a truth value to a cell state."""
        return cls.ALIVE if alive else cls.DEAD


@dataclass
class CellHolder:
    """A committed cell value paired with an optional staged replacement."""

    cell: Cell = Cell.DEAD
    pending: Optional[Cell] = None

    def stage(self, cell: Cell) -> None:
        self.pending = cell

    def apply(self) -> bool:
        """Move the staged value into the committed slot.

        Returns:
            True if a staged value was applied
        """
        if self.pending is None:
            return False
        self.cell = self.pending
        self.pending = None
        return True


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the grid.

    The offending coordinate is available as ``x`` and ``y``.
    """

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"cell ({x}, {y}) is out of bounds of the grid")
        self._x = x
        self._y = y

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def __reduce__(self):
        return (type(self), (self._x, self._y))


def _validate_extent(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"Grid {name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"Grid {name} must be at least 1, got {value}")
    return int(value)


class GridLike(ABC):
    """Contract shared by all grid storage layouts.

    Subclasses provide storage (``get``, ``set``, ``pending``, ``commit`` and
    the two extents). Neighbor counting, rendering and the other helpers are
    implemented here once against that contract.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize grid extents.

        Args:
            width: Number of columns (at least 1)
            height: Number of rows (at least 1)

        Raises:
            ValueError: If either extent is not a positive integer
        """
        self._width = _validate_extent("width", width)
        self._height = _validate_extent("height", height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return (self._width, self._height)

    @abstractmethod
    def get(self, x: int, y: int) -> Cell:
        """Return the committed state of a cell.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid
        """

    @abstractmethod
    def set(self, x: int, y: int, cell: Cell) -> None:
        """Stage a new state for a cell without making it visible.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid
        """

    @abstractmethod
    def pending(self, x: int, y: int) -> Optional[Cell]:
        """Return the staged state of a cell, or None if nothing is staged.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid
        """

    @abstractmethod
    def commit(self) -> None:
        """Apply every staged state at once and clear the staging slots."""

    def holder(self, x: int, y: int) -> CellHolder:
        """Return a snapshot of the committed and staged state of a cell.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid
        """
        return CellHolder(self.get(x, y), self.pending(x, y))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies inside the grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        for value in (x, y):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"Coordinates must be integers, got ({x!r}, {y!r})")
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y)

    @staticmethod
    def _check_cell(cell: Cell) -> None:
        if not isinstance(cell, Cell):
            raise TypeError(f"Expected a Cell, got {cell!r}")

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Iterate over every coordinate, row by row.

        Yields:
            (x, y) tuples with y increasing slowest
        """
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y)

    def neighbor_count(self, x: int, y: int) -> int:
        """Count living neighbors of a cell in the committed state.

        Neighbors that fall outside the grid are treated as dead; edges do
        not wrap around.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)

        Raises:
            OutOfBoundsError: If (x, y) itself lies outside the grid
        """
        self._check_bounds(x, y)

        count = 0
        for dx, dy in _MOORE_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and self.get(nx, ny) is Cell.ALIVE:
                count += 1
        return count

    def neighbor_counts(self) -> np.ndarray:
        """Count living neighbors for every cell.

        Returns:
            Integer array shaped (width, height), indexed [x, y]
        """
        counts = np.zeros(self.shape, dtype=np.int8)
        for x, y in self.coordinates():
            counts[x, y] = self.neighbor_count(x, y)
        return counts

    @property
    def population(self) -> int:
        """Number of living cells in the committed state."""
        return sum(1 for x, y in self.coordinates() if self.get(x, y) is Cell.ALIVE)

    @property
    def has_pending(self) -> bool:
        """Whether any cell has a staged value."""
        return any(self.pending(x, y) is not None for x, y in self.coordinates())

    def clear(self) -> None:
        """Stage every living or already staged cell as dead.

        Nothing changes until the next commit.
        """
        for x, y in self.coordinates():
            if self.get(x, y) is Cell.ALIVE or self.pending(x, y) is not None:
                self.set(x, y, Cell.DEAD)

    def to_array(self) -> np.ndarray:
        """Copy the committed state into a new (width, height) int8 array."""
        data = np.zeros(self.shape, dtype=np.int8)
        for x, y in self.coordinates():
            data[x, y] = self.get(x, y).value
        return data

    def to_text(self, alive: str = "X", dead: str = "O") -> str:
        """Render the committed state with one line per row.

        Args:
            alive: Glyph for living cells
            dead: Glyph for dead cells
        """
        rows = []
        for y in range(self._height):
            rows.append("".join(alive if self.get(x, y) is Cell.ALIVE else dead for x in range(self._width)))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._width}, {self._height})"


class Grid(GridLike):
    """Dense grid backed by numpy arrays.

    Committed states live in one int8 array and staged states in a second one
    of the same shape, where -1 marks a cell with nothing staged. Neighbor
    counts for the whole grid come from a PyTorch convolution.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows
        """
        super().__init__(width, height)
        self._cells = np.zeros(self.shape, dtype=np.int8)
        self._pending = np.full(self.shape, _NOTHING_STAGED, dtype=np.int8)

        # Reused input buffer and 3x3 Moore kernel for neighbor_counts()
        self._torch_input = torch.zeros(1, 1, self.height, self.width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        logger.debug("Created dense %dx%d grid", self.width, self.height)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the committed cell array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def get(self, x: int, y: int) -> Cell:
        self._check_bounds(x, y)
        return Cell(int(self._cells[x, y]))

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._check_bounds(x, y)
        self._check_cell(cell)
        self._pending[x, y] = cell.value

    def pending(self, x: int, y: int) -> Optional[Cell]:
        self._check_bounds(x, y)
        value = int(self._pending[x, y])
        return None if value == _NOTHING_STAGED else Cell(value)

    def commit(self) -> None:
        staged = self._pending != _NOTHING_STAGED
        applied = int(np.count_nonzero(staged))
        if applied:
            self._cells[staged] = self._pending[staged]
            self._pending.fill(_NOTHING_STAGED)
        logger.debug("Committed %d staged cells", applied)

    def neighbor_counts(self) -> np.ndarray:
        """Count neighbors for all cells using a PyTorch convolution.

        Returns:
            Integer array shaped (width, height), indexed [x, y]
        """
        # PyTorch expects (height, width), so transpose on the way in and out
        self._torch_input[0, 0] = torch.from_numpy(self._cells.T.astype(np.float32))

        # Zero padding keeps off-grid neighbors dead
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8).T

    @property
    def population(self) -> int:
        return int(np.count_nonzero(self._cells))

    @property
    def has_pending(self) -> bool:
        return bool(np.any(self._pending != _NOTHING_STAGED))

    def clear(self) -> None:
        self._pending[(self._cells != 0) | (self._pending != _NOTHING_STAGED)] = Cell.DEAD.value

    def to_array(self) -> np.ndarray:
        return self._cells.copy()


class SparseGrid(GridLike):
    """Grid that stores only living or staged cells in a dictionary.

    Suited to large grids with few living cells. Absent coordinates are dead
    with nothing staged.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self._holders: Dict[Tuple[int, int], CellHolder] = {}
        logger.debug("Created sparse %dx%d grid", self.width, self.height)

    def get(self, x: int, y: int) -> Cell:
        self._check_bounds(x, y)
        holder = self._holders.get((x, y))
        return holder.cell if holder else Cell.DEAD

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._check_bounds(x, y)
        self._check_cell(cell)
        self._holders.setdefault((x, y), CellHolder()).stage(cell)

    def pending(self, x: int, y: int) -> Optional[Cell]:
        self._check_bounds(x, y)
        holder = self._holders.get((x, y))
        return holder.pending if holder else None

    def commit(self) -> None:
        applied = sum(1 for holder in self._holders.values() if holder.apply())
        self._holders = {coord: holder for coord, holder in self._holders.items() if holder.cell is Cell.ALIVE}
        logger.debug("Committed %d staged cells", applied)

    def living_cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate over coordinates of living cells in the committed state."""
        for coord, holder in self._holders.items():
            if holder.cell is Cell.ALIVE:
                yield coord

    def neighbor_counts(self) -> np.ndarray:
        # Spread each living cell into its neighbors instead of scanning every cell
        counts = np.zeros(self.shape, dtype=np.int8)
        for x, y in self.living_cells():
            for dx, dy in _MOORE_OFFSETS:
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    counts[nx, ny] += 1
        return counts

    @property
    def population(self) -> int:
        return sum(1 for _ in self.living_cells())

    @property
    def has_pending(self) -> bool:
        return any(holder.pending is not None for holder in self._holders.values())

    def clear(self) -> None:
        for holder in self._holders.values():
            holder.stage(Cell.DEAD)
