"""Well-known Game of Life seed patterns."""

import logging
from typing import Dict, List, Optional, Tuple

from .grid import Cell, GridLike

logger = logging.getLogger(__name__)


class Pattern:
    """A named set of living cells relative to the pattern origin."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    def apply_to_grid(self, grid: GridLike, offset_x: int = 0, offset_y: int = 0, commit: bool = True) -> int:
        """Replace the grid contents with this pattern.

        Every living cell is staged dead, the pattern cells are staged alive,
        and the result is committed unless ``commit`` is False.

        Args:
            grid: Target grid
            offset_x: Horizontal offset
            offset_y: Vertical offset
            commit: Whether to commit the staged cells

        Returns:
            Number of pattern cells that landed on the grid
        """
        grid.clear()

        placed = 0
        for x, y in self.cells:
            px, py = x + offset_x, y + offset_y
            if not grid.in_bounds(px, py):
                continue
            grid.set(px, py, Cell.ALIVE)
            placed += 1

        if placed < len(self.cells):
            logger.debug("Pattern %s: %d cells fell outside the grid", self.name, len(self.cells) - placed)

        if commit:
            grid.commit()
        return placed

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def centered_offset(self, grid: GridLike) -> Tuple[int, int]:
        """Offset that places the pattern in the middle of a grid."""
        width, height = self.get_size()
        return (max(0, (grid.width - width) // 2), max(0, (grid.height - height) // 2))

    @classmethod
    def from_grid(cls, grid: GridLike, name: str, description: str = "") -> "Pattern":
        """Capture the committed living cells of a grid as a pattern."""
        cells = [(x, y) for x, y in grid.coordinates() if grid.get(x, y) is Cell.ALIVE]
        return cls(name, cells, description)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


_BUILTIN_PATTERNS = {
    "Still Life": [
        ("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"),
        ("Beehive", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)], "Beehive still life"),
        ("Loaf", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (3, 2), (2, 3)], "Loaf still life"),
    ],
    "Oscillators": [
        ("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"),
        ("Toad", [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)], "Period-2 oscillator"),
        ("Beacon", [(0, 0), (1, 0), (0, 1), (3, 2), (2, 3), (3, 3)], "Period-2 oscillator"),
    ],
    "Spaceships": [
        ("Glider", [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)], "Smallest spaceship, period-4"),
    ],
    "Methuselahs": [
        ("R-pentomino", [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)], "Stabilizes after 1103 generations"),
    ],
}


class PatternLibrary:
    """Collection of named patterns, preloaded with common ones."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        for entries in _BUILTIN_PATTERNS.values():
            for name, cells, description in entries:
                self.add_pattern(Pattern(name, cells, description))

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern, replacing any pattern with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name (case-insensitive)

        Returns:
            Pattern instance or None if not found
        """
        pattern = self._patterns.get(name)
        if pattern is None:
            lowered = name.lower()
            for candidate in self._patterns.values():
                if candidate.name.lower() == lowered:
                    return candidate
        return pattern

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists; patterns
            added at run time are listed under "Custom"
        """
        categories = {category: [entry[0] for entry in entries] for category, entries in _BUILTIN_PATTERNS.items()}
        builtin = {name for names in categories.values() for name in names}
        custom = [name for name in self._patterns if name not in builtin]
        if custom:
            categories["Custom"] = custom
        return categories
