"""Interactive terminal front end for Conway's Game of Life.

The grid is drawn after every command. An empty line advances one
generation, ``x y`` brings the cell at column x, row y to life, and ``q``
quits.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from ..core.grid import Grid, GridLike, OutOfBoundsError, SparseGrid
from ..core.patterns import PatternLibrary
from ..core.simulation import DEFAULT_HEIGHT, DEFAULT_WIDTH, Simulation

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("q", "quit", "exit")


@dataclass
class GridConfig:
    """Configuration for an interactive session."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    sparse: bool = False
    alive: str = "X"
    dead: str = "O"
    pattern: Optional[str] = None
    pattern_x: Optional[int] = None
    pattern_y: Optional[int] = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GridConfig":
        return cls(
            width=args.width,
            height=args.height,
            sparse=args.sparse,
            alive=args.alive,
            dead=args.dead,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
        )

    def create_grid(self) -> GridLike:
        grid_class = SparseGrid if self.sparse else Grid
        return grid_class(self.width, self.height)


def parse_coordinates(line: str) -> Tuple[int, int]:
    """Parse an ``x y`` command.

    Args:
        line: Input line with two integers separated by whitespace

    Returns:
        Tuple of (x, y)

    Raises:
        ValueError: If the line is not exactly two integers
    """
    parts = line.split()
    if len(parts) != 2:
        raise ValueError(f"Expected 'x y', got {line!r}")
    return int(parts[0]), int(parts[1])


class TerminalGameOfLife:
    """Read-draw loop driving a simulation from text input."""

    def __init__(self, config: Optional[GridConfig] = None, output: Optional[TextIO] = None) -> None:
        """Initialize the session.

        Args:
            config: Session configuration (defaults to a 12x12 dense grid)
            output: Stream to draw to (defaults to stdout)

        Raises:
            ValueError: If the configured pattern does not exist
        """
        self.config = config or GridConfig()
        self.output = output or sys.stdout
        self.simulation = Simulation(self.config.create_grid())

        if self.config.pattern:
            self._load_pattern(self.config.pattern)

    def _load_pattern(self, name: str) -> None:
        library = PatternLibrary()
        pattern = library.get_pattern(name)
        if pattern is None:
            raise ValueError(f"Pattern '{name}' not found. Available patterns: {', '.join(library.list_patterns())}")

        grid = self.simulation.grid
        offset_x, offset_y = pattern.centered_offset(grid)
        if self.config.pattern_x is not None:
            offset_x = self.config.pattern_x
        if self.config.pattern_y is not None:
            offset_y = self.config.pattern_y

        logger.info("Loading pattern %s at (%d, %d)", pattern.name, offset_x, offset_y)
        pattern.apply_to_grid(grid, offset_x, offset_y)

    def draw(self) -> None:
        """Print the committed grid, one row per line."""
        print(self.simulation.grid.to_text(self.config.alive, self.config.dead), file=self.output)

    def handle_line(self, line: str) -> bool:
        """Apply one line of user input.

        Args:
            line: Raw input line

        Returns:
            False if the user asked to quit, True otherwise
        """
        command = line.strip()

        if not command:
            self.simulation.step()
            return True

        if command.lower() in QUIT_COMMANDS:
            return False

        try:
            x, y = parse_coordinates(command)
            self.simulation.seed([(x, y)])
        except OutOfBoundsError as e:
            print(f"Error: {e}", file=self.output)
        except ValueError as e:
            print(f"Error: {e}", file=self.output)
            print("Enter 'x y' to activate a cell, an empty line to advance, or 'q' to quit", file=self.output)

        return True

    def run(self, input_stream: Optional[TextIO] = None) -> int:
        """Run until end of input or a quit command.

        Args:
            input_stream: Stream to read commands from (defaults to stdin)

        Returns:
            The generation reached
        """
        input_stream = input_stream or sys.stdin

        while True:
            self.draw()
            line = input_stream.readline()
            if not line:
                break
            if not self.handle_line(line):
                break

        logger.info("Session ended at generation %d", self.simulation.generation)
        return self.simulation.generation


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Play Conway's Game of Life interactively in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  <empty line>   advance one generation
  x y            bring the cell at column x, row y to life
  q              quit

Examples:
  lifegrid
  lifegrid -W 20 -H 10 --pattern Glider
  lifegrid --pattern Blinker --pattern-x 0 --pattern-y 0 --alive '#' --dead '.'
        """,
    )

    parser.add_argument(
        "-W", "--width", type=int, default=DEFAULT_WIDTH, help=f"Grid width (default: {DEFAULT_WIDTH})"
    )
    parser.add_argument(
        "-H", "--height", type=int, default=DEFAULT_HEIGHT, help=f"Grid height (default: {DEFAULT_HEIGHT})"
    )
    parser.add_argument("--sparse", action="store_true", help="Store only living cells (for large, empty grids)")

    parser.add_argument("--pattern", type=str, help="Pattern to seed the grid with")
    parser.add_argument("--pattern-x", type=int, default=None, help="X offset for pattern (default: centered)")
    parser.add_argument("--pattern-y", type=int, default=None, help="Y offset for pattern (default: centered)")
    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")

    parser.add_argument("--alive", type=str, default="X", help="Glyph for living cells (default: X)")
    parser.add_argument("--dead", type=str, default="O", help="Glyph for dead cells (default: O)")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


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

    if args.pattern_x is not None and args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y is not None and args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if len(args.alive) != 1 or len(args.dead) != 1:
        errors.append("Cell glyphs must be single characters")
    elif args.alive == args.dead:
        errors.append("Alive and dead glyphs must differ")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def list_patterns() -> None:
    """Print available patterns by category."""
    library = PatternLibrary()

    print("Available patterns:")
    for category, names in library.get_patterns_by_category().items():
        print(f"\n{category}:")
        for name in names:
            pattern = library.get_pattern(name)
            width, height = pattern.get_size()
            print(f"  {name}: {width}x{height}, {len(pattern.cells)} cells")
            if pattern.description:
                print(f"    {pattern.description}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the terminal interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_patterns:
        list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        session = TerminalGameOfLife(GridConfig.from_args(args))
        session.run()
        return 0
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
