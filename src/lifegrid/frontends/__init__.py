"""User interface front ends."""

from .terminal import TerminalGameOfLife

__all__ = ["TerminalGameOfLife"]
