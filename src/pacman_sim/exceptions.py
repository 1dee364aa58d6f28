"""Exceptions raised by the simulation."""


class PacmanError(Exception):
    """Base class for simulation errors."""


class MalformedGrid(PacmanError, ValueError):
    """Board rows are missing or have inconsistent lengths."""


class InvalidTileCode(PacmanError, ValueError):
    """A board row contains a character that maps to no tile."""

    def __init__(self, char: str, row: int, col: int) -> None:
        self.char = char
        self.row = row
        self.col = col
        super().__init__(f"Cannot construct tile from {char!r} at row {row}, col {col}")


class BadArgument(PacmanError, ValueError):
    """Query argument is invalid (e.g. enemy index out of range)."""


class NoSuchQuery(PacmanError, KeyError):
    """Unknown query name."""
