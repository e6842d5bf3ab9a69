"""
Exception taxonomy for the board.

    ValidationError  - empty required field, nothing mutated
    IndexOutOfRange  - column index outside the three lanes
    InvalidState     - drag event that does not fit the current gesture
    StoreError       - backing file unreadable or unwritable
    FormatError      - backing file exists but is not a record list
"""


class BoardError(Exception):
    """Base class for every error raised by the board core."""
    pass


class ValidationError(BoardError):
    """Raised when a card field fails validation."""

    def __init__(self, field_name: str, message: str = ""):
        self.field_name = field_name
        super().__init__(message or f"{field_name} cannot be empty")


class IndexOutOfRange(BoardError, IndexError):
    """Raised when a column index is not one of the board's lanes."""
    pass


class InvalidState(BoardError):
    """Raised when a drag event arrives in a state that cannot accept it."""
    pass


class StoreError(BoardError, OSError):
    """Raised when the backing store cannot be read or written."""
    pass


class FormatError(BoardError, ValueError):
    """Raised when the backing store holds something other than card records."""
    pass
