"""Typed, recoverable errors raised by the seating engine."""


class SeatingError(Exception):
    """Base class. The operation that raised it left the grid unchanged."""


class InvalidTarget(SeatingError):
    """Seat is missing or deleted."""


class UnknownStudent(SeatingError):
    """No student matches the given uuid (or fallback key)."""


class SeatOccupied(SeatingError):
    """A seat holding a student cannot be deleted."""


class RelocationRejected(SeatingError):
    """A block move would leave the grid or land on a deleted seat."""


class HistoryUnavailable(SeatingError):
    """Nothing to undo or redo."""


class LayoutError(SeatingError):
    """Grid dimensions outside the supported range."""
