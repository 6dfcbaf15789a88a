"""Exceptions raised by the puzzle engine."""


class LensgridError(Exception):
    """Base class for lensgrid errors."""


class GridInvariantError(LensgridError, RuntimeError):
    """Destination cells no longer form a one-to-one mapping onto the grid."""
