"""Custom exception hierarchy for puzzle generation."""


class BrickwordError(Exception):
    """Base exception for generator failures."""


class LayoutDisconnected(BrickwordError):
    """Raised when no connected word layout was found within the retry limit."""


class DegeneratePartition(BrickwordError):
    """Raised when every partition attempt collapsed into a single brick."""


class PlacementExhausted(BrickwordError):
    """Raised in strict mode when a brick finds no free slot in the spiral."""


class ValidationError(BrickwordError):
    """Raised when the partition or packed layout integrity checks fail."""


class HintError(BrickwordError):
    """Raised when no hint provider produced a usable hint."""
