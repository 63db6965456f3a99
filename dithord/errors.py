# dithord/errors.py
"""
Exceptions raised by the dithering core.

All of them are ValueErrors so callers that already guard numeric input with
``except ValueError`` keep working.
"""


class DithordError(ValueError):
    """Base class for dithord errors."""


class InvalidParameterError(DithordError):
    """Threshold map level (or explicit matrix) outside the supported range."""


class DimensionMismatchError(DithordError):
    """Output grid does not match the input grid's width and height."""

    def __init__(self, expected, actual) -> None:
        super().__init__(f"expected output of size {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


__all__ = ["DithordError", "InvalidParameterError", "DimensionMismatchError"]
