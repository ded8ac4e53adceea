class DetkitError(ValueError):
    """
    Base class for errors raised by detkit. Subclasses ValueError so callers
    that already guard bad input with `except ValueError` keep working.
    """


class MalformedPrediction(DetkitError):
    """Raw network output does not have the expected `[N, 4 + K]` layout."""


class InvalidParameter(DetkitError):
    """A threshold or size argument is outside its allowed range."""
