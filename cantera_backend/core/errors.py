# cantera_backend/core/errors.py
# Domain exceptions. Routers translate them into HTTP errors.


class CanteraError(Exception):
    """Base class for errors raised by the domain services."""


class LineupValidationError(CanteraError, ValueError):
    """A lineup submission was rejected under strict validation."""

    def __init__(self, message: str, problems=None):
        super().__init__(message)
        self.problems = list(problems or [])


class MatchFinishedError(CanteraError):
    """Raised when trying to edit a match that is already finished."""
