class DomainError(Exception):
    """Base class for errors raised by the progress engine."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    """A habit or user referenced by the caller does not exist."""


class Unauthenticated(DomainError):
    """No valid caller identity was supplied."""


class InvalidState(DomainError):
    """The stored configuration cannot support the requested operation."""
