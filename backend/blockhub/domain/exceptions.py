# blockhub/domain/exceptions.py
from typing import Optional


class DomainError(Exception):
    """Base class for every error a release command can raise."""

    status_code = 400

    def __init__(self, message: str, *, environment: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.environment = environment


class NotFound(DomainError):
    """A referenced app, block, version or approval request does not exist."""

    status_code = 404


class ValidationError(DomainError):
    """Missing or malformed input, detected before any state is read."""

    status_code = 400


class InvalidState(DomainError):
    """The command is not legal from the entity's current state."""

    status_code = 409


class Conflict(DomainError):
    """The command would duplicate a state that already holds."""

    status_code = 409


class InvariantViolation(DomainError):
    """Persisted state broke a structural invariant. Always a bug."""

    status_code = 500
