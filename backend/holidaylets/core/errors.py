"""Domain error taxonomy shared by the service layer."""

from __future__ import annotations

from collections.abc import Iterable


class DomainError(Exception):
    """Base class for errors surfaced to API callers with a readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """A referenced accommodation, guest, booking or review does not exist."""


class ConflictError(DomainError):
    """The request conflicts with current state (overlap, transition, dependents)."""


class ValidationFailed(DomainError, ValueError):
    """Malformed input; ``errors`` lists every violation found."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input")


def raise_for_violations(errors: list[str]) -> None:
    """Raise ``ValidationFailed`` when a validator reported anything."""
    if errors:
        raise ValidationFailed(errors)


__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationFailed",
    "raise_for_violations",
]
