"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI today, an HTTP adapter tomorrow) can catch them
uniformly.  Each class carries the HTTP status a transport layer should map
it to.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    http_status = 500


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` holds per-item messages when several problems are reported
    at once (e.g. every unavailable product in an order request).
    """

    http_status = 400

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    http_status = 404


class InsufficientInventoryError(DomainException):
    """The requested quantity exceeds what is available."""

    http_status = 409


class ForbiddenError(DomainException):
    """The caller is neither the owner of the resource nor an administrator."""

    http_status = 403


class InvalidStateError(DomainException):
    """The operation is not permitted in the order's current status."""

    http_status = 400


class ConcurrencyError(DomainException):
    """A write was based on a stale read and lost to a concurrent writer."""

    http_status = 409
