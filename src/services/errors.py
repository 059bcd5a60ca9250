"""Service-layer errors.

Every error carries a machine-readable ``kind`` and the HTTP status it maps to.
Handlers in ``src.main`` render them as ``{"detail": ..., "kind": ...}``.

Resubmitting a rating for the same store is not an error: the ledger treats it
as an update. ``Conflict`` is reserved for duplicate accounts.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to the caller."""

    kind = "error"
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(ServiceError):
    """Malformed input that passed schema validation."""

    kind = "validation_error"
    status_code = 422


class InvalidRating(ValidationError):
    """Rating value is not an integer between 1 and 5."""


class NotFound(ServiceError):
    """A referenced user or store does not exist."""

    kind = "not_found"
    status_code = 404


class Conflict(ServiceError):
    """Email already registered."""

    kind = "conflict"
    status_code = 409


class Unauthorized(ServiceError):
    """Missing or invalid identity claim."""

    kind = "unauthorized"
    status_code = 401


class Forbidden(ServiceError):
    """Valid identity without the role an operation requires."""

    kind = "forbidden"
    status_code = 403
