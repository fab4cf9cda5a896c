"""Domain exceptions.

Every core operation either returns or raises exactly one of these. Each
class carries the error kind and the HTTP status it maps to.
"""

from catalogacl.domain.value_objects.error_kind import ErrorKind


class CatalogAclError(Exception):
    """Base exception for catalogacl."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    status: int | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogAclError):
    """Validation failed for input data."""

    kind = ErrorKind.VALIDATION
    status = 400


class Unauthenticated(CatalogAclError):
    """Caller identity could not be established."""

    kind = ErrorKind.UNAUTHENTICATED
    status = 401


class Forbidden(CatalogAclError):
    """Actor does not have permission for the requested action."""

    kind = ErrorKind.FORBIDDEN
    status = 403


class NotFound(CatalogAclError):
    """Requested entity, edge or grant was not found."""

    kind = ErrorKind.NOT_FOUND
    status = 404

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        super().__init__(entity if identifier is None else f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class Conflict(CatalogAclError):
    """Stale entity version or duplicate entity."""

    kind = ErrorKind.CONFLICT
    status = 409


class Unprocessable(CatalogAclError):
    """Well-formed request that cannot be applied."""

    kind = ErrorKind.UNPROCESSABLE
    status = 422


class ServerError(CatalogAclError):
    """Store failure; the transaction was rolled back."""

    kind = ErrorKind.SERVER_ERROR
    status = 500


class Unavailable(CatalogAclError):
    """Store temporarily unreachable."""

    kind = ErrorKind.UNAVAILABLE
    status = 503


class UnknownError(CatalogAclError):
    """Failure that does not map to any other kind."""

    kind = ErrorKind.UNKNOWN
    status = None


EXCEPTION_BY_KIND: dict[ErrorKind, type[CatalogAclError]] = {
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.UNAUTHENTICATED: Unauthenticated,
    ErrorKind.FORBIDDEN: Forbidden,
    ErrorKind.NOT_FOUND: NotFound,
    ErrorKind.CONFLICT: Conflict,
    ErrorKind.UNPROCESSABLE: Unprocessable,
    ErrorKind.SERVER_ERROR: ServerError,
    ErrorKind.UNAVAILABLE: Unavailable,
    ErrorKind.UNKNOWN: UnknownError,
}
