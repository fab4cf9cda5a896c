"""Domain error kinds."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-checkable failure kinds surfaced to callers."""

    VALIDATION = "Validation"
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNPROCESSABLE = "Unprocessable"
    SERVER_ERROR = "ServerError"
    UNAVAILABLE = "Unavailable"
    UNKNOWN = "Unknown"
