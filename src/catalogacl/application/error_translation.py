"""Translation of transport status failures into domain error kinds.

A failure from the management transport carries a numeric status and an
optional JSON payload. The payload message wins when it says something more
specific than the generic transport message; otherwise the status table
provides the text; otherwise the caller's default is used.
"""

from dataclasses import dataclass
from typing import Any

from catalogacl.domain.exceptions import EXCEPTION_BY_KIND, CatalogAclError
from catalogacl.domain.value_objects import ErrorKind

DEFAULT_RESOURCE = "resource"
DEFAULT_ACTION = "perform this action"

KIND_BY_STATUS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.UNAUTHENTICATED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.UNPROCESSABLE,
    500: ErrorKind.SERVER_ERROR,
    503: ErrorKind.UNAVAILABLE,
}


@dataclass(frozen=True)
class TranslatedError:
    """Outcome of translating a failure: kind, user-facing text, status."""

    kind: ErrorKind
    message: str
    status: int | None = None


def kind_for_status(status: int) -> ErrorKind:
    """Domain error kind for an HTTP status; Unknown for unlisted codes."""
    return KIND_BY_STATUS.get(status, ErrorKind.UNKNOWN)


def status_message(
    status: int,
    resource: str = DEFAULT_RESOURCE,
    action: str = DEFAULT_ACTION,
) -> str:
    """Default user-facing message for an HTTP status."""
    match status:
        case 400:
            return "Invalid request. Please check your input and try again."
        case 401:
            return "You are not authenticated. Please log in again."
        case 403:
            return f"You don't have permission to {action} on this {resource}."
        case 404:
            return f"The {resource} was not found."
        case 409:
            return (
                "Entity version mismatch. The resource may have been modified. "
                "Please refresh and try again."
            )
        case 422:
            return "The request is valid but cannot be processed. Please check your input."
        case 500:
            return "An internal server error occurred. Please try again later."
        case 503:
            return "The service is temporarily unavailable. Please try again later."
        case _:
            return f"An error occurred while trying to {action} the {resource}."


def extract_message(payload: Any) -> str | None:
    """Specific message from a failure payload, if it carries one.

    Looks at ``error.message`` first, then a top-level ``message``.
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if payload.get("message"):
        return str(payload["message"])
    return None


def translate(
    status: int | None,
    payload: Any = None,
    transport_message: str | None = None,
    *,
    default_message: str = "",
    resource: str = DEFAULT_RESOURCE,
    action: str = DEFAULT_ACTION,
) -> TranslatedError:
    """Classify a transport failure and pick its user-facing message."""
    specific = extract_message(payload)
    if status is None:
        return TranslatedError(
            kind=ErrorKind.UNKNOWN,
            message=specific or transport_message or default_message,
        )
    kind = kind_for_status(status)
    if specific and specific != transport_message:
        return TranslatedError(kind=kind, message=specific, status=status)
    return TranslatedError(
        kind=kind, message=status_message(status, resource, action), status=status
    )


def to_exception(translated: TranslatedError) -> CatalogAclError:
    """Domain exception instance for a translated failure."""
    return EXCEPTION_BY_KIND[translated.kind](translated.message)


def message_for(
    error: CatalogAclError,
    resource: str = DEFAULT_RESOURCE,
    action: str = DEFAULT_ACTION,
) -> str:
    """User-facing message for a raised domain exception."""
    if error.message:
        return error.message
    if error.status is None:
        return status_message(0, resource, action)
    return status_message(error.status, resource, action)
