"""Unit tests for error translation."""

import pytest

from catalogacl.application.error_translation import (
    extract_message,
    kind_for_status,
    message_for,
    status_message,
    to_exception,
    translate,
)
from catalogacl.domain.exceptions import Conflict, Forbidden, NotFound, UnknownError
from catalogacl.domain.value_objects import ErrorKind


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (400, ErrorKind.VALIDATION),
        (401, ErrorKind.UNAUTHENTICATED),
        (403, ErrorKind.FORBIDDEN),
        (404, ErrorKind.NOT_FOUND),
        (409, ErrorKind.CONFLICT),
        (422, ErrorKind.UNPROCESSABLE),
        (500, ErrorKind.SERVER_ERROR),
        (503, ErrorKind.UNAVAILABLE),
        (418, ErrorKind.UNKNOWN),
    ],
)
def test_kind_for_status(status: int, kind: ErrorKind) -> None:
    assert kind_for_status(status) == kind


def test_status_messages_interpolate_resource_and_action() -> None:
    assert (
        status_message(403, "catalog role", "grant privileges")
        == "You don't have permission to grant privileges on this catalog role."
    )
    assert status_message(404, "principal") == "The principal was not found."
    assert (
        status_message(418, "grant", "revoke")
        == "An error occurred while trying to revoke the grant."
    )


def test_conflict_message_asks_for_refresh() -> None:
    assert status_message(409) == (
        "Entity version mismatch. The resource may have been modified. "
        "Please refresh and try again."
    )


def test_status_409_without_payload() -> None:
    """The status table message is used when the payload says nothing."""
    translated = translate(409, None)
    assert translated.kind == ErrorKind.CONFLICT
    assert "Entity version mismatch" in translated.message
    assert translated.status == 409


def test_specific_payload_message_wins() -> None:
    payload = {"error": {"message": "Catalog role cr1 already exists"}}
    translated = translate(409, payload, "Request failed with status code 409")
    assert translated.kind == ErrorKind.CONFLICT
    assert translated.message == "Catalog role cr1 already exists"


def test_payload_equal_to_transport_message_falls_back_to_table() -> None:
    generic = "Request failed with status code 404"
    translated = translate(404, {"message": generic}, generic, resource="principal")
    assert translated.message == "The principal was not found."


def test_top_level_message_used_when_error_object_missing() -> None:
    assert extract_message({"message": "nope"}) == "nope"
    assert extract_message({"error": {"message": ""}, "message": "fallback"}) == "fallback"
    assert extract_message("not a dict") is None


def test_no_status_is_unknown() -> None:
    assert translate(None, None, "socket hang up").message == "socket hang up"
    assert translate(None, None, None, default_message="Grant failed").message == "Grant failed"
    translated = translate(None, {"error": {"message": "timeout"}}, "socket hang up")
    assert translated.kind == ErrorKind.UNKNOWN
    assert translated.message == "timeout"
    assert translated.status is None


def test_to_exception_matches_kind() -> None:
    error = to_exception(translate(403, None, resource="catalog", action="manage grants"))
    assert isinstance(error, Forbidden)
    assert error.message == "You don't have permission to manage grants on this catalog."
    assert isinstance(to_exception(translate(None, None, "x")), UnknownError)
    assert isinstance(to_exception(translate(404)), NotFound)


def test_message_for_prefers_exception_message() -> None:
    assert message_for(Conflict("stale")) == "stale"
    assert "Entity version mismatch" in message_for(Conflict())
