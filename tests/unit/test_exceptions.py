"""Unit tests for domain exceptions."""

import pytest

from catalogacl.domain.exceptions import (
    EXCEPTION_BY_KIND,
    CatalogAclError,
    Conflict,
    Forbidden,
    NotFound,
    ServerError,
    Unavailable,
    UnknownError,
    ValidationError,
)
from catalogacl.domain.value_objects import ErrorKind


def test_every_kind_has_an_exception() -> None:
    """Each error kind maps to exactly one exception class carrying that kind."""
    assert set(EXCEPTION_BY_KIND) == set(ErrorKind)
    for kind, cls in EXCEPTION_BY_KIND.items():
        assert issubclass(cls, CatalogAclError)
        assert cls.kind == kind


def test_statuses() -> None:
    assert ValidationError.status == 400
    assert Forbidden.status == 403
    assert NotFound.status == 404
    assert Conflict.status == 409
    assert ServerError.status == 500
    assert Unavailable.status == 503
    assert UnknownError.status is None


def test_not_found_message_names_entity() -> None:
    error = NotFound("Catalog role", "sales/cr1")
    assert error.message == "Catalog role not found: sales/cr1"
    assert error.entity == "Catalog role"
    assert error.identifier == "sales/cr1"


def test_raise_conflict_catchable_as_base() -> None:
    with pytest.raises(CatalogAclError):
        raise Conflict("stale")


def test_exception_message_preserved() -> None:
    msg = "actor may not manage access on catalog sales"
    with pytest.raises(Forbidden, match=msg):
        raise Forbidden(msg)
