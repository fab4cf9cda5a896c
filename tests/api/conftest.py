"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from catalogacl.infrastructure.access.access_checker import GrantAccessChecker
from catalogacl.interfaces.api.app import create_app

ADMIN = "root"


@pytest.fixture
def app(uow_factory):
    """Falcon ASGI app over the in-memory store; root is the service admin."""
    access_checker = GrantAccessChecker(uow_factory, frozenset({ADMIN}))
    return create_app(uow_factory, access_checker)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client acting as the service admin."""
    return TestClient(app, headers={"X-Principal-Name": ADMIN})
