"""Settings tests."""

from catalogacl.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "postgres"
    assert settings.service_admin_names == frozenset({"root"})
    assert settings.pool_min_size <= settings.pool_max_size


def test_lists_are_parsed_from_comma_separated_env(monkeypatch) -> None:
    monkeypatch.setenv("SERVICE_ADMINS", "root, ops ,")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example,http://b.example")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    settings = Settings(_env_file=None)
    assert settings.service_admin_names == frozenset({"root", "ops"})
    assert settings.cors_origin_list == ["http://a.example", "http://b.example"]
    assert settings.storage_backend == "memory"


def test_memory_app_builds() -> None:
    """The composition root wires a memory-backed app without a database."""
    from falcon.testing import TestClient

    from catalogacl.main import create_catalogacl_app

    app = create_catalogacl_app(Settings(_env_file=None, storage_backend="memory"))
    client = TestClient(app, headers={"X-Principal-Name": "root"})
    result = client.simulate_post(
        "/api/management/v1/principals", json={"principal": {"name": "alice"}}
    )
    assert result.status_code == 201
    assert client.simulate_get("/v1/health/ready").json["status"] == "ready"
