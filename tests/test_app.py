"""Application wiring: banner, health, CORS, error bodies, startup."""

import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from globetrekker.core.config import Settings
from globetrekker.core.database import build_engine
from globetrekker.main import check_startup, create_app


def test_banner(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "GlobeTrekker Backend Running" in r.text


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "database": "up"}


def test_health_reports_database_down(client):
    with patch("globetrekker.api.health.ping", return_value=False):
        r = client.get("/health")
    assert r.status_code == 503


def test_malformed_body_is_400(client):
    r = client.post("/subscribe", content="not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}


def test_cors_allows_known_frontend(client):
    r = client.options(
        "/contact",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_rejects_unknown_origin(client):
    r = client.options(
        "/contact",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in r.headers


def test_missing_config_is_only_a_warning(mailer, engine, caplog):
    app = create_app(settings=Settings(database_url="sqlite://"), mailer=mailer, engine=engine)

    with caplog.at_level(logging.WARNING, logger="globetrekker.main"):
        with TestClient(app) as c:
            assert c.get("/").status_code == 200

    warned = " ".join(r.getMessage() for r in caplog.records)
    for key in ("EMAIL_USER", "EMAIL_PASS", "ADMIN_EMAIL"):
        assert key in warned


def test_unreachable_database_stops_startup(settings, mailer, tmp_path):
    broken = build_engine(f"sqlite:///{(tmp_path / 'missing' / 'db.sqlite').as_posix()}")
    app = create_app(settings=settings, mailer=mailer, engine=broken)

    with pytest.raises(SystemExit) as exc:
        check_startup(app.state.context)
    assert exc.value.code == 1


def test_missing_required_by_provider():
    s = Settings(database_url="sqlite://", mail_provider="api", admin_email="a@x.com")
    assert s.missing_required() == ["MAIL_API_KEY"]
