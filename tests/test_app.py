from __future__ import annotations

import pytest

from core import db


def test_health_is_public(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_database_url_drops_sslmode(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db.example:5432/postgres?sslmode=require&application_name=api")
    assert db.database_url() == "postgresql://u:p@db.example:5432/postgres?application_name=api"


def test_database_url_required(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        db.database_url()


def test_pool_must_be_initialized() -> None:
    with pytest.raises(RuntimeError):
        db.pool()
