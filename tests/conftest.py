"""
Pytest config.

The API modules are imported the way `uvicorn main:app` sees them from inside
`api/` (e.g. `from core import db`), so `api/` must be on sys.path during
collection even when the project is not installed.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest


def _ensure_api_dir_on_syspath() -> None:
    api_dir = Path(__file__).resolve().parents[1] / "api"
    api_dir_str = str(api_dir)
    if api_dir_str not in sys.path:
        sys.path.insert(0, api_dir_str)


_ensure_api_dir_on_syspath()


class FakeJobStore:
    """
    In-memory stand-in for `jobs.repository.delete_jobs_for_user`.

    Rows are (id, user_id) pairs per table. Tables listed in `failing` raise a
    store error; `unexpected` is raised as-is from every call when set.
    """

    def __init__(self) -> None:
        from jobs import repository

        self.rows: dict[str, list[tuple[str, str]]] = {t: [] for t in repository.JOB_TABLES}
        self.failing: set[str] = set()
        self.unexpected: Exception | None = None
        self.calls: list[tuple[str, list[str], str]] = []

    def add(self, table: str, job_id: str, user_id: str) -> None:
        self.rows[table].append((job_id, user_id))

    def remaining(self, table: str) -> list[str]:
        return [job_id for job_id, _ in self.rows[table]]

    async def delete_jobs_for_user(self, table, *, job_ids, user_id):  # type: ignore[no-untyped-def]
        wanted = [str(j) for j in job_ids]
        self.calls.append((table, wanted, user_id))
        if self.unexpected is not None:
            raise self.unexpected
        if table in self.failing:
            raise ConnectionError(f"connection lost while deleting from {table}")

        kept = [(i, u) for (i, u) in self.rows[table] if not (i in wanted and u == user_id)]
        removed = len(self.rows[table]) - len(kept)
        self.rows[table] = kept
        return removed


@pytest.fixture
def job_store(monkeypatch: pytest.MonkeyPatch) -> FakeJobStore:
    from jobs import repository

    store = FakeJobStore()
    monkeypatch.setattr(repository, "delete_jobs_for_user", store.delete_jobs_for_user)
    return store


@pytest.fixture(autouse=True)
def _supabase_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.test")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setenv("COOKIE_SECURE", "0")
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)


@pytest.fixture
def app():  # type: ignore[no-untyped-def]
    import main

    yield main.app
    main.app.dependency_overrides.clear()


@pytest.fixture
def client(app):  # type: ignore[no-untyped-def]
    from fastapi.testclient import TestClient

    # Not entered as a context manager: the lifespan (DB pool) stays closed.
    return TestClient(app)


@pytest.fixture
def signed_in(app) -> Iterator[str]:  # type: ignore[no-untyped-def]
    """
    Authenticate every request as `user-1` without touching the auth provider.
    """
    from auth import dependencies
    from auth.schemas import AuthUser

    app.dependency_overrides[dependencies.get_current_user] = lambda: AuthUser(id="user-1", email="one@example.com")
    yield "user-1"
    app.dependency_overrides.pop(dependencies.get_current_user, None)
