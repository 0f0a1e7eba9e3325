from __future__ import annotations

import pytest

from api_template.app.core import db


@pytest.mark.usefixtures("database")
class TestDatabaseBootstrap:
    def test_init_db_is_idempotent(self) -> None:
        assert db.init_db() == 0
        assert db.current_version() == db.MIGRATIONS[-1][0]

    def test_seed_only_populates_an_empty_collection(self) -> None:
        assert db.seed_sample_data() == len(db.SAMPLE_ENTITIES)
        assert db.seed_sample_data() == 0

        with db.get_cursor() as cursor:
            names = [row["name"] for row in cursor.execute("SELECT name FROM sample_entities ORDER BY id")]
        assert names == ["Sample Item 1", "Sample Item 2", "Sample Item 3"]

    def test_check_connection(self) -> None:
        db.check_connection()


def test_fresh_database_reports_version_zero_without_creating_tables(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db.settings, "database_url", str(tmp_path / "fresh.db"))

    assert db.current_version() == 0

    with db.get_cursor() as cursor:
        tables = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    assert tables == []

    assert db.init_db() == len(db.MIGRATIONS)


def test_relative_database_url_resolves_inside_package(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db.settings, "database_url", "relative.db")

    path = db.get_database_path()

    assert path.endswith("api_template/relative.db") or path.endswith("api_template\\relative.db")
