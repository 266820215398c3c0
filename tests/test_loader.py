from __future__ import annotations

from pathlib import Path

import pytest

from querybind import QueryRegistry, load_query_files


def write_sql(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_files_are_grouped_by_directory(tmp_path):
    root = tmp_path / "queries"
    write_sql(root / "users" / "active.sql", "SELECT * FROM users WHERE active = 1;\n")
    write_sql(root / "users" / "by_id.sql", "\nSELECT * FROM users WHERE id = ?\n")
    write_sql(root / "reports" / "monthly" / "totals.sql", "SELECT 1")
    write_sql(root / "ping.sql", "SELECT 1")
    write_sql(root / "users" / "README.md", "not a query")

    definitions = load_query_files(root)

    assert definitions == {
        "queries": {"ping": "SELECT 1"},
        "reports/monthly": {"totals": "SELECT 1"},
        "users": {
            "active": "SELECT * FROM users WHERE active = 1;",
            "by_id": "SELECT * FROM users WHERE id = ?",
        },
    }


def test_loaded_files_feed_the_registry(tmp_path):
    write_sql(tmp_path / "sql" / "tasks" / "open.sql", "SELECT * FROM tasks")
    registry = QueryRegistry(load_query_files(str(tmp_path / "sql")))
    assert dict(registry.queries_for("tasks")) == {"open": "SELECT * FROM tasks"}


def test_empty_directory_yields_no_datasets(tmp_path):
    assert load_query_files(tmp_path) == {}


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_query_files(tmp_path / "nope")
