from __future__ import annotations

import pytest
from pydantic import ValidationError

from querybind import QueryRegistry, QueryTemplate, RegistryLoadError


DEFINITIONS = {
    "users": {"active": "SELECT * FROM users WHERE active", "by_id": "SELECT * FROM users WHERE id = %s"},
    "tasks": {"open": "SELECT * FROM tasks WHERE done = 0"},
}


def test_load_and_queries_for():
    registry = QueryRegistry()
    assert not registry.loaded

    registry.load(DEFINITIONS)

    assert registry.loaded
    assert registry.datasets() == ["tasks", "users"]
    assert dict(registry.queries_for("users")) == DEFINITIONS["users"]
    assert "users" in registry


def test_unknown_dataset_returns_empty_mapping():
    registry = QueryRegistry(DEFINITIONS)
    assert dict(registry.queries_for("missing")) == {}
    assert dict(registry.queries_for(["unhashable"])) == {}
    assert "missing" not in registry


def test_load_replaces_snapshot_without_merging():
    registry = QueryRegistry(DEFINITIONS)
    registry.load({"reports": {"monthly": "SELECT 1"}})

    assert registry.datasets() == ["reports"]
    assert dict(registry.queries_for("users")) == {}


def test_load_is_idempotent():
    registry = QueryRegistry()
    registry.load(DEFINITIONS)
    first = {ds: dict(registry.queries_for(ds)) for ds in registry.datasets()}
    registry.load(DEFINITIONS)
    second = {ds: dict(registry.queries_for(ds)) for ds in registry.datasets()}
    assert first == second


def test_load_copies_input():
    source = {"users": {"active": "SELECT 1"}}
    registry = QueryRegistry(source)
    source["users"]["active"] = "SELECT 2"
    source["users"]["extra"] = "SELECT 3"
    assert dict(registry.queries_for("users")) == {"active": "SELECT 1"}


def test_snapshot_is_read_only():
    registry = QueryRegistry(DEFINITIONS)
    with pytest.raises(TypeError):
        registry.queries_for("users")["active"] = "DROP TABLE users"  # type: ignore[index]


@pytest.mark.parametrize(
    "malformed",
    [
        ["users"],
        {"users": "SELECT 1"},
        {1: {"active": "SELECT 1"}},
        {"users": {2: "SELECT 1"}},
        {"": {"active": "SELECT 1"}},
        {"users": {"": "SELECT 1"}},
        {"users": {"active": None}},
    ],
)
def test_malformed_load_keeps_previous_snapshot(malformed):
    registry = QueryRegistry(DEFINITIONS)
    before = {ds: dict(registry.queries_for(ds)) for ds in ["users", "tasks", "other"]}

    with pytest.raises(RegistryLoadError):
        registry.load(malformed)

    after = {ds: dict(registry.queries_for(ds)) for ds in ["users", "tasks", "other"]}
    assert after == before


def test_registry_load_error_is_value_error():
    with pytest.raises(ValueError):
        QueryRegistry({"users": None})


def test_template_records():
    registry = QueryRegistry(DEFINITIONS)
    tpl = registry.template("users", "active")
    assert tpl == QueryTemplate(dataset="users", name="active", text="SELECT * FROM users WHERE active")
    with pytest.raises(ValidationError):
        tpl.text = "changed"
    with pytest.raises(KeyError):
        registry.template("users", "missing")


def test_structured_templates_are_opaque():
    template = {"sql": "SELECT 1", "timeout": 5}
    registry = QueryRegistry({"misc": {"ping": template}})
    assert registry.queries_for("misc")["ping"] == template


def test_structured_templates_are_copied_on_load():
    template = {"sql": "SELECT 1", "options": {"timeout": 5}}
    registry = QueryRegistry({"misc": {"ping": template}})

    template["sql"] = "DROP TABLE users"
    template["options"]["timeout"] = 0

    assert registry.queries_for("misc")["ping"] == {"sql": "SELECT 1", "options": {"timeout": 5}}
    assert registry.template("misc", "ping").text["sql"] == "SELECT 1"


def test_dataset_with_no_queries_is_a_member():
    registry = QueryRegistry({"empty": {}, "users": {"active": "SELECT 1"}})
    assert registry.datasets() == ["empty", "users"]
    assert "empty" in registry
    assert dict(registry.queries_for("empty")) == {}
    assert ["unhashable"] not in registry


def test_freeze_rejects_further_loads():
    registry = QueryRegistry(DEFINITIONS)
    registry.freeze()
    assert registry.frozen

    with pytest.raises(RegistryLoadError):
        registry.load({"other": {"q": "SELECT 1"}})
    assert registry.datasets() == ["tasks", "users"]
