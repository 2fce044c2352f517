"""
Tests for the JSON session store.
"""

import pytest

from calcpad import error as E
from calcpad.DocumentEngine import evaluate_document
from calcpad.Environment import Environment
from calcpad.session_store import SessionStore


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "sessions.json")


def test_create_assigns_increasing_ids(store):
    first = store.create("groceries", "milk = 2.5\nbread = 3")
    second = store.create("trip", "120 km to mi")
    assert (first["id"], second["id"]) == (1, 2)
    assert first["created_at"]
    assert [record["name"] for record in store.list()] == ["groceries", "trip"]


def test_get(store):
    created = store.create("resistors", "10 || 20")
    assert store.get(created["id"]) == created


def test_get_missing(store):
    with pytest.raises(E.StorageError) as excinfo:
        store.get(42)
    assert excinfo.value.code == "6000"


def test_delete(store):
    created = store.create("a", "1")
    assert store.delete(created["id"]) is True
    assert store.delete(created["id"]) is False
    assert store.list() == []


def test_ids_are_not_reused(store):
    store.create("a", "1")
    second = store.create("b", "2")
    store.delete(second["id"])
    assert store.create("c", "3")["id"] == 3


def test_variables_restore_into_an_environment(store):
    document = evaluate_document("d = 5 km\nt = 20 °C")
    created = store.create("units", "d = 5 km\nt = 20 °C", document.environment.to_dict())

    restored = Environment.from_dict(store.get(created["id"])["variables"])
    assert restored.items() == document.environment.items()


def test_corrupt_file(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(E.StorageError) as excinfo:
        SessionStore(path).list()
    assert excinfo.value.code == "6001"
