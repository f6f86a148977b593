from __future__ import annotations

import logging

from src.attendance_session.attendance_session.core.exceptions import PersistenceError
from src.attendance_session.attendance_session.session.model import StoredSession
from src.attendance_session.attendance_session.session.store import SessionStore


class InMemoryStorage:
    def __init__(self):
        self.data: dict[str, str] = {}

    def multi_get(self, keys):
        return {k: self.data.get(k) for k in keys}

    def multi_set(self, items):
        self.data.update(items)

    def multi_remove(self, keys):
        for k in keys:
            self.data.pop(k, None)


class BrokenStorage:
    def multi_get(self, keys):
        raise PersistenceError("disk unavailable")

    def multi_set(self, items):
        raise PersistenceError("disk full")

    def multi_remove(self, keys):
        raise PersistenceError("disk unavailable")


def test_save_then_load_round_trip():
    store = SessionStore(InMemoryStorage())

    assert store.save("u1", 1_000, 30_601_000, 30600) is True

    assert store.load("u1") == StoredSession(check_in_at=1_000, shift_end_at=30_601_000, shift_duration_seconds=30600)


def test_keys_are_namespaced_by_user():
    storage = InMemoryStorage()
    store = SessionStore(storage)

    store.save("u1", 1_000, 2_000, 1)

    assert sorted(storage.data) == [
        "@attendance:check_in_timestamp:u1",
        "@attendance:shift_duration:u1",
        "@attendance:shift_end_timestamp:u1",
    ]


def test_users_never_see_each_other():
    store = SessionStore(InMemoryStorage())
    store.save("u1", 1_000, 2_000, 1)

    assert store.load("u2") is None

    store.save("u2", 5_000, 6_000, 1)
    store.clear("u1")

    assert store.load("u1") is None
    assert store.load("u2") == StoredSession(5_000, 6_000, 1)


def test_partial_or_garbled_data_counts_as_absent():
    storage = InMemoryStorage()
    store = SessionStore(storage)
    store.save("u1", 1_000, 2_000, 1)

    storage.data.pop("@attendance:shift_duration:u1")
    assert store.load("u1") is None

    store.save("u1", 1_000, 2_000, 1)
    storage.data["@attendance:shift_end_timestamp:u1"] = "not-a-number"
    assert store.load("u1") is None


def test_failures_are_logged_not_raised(caplog):
    store = SessionStore(BrokenStorage())

    with caplog.at_level(logging.WARNING):
        assert store.save("u1", 1, 2, 3) is False
        assert store.load("u1") is None
        assert store.clear("u1") is False

    assert "Failed to persist" in caplog.text
