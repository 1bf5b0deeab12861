"""Tests for the SQLite document store."""

import asyncio

import pytest

from circuit_crew.db import SQLiteStore, init_db


@pytest.fixture
def store(temp_db_path):
    asyncio.run(init_db(temp_db_path))
    return SQLiteStore(temp_db_path)


class TestSQLiteStore:
    """Tests for SQLiteStore."""

    def test_save_and_fetch(self, store):
        async def run():
            await store.save("alex", "people", "p1", {"display_name": "Alex", "id": "ignored"})
            return await store.fetch_all("alex", "people")

        docs = asyncio.run(run())
        assert docs == [{"display_name": "Alex", "id": "p1"}]

    def test_save_replaces(self, store):
        async def run():
            await store.save("alex", "settings", "session", {"rest_duration_sec": 5})
            await store.save("alex", "settings", "session", {"rest_duration_sec": 9})
            return await store.get("alex", "settings", "session")

        assert asyncio.run(run()) == {"rest_duration_sec": 9, "id": "session"}

    def test_owners_and_collections_are_separate(self, store):
        async def run():
            await store.save("alex", "people", "p1", {"display_name": "Alex"})
            await store.save("sam", "people", "p2", {"display_name": "Sam"})
            await store.save("alex", "exercises", "e1", {"name": "Curl"})
            return (
                await store.fetch_all("alex", "people"),
                await store.fetch_all("sam", "people"),
                await store.fetch_all("sam", "exercises"),
            )

        alex, sam, sam_exercises = asyncio.run(run())
        assert [d["id"] for d in alex] == ["p1"]
        assert [d["id"] for d in sam] == ["p2"]
        assert sam_exercises == []

    def test_sorted_fetch(self, store):
        async def run():
            await store.save("o", "sessions", "b", {"date": "2024-03-05T07:00:00"})
            await store.save("o", "sessions", "a", {"date": "2024-03-01T07:00:00"})
            await store.save("o", "sessions", "c", {"date": "2024-03-09T07:00:00"})
            return await store.fetch_all("o", "sessions", "date")

        assert [d["id"] for d in asyncio.run(run())] == ["a", "b", "c"]

    def test_invalid_sort_key(self, store):
        with pytest.raises(ValueError):
            asyncio.run(store.fetch_all("o", "sessions", "date; DROP TABLE documents"))

    def test_remove(self, store):
        async def run():
            await store.save("o", "people", "p1", {"display_name": "Alex"})
            await store.remove("o", "people", "p1")
            await store.remove("o", "people", "missing")
            return await store.get("o", "people", "p1")

        assert asyncio.run(run()) is None

    def test_creates_schema_on_demand(self, temp_db_path):
        store = SQLiteStore(temp_db_path)
        assert asyncio.run(store.fetch_all("o", "people")) == []
