import asyncio

import pytest

from computacion.core.errors import ConflictError
from computacion.db.memory import MemoryStore

DOC = {"codigo": 1, "nombre": "Router TP-Link", "precio": 30000.0, "categoria": "Redes"}


def test_insert_and_duplicate():
    store = MemoryStore()
    assert asyncio.run(store.insert_one(dict(DOC))).acknowledged
    with pytest.raises(ConflictError):
        asyncio.run(store.insert_one(dict(DOC)))
    assert len(store.docs) == 1


def test_update_counts_matched_and_modified():
    store = MemoryStore([DOC])
    result = asyncio.run(store.update_one({"codigo": 1}, {"precio": 30000.0}))
    assert (result.matched_count, result.modified_count) == (1, 0)
    result = asyncio.run(store.update_one({"codigo": 1}, {"precio": 25000.0}))
    assert (result.matched_count, result.modified_count) == (1, 1)
    result = asyncio.run(store.update_one({"codigo": 9}, {"precio": 1.0}))
    assert result.matched_count == 0


def test_delete():
    store = MemoryStore([DOC])
    assert asyncio.run(store.delete_one({"codigo": 9})).deleted_count == 0
    assert asyncio.run(store.delete_one({"codigo": 1})).deleted_count == 1
    assert store.docs == []


def test_returned_documents_are_copies():
    store = MemoryStore([DOC])
    found = asyncio.run(store.find_one({"codigo": 1}))
    found["precio"] = 0
    assert store.docs[0]["precio"] == 30000.0


def test_acquire_releases_on_error():
    store = MemoryStore()

    async def run():
        async with store.acquire() as handle:
            assert handle.active_handles == 1
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(run())
    assert store.active_handles == 0
