import asyncio
from datetime import datetime

import pytest

from app.infra.docstore import (
    ConcurrentUpdateError,
    DocCollection,
    DuplicateDocumentError,
    decode_document,
    encode_document,
    matches,
    sort_documents,
)


def test_documents_keep_datetimes():
    stamp = datetime(2024, 5, 1, 12, 30)
    raw = encode_document({"when": stamp, "nested": {"n": 1}})
    decoded = decode_document(raw)
    assert decoded["when"] == stamp
    assert decoded["nested"] == {"n": 1}


def test_filter_operators():
    doc = {"id": "1", "status": "pending", "caller_id": "a", "end_time": None}
    assert matches(doc, {"status": {"$in": ["pending", "active"]}})
    assert not matches(doc, {"status": {"$nin": ["pending"]}})
    assert matches(doc, {"status": {"$ne": "ended"}})
    assert matches(doc, {"end_time": {"$exists": False}})
    assert matches(doc, {"$or": [{"caller_id": "b"}, {"caller_id": "a"}]})
    assert not matches(doc, {"$or": [{"caller_id": "b"}], "status": "pending"})
    assert matches(doc, None)


def test_sort_orders_by_fields_then_id():
    docs = [
        {"id": "03", "ts": 2},
        {"id": "01", "ts": 2},
        {"id": "02", "ts": 1},
        {"id": "04", "ts": None},
    ]
    assert [d["id"] for d in sort_documents(list(docs), [("ts", 1)])] == ["04", "02", "01", "03"]
    assert [d["id"] for d in sort_documents(list(docs), [("ts", -1), ("id", -1)])] == ["03", "01", "02", "04"]


@pytest.mark.asyncio
async def test_create_and_read_roundtrip(fake_redis):
    collection = DocCollection("things", fake_redis)
    doc_id = await collection.create_one({"name": "kettle"})
    doc = await collection.read_one({"id": doc_id})
    assert doc["name"] == "kettle"
    assert isinstance(doc["created_at"], datetime)
    assert doc["created_at"] == doc["updated_at"]
    assert await collection.count() == 1


@pytest.mark.asyncio
async def test_guarded_create_rejects_clash(fake_redis):
    collection = DocCollection("things", fake_redis)
    first = await collection.create_one({"name": "kettle"}, unless={"name": "kettle"})
    with pytest.raises(DuplicateDocumentError) as excinfo:
        await collection.create_one({"name": "kettle"}, unless={"name": "kettle"})
    assert excinfo.value.existing["id"] == first
    assert await collection.count() == 1


@pytest.mark.asyncio
async def test_partial_update_respects_filter(fake_redis):
    collection = DocCollection("things", fake_redis)
    doc_id = await collection.create_one({"state": "open"})
    updated = await collection.partial_update_one({"id": doc_id, "state": "open"}, {"state": "closed", "id": "x"})
    assert updated["state"] == "closed"
    assert updated["id"] == doc_id
    assert await collection.partial_update_one({"id": doc_id, "state": "open"}, {"state": "closed"}) is None


@pytest.mark.asyncio
async def test_upsert_creates_then_updates(fake_redis):
    collection = DocCollection("things", fake_redis)
    doc, created = await collection.upsert_one({"owner": "a"}, {"value": 1})
    assert created
    again, created_again = await collection.upsert_one({"owner": "a"}, {"value": 2})
    assert not created_again
    assert again["id"] == doc["id"]
    assert again["value"] == 2
    assert await collection.count({"owner": "a"}) == 1


@pytest.mark.asyncio
async def test_delete_one_and_many(fake_redis):
    collection = DocCollection("things", fake_redis)
    for idx in range(3):
        await collection.create_one({"kind": "a", "n": idx})
    await collection.create_one({"kind": "b"})
    assert await collection.delete_one({"kind": "missing"}) == 0
    assert await collection.delete_one({"kind": "b"}) == 1
    assert await collection.delete_many({"kind": "a"}) == 3
    assert await collection.count() == 0


@pytest.mark.asyncio
async def test_concurrent_guarded_creates_admit_one(fake_redis):
    collection = DocCollection("things", fake_redis, cas_retries=20)

    async def attempt():
        try:
            await collection.create_one({"slot": 1}, unless={"slot": 1})
            return True
        except DuplicateDocumentError:
            return False

    results = await asyncio.gather(*(attempt() for _ in range(5)))
    assert results.count(True) == 1
    assert await collection.count() == 1


@pytest.mark.asyncio
async def test_cas_gives_up_after_retries(fake_redis, monkeypatch):
    collection = DocCollection("things", fake_redis, cas_retries=2)
    doc_id = await collection.create_one({"n": 0})
    original_load = collection._load

    async def interfering_load(reader):
        docs = await original_load(reader)
        # A write from "another client" lands between WATCH and EXEC.
        await fake_redis.hset(collection.key, "intruder", encode_document({"id": "intruder"}))
        return docs

    monkeypatch.setattr(collection, "_load", interfering_load)
    with pytest.raises(ConcurrentUpdateError):
        await collection.partial_update_one({"id": doc_id}, {"n": 1})
