"""Redis-backed document collections.

Each collection is a single Redis hash (``doc:{name}``) mapping an opaque
ULID to a JSON document. Reads scan the hash and apply a small Mongo-style
filter language; every write runs under ``WATCH``/``MULTI`` so a write only
lands when the documents it was decided against are unchanged.

Filter language:

- ``{"field": value}`` equality
- ``{"field": {"$in": [...]}}``, ``$nin``, ``$ne``, ``$exists``
- ``{"$or": [filter, ...]}``
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import ulid
from redis.exceptions import WatchError

from app.infra.redis import RedisProxy, redis_client
from app.obs import metrics as obs_metrics
from app.settings import settings

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Sequence[Tuple[str, int]]

ASCENDING = 1
DESCENDING = -1

_RESERVED_FIELDS = ("id", "created_at")


class DuplicateDocumentError(Exception):
	"""Raised when a guarded write finds a conflicting document."""

	def __init__(self, collection: str, existing: Document) -> None:
		super().__init__(f"conflicting document in {collection}: {existing.get('id')}")
		self.collection = collection
		self.existing = existing


class ConcurrentUpdateError(Exception):
	"""Raised when a compare-and-swap write keeps losing races."""

	reason = "concurrent_update"

	def __init__(self, collection: str) -> None:
		super().__init__(f"too much contention on {collection}")
		self.collection = collection


def _now() -> datetime:
	return datetime.now(timezone.utc)


def _encode_default(value: Any) -> Any:
	if isinstance(value, datetime):
		return {"$date": value.isoformat()}
	raise TypeError(f"unserialisable value: {type(value).__name__}")


def _decode_hook(obj: Dict[str, Any]) -> Any:
	if len(obj) == 1 and "$date" in obj:
		return datetime.fromisoformat(obj["$date"])
	return obj


def encode_document(doc: Mapping[str, Any]) -> str:
	return json.dumps(doc, default=_encode_default, separators=(",", ":"))


def decode_document(raw: str) -> Document:
	return json.loads(raw, object_hook=_decode_hook)


def _match_operator(doc: Mapping[str, Any], key: str, op: str, arg: Any) -> bool:
	value = doc.get(key)
	if op == "$in":
		return value in arg
	if op == "$nin":
		return value not in arg
	if op == "$ne":
		return value != arg
	if op == "$exists":
		return (doc.get(key) is not None) == bool(arg)
	raise ValueError(f"unsupported filter operator: {op}")


def matches(doc: Mapping[str, Any], flt: Optional[Filter]) -> bool:
	"""Return True when ``doc`` satisfies ``flt``."""
	if not flt:
		return True
	for key, cond in flt.items():
		if key == "$or":
			if not any(matches(doc, sub) for sub in cond):
				return False
			continue
		if isinstance(cond, Mapping) and cond and all(str(k).startswith("$") for k in cond):
			for op, arg in cond.items():
				if not _match_operator(doc, key, op, arg):
					return False
		elif doc.get(key) != cond:
			return False
	return True


def _sort_value(value: Any) -> Tuple[int, Any]:
	return (0, "") if value is None else (1, value)


def sort_documents(docs: List[Document], sort: Optional[SortSpec]) -> List[Document]:
	# ULIDs are time-ordered, so id order doubles as insertion order.
	docs.sort(key=lambda d: d["id"])
	for field, direction in reversed(list(sort or ())):
		docs.sort(key=lambda d: _sort_value(d.get(field)), reverse=direction < 0)
	return docs


class DocCollection:
	"""A named collection of JSON documents stored in one Redis hash."""

	def __init__(
		self,
		name: str,
		client: RedisProxy = redis_client,
		*,
		cas_retries: Optional[int] = None,
	) -> None:
		self.name = name
		self._client = client
		self._cas_retries = cas_retries or settings.docstore_cas_retries

	@property
	def key(self) -> str:
		return f"doc:{self.name}"

	async def _load(self, reader) -> List[Document]:
		raw = await reader.hgetall(self.key)
		return [decode_document(value) for value in raw.values()]

	async def _transact(self, decide: Callable[[List[Document]], Tuple[Any, Iterable[Tuple[str, Optional[Document]]]]]) -> Any:
		"""Run ``decide`` against a watched snapshot and apply its writes atomically.

		``decide`` returns ``(result, writes)`` where each write is ``(doc_id, doc)``;
		a ``None`` doc deletes the entry.
		"""
		for attempt in range(self._cas_retries):
			async with self._client.pipeline(transaction=True) as pipe:
				try:
					await pipe.watch(self.key)
					docs = await self._load(pipe)
					result, writes = decide(docs)
					writes = list(writes)
					if not writes:
						return result
					pipe.multi()
					for doc_id, doc in writes:
						if doc is None:
							pipe.hdel(self.key, doc_id)
						else:
							pipe.hset(self.key, doc_id, encode_document(doc))
					await pipe.execute()
					return result
				except WatchError:
					obs_metrics.inc_cas_retry(self.name)
					logger.debug("docstore_cas_retry", extra={"collection": self.name, "attempt": attempt + 1})
					continue
		logger.warning("docstore_cas_exhausted", extra={"collection": self.name})
		raise ConcurrentUpdateError(self.name)

	async def create_one(self, doc: Mapping[str, Any], *, unless: Optional[Filter] = None) -> str:
		"""Insert ``doc`` and return its id.

		When ``unless`` is given the insert only happens if no stored document
		matches it; otherwise ``DuplicateDocumentError`` is raised.
		"""
		now = _now()
		new_doc: Document = {**doc, "id": str(ulid.new()), "created_at": now, "updated_at": now}

		def decide(docs: List[Document]):
			if unless is not None:
				clash = next((d for d in sort_documents(docs, None) if matches(d, unless)), None)
				if clash is not None:
					raise DuplicateDocumentError(self.name, clash)
			return new_doc["id"], [(new_doc["id"], new_doc)]

		return await self._transact(decide)

	async def read_one(self, flt: Filter) -> Optional[Document]:
		docs = await self.read_many(flt, limit=1)
		return docs[0] if docs else None

	async def read_many(
		self,
		flt: Optional[Filter] = None,
		*,
		sort: Optional[SortSpec] = None,
		limit: Optional[int] = None,
	) -> List[Document]:
		docs = [d for d in await self._load(self._client) if matches(d, flt)]
		sort_documents(docs, sort)
		return docs[:limit] if limit is not None else docs

	async def count(self, flt: Optional[Filter] = None) -> int:
		return len(await self.read_many(flt))

	async def partial_update_one(
		self,
		flt: Filter,
		patch: Mapping[str, Any],
		*,
		unless: Optional[Filter] = None,
		sort: Optional[SortSpec] = None,
	) -> Optional[Document]:
		"""Apply ``patch`` to the first document matching ``flt``.

		Returns the updated document, or ``None`` when nothing matched at write
		time. ``unless`` guards against any *other* document matching it.
		"""
		clean = {k: v for k, v in patch.items() if k not in _RESERVED_FIELDS}

		def decide(docs: List[Document]):
			target = next((d for d in sort_documents(list(docs), sort) if matches(d, flt)), None)
			if target is None:
				return None, []
			if unless is not None:
				clash = next((d for d in docs if d["id"] != target["id"] and matches(d, unless)), None)
				if clash is not None:
					raise DuplicateDocumentError(self.name, clash)
			updated = {**target, **clean, "updated_at": _now()}
			return updated, [(updated["id"], updated)]

		return await self._transact(decide)

	async def upsert_one(self, flt: Filter, patch: Mapping[str, Any]) -> Tuple[Document, bool]:
		"""Update the document matching ``flt`` or create it from ``flt`` + ``patch``.

		Returns ``(document, created)``. ``flt`` must be plain equality fields.
		"""
		clean = {k: v for k, v in patch.items() if k not in _RESERVED_FIELDS}

		def decide(docs: List[Document]):
			now = _now()
			target = next((d for d in sort_documents(docs, None) if matches(d, flt)), None)
			if target is None:
				created = {**flt, **clean, "id": str(ulid.new()), "created_at": now, "updated_at": now}
				return (created, True), [(created["id"], created)]
			updated = {**target, **clean, "updated_at": now}
			return (updated, False), [(updated["id"], updated)]

		return await self._transact(decide)

	async def delete_one(self, flt: Filter) -> int:
		def decide(docs: List[Document]):
			target = next((d for d in sort_documents(docs, None) if matches(d, flt)), None)
			if target is None:
				return 0, []
			return 1, [(target["id"], None)]

		return await self._transact(decide)

	async def delete_many(self, flt: Filter) -> int:
		def decide(docs: List[Document]):
			doomed = [d["id"] for d in docs if matches(d, flt)]
			return len(doomed), [(doc_id, None) for doc_id in doomed]

		return await self._transact(decide)
