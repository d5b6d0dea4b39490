"""
Entity store - schema-less persistence of named record collections.

Each collection is one JSON array kept under its entity name in the
key/value storage. Records are plain dicts with a store-minted string ``id``.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from adapters.storage_adapter import KeyValueStorage
from app.exceptions import DeserializationError
from core.utils.helpers import matches_criteria, mint_record_id
from domain.seeds import DEFAULT_SEEDS, SeedFactory

logger = logging.getLogger("mealtrack.entities")

Record = Dict[str, Any]


# ============================================================================
# Collection codec
# ============================================================================


def _json_default(obj):
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_collection(records: Iterable[Mapping[str, Any]]) -> str:
    return json.dumps(list(records), default=_json_default, ensure_ascii=False)


def decode_collection(raw: str) -> List[Record]:
    """
    Decode a persisted collection.

    Raises:
        DeserializationError: if the blob is not JSON or not a JSON array
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise DeserializationError(f"Collection blob is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DeserializationError(
            f"Collection blob must be a JSON array, got {type(data).__name__}"
        )
    records = [item for item in data if isinstance(item, dict)]
    if len(records) != len(data):
        logger.warning(f"Dropped {len(data) - len(records)} non-object entries from collection")
    return records


# ============================================================================
# Entity store
# ============================================================================


class EntityStore:
    """
    Uniform CRUD over named collections of schema-less records.

    Semantics:
    - ``list``/``filter`` never fail; a corrupt blob reads as an empty collection
    - a never-persisted collection with a seed is materialized on first access
    - ``update`` on an unknown id returns None without writing
    - ``delete`` is idempotent and always returns True

    Every operation holds a per-entity-name lock for its read-modify-write, so
    concurrent requests on the same collection are serialized. The locks are
    re-entrant: callers composing several operations can hold ``locked()``
    around them.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        seeds: Optional[Dict[str, SeedFactory]] = None,
        id_factory: Callable[[], str] = mint_record_id,
        today: Callable[[], date] = date.today,
    ):
        self._storage = storage
        self._seeds = DEFAULT_SEEDS if seeds is None else seeds
        self._id_factory = id_factory
        self._today = today
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    # ------------------ Locking ------------------
    def _lock_for(self, entity_name: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(entity_name)
            if lock is None:
                lock = self._locks[entity_name] = threading.RLock()
            return lock

    @contextmanager
    def locked(self, entity_name: str) -> Iterator[None]:
        """Hold the writer lock of ``entity_name`` across several operations."""
        with self._lock_for(entity_name):
            yield

    # ------------------ Persistence ------------------
    def _load(self, entity_name: str, persist_seed: bool = True) -> List[Record]:
        raw = self._storage.get_item(entity_name)
        if raw is None:
            factory = self._seeds.get(entity_name)
            if factory is None:
                return []
            seed = factory(self._today())
            if not persist_seed:
                return decode_collection(encode_collection(seed))
            self._save(entity_name, seed)
            logger.info(f"Materialized seed for {entity_name} ({len(seed)} records)")
            return decode_collection(encode_collection(seed))
        try:
            return decode_collection(raw)
        except DeserializationError as exc:
            logger.warning(f"Treating {entity_name} as empty: {exc}")
            return []

    def _save(self, entity_name: str, records: List[Record]) -> None:
        self._storage.set_item(entity_name, encode_collection(records))

    def _mint_id(self, taken: set) -> str:
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        taken.add(new_id)
        return new_id

    # ------------------ Queries ------------------
    def list(self, entity_name: str) -> List[Record]:
        """Return the full collection in stored order."""
        with self._lock_for(entity_name):
            return self._load(entity_name)

    def filter(self, entity_name: str, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]:
        """Return records whose fields loosely equal every criterion."""
        records = self.list(entity_name)
        if not criteria:
            return records
        return [r for r in records if matches_criteria(r, dict(criteria))]

    # ------------------ Mutations ------------------
    def create(self, entity_name: str, fields: Mapping[str, Any]) -> Record:
        """Append a record with a freshly minted id and return it."""
        return self.bulk_create(entity_name, [fields])[0]

    def bulk_create(self, entity_name: str, fields_list: Iterable[Mapping[str, Any]]) -> List[Record]:
        """Append several records in one write; each gets its own id, order kept."""
        with self._lock_for(entity_name):
            records = self._load(entity_name)
            taken = {r.get("id") for r in records}
            created: List[Record] = []
            for fields in fields_list:
                body = {k: v for k, v in dict(fields).items() if k != "id"}
                created.append({"id": self._mint_id(taken), **body})
            records.extend(created)
            self._save(entity_name, records)
        logger.debug(f"Created {len(created)} {entity_name} record(s)")
        return [dict(r) for r in created]

    def update(self, entity_name: str, record_id: str, patch: Mapping[str, Any]) -> Optional[Record]:
        """Shallow-merge ``patch`` over the record; None (and no write) if the id is unknown."""
        with self._lock_for(entity_name):
            records = self._load(entity_name, persist_seed=False)
            for index, record in enumerate(records):
                if record.get("id") == record_id:
                    merged = {**record, **{k: v for k, v in dict(patch).items() if k != "id"}}
                    records[index] = merged
                    self._save(entity_name, records)
                    logger.debug(f"Updated {entity_name} {record_id}")
                    return dict(merged)
        logger.debug(f"Update skipped, {entity_name} {record_id} not found")
        return None

    def delete(self, entity_name: str, record_id: str) -> bool:
        """Remove the record if present. Always returns True."""
        with self._lock_for(entity_name):
            records = self._load(entity_name)
            remaining = [r for r in records if r.get("id") != record_id]
            self._save(entity_name, remaining)
        if len(remaining) != len(records):
            logger.debug(f"Deleted {entity_name} {record_id}")
        return True

    # ------------------ Clients ------------------
    def entity(self, entity_name: str) -> "EntityClient":
        """Client bound to one collection, e.g. ``store.entity("Meal").list()``."""
        return EntityClient(self, entity_name)


class EntityClient:
    """The six store operations bound to a single entity name."""

    def __init__(self, store: EntityStore, entity_name: str):
        self.store = store
        self.entity_name = entity_name

    def list(self) -> List[Record]:
        return self.store.list(self.entity_name)

    def filter(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]:
        return self.store.filter(self.entity_name, criteria)

    def create(self, fields: Mapping[str, Any]) -> Record:
        return self.store.create(self.entity_name, fields)

    def bulk_create(self, fields_list: Iterable[Mapping[str, Any]]) -> List[Record]:
        return self.store.bulk_create(self.entity_name, fields_list)

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Record]:
        return self.store.update(self.entity_name, record_id, patch)

    def delete(self, record_id: str) -> bool:
        return self.store.delete(self.entity_name, record_id)

    def __repr__(self) -> str:
        return f"<EntityClient {self.entity_name}>"
