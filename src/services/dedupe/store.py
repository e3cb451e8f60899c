"""Dedupe stores: atomic insert-if-absent with expiry."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.core.exceptions import DedupeStoreError


class DedupeStore(ABC):
    """Storage contract behind DedupeGuard."""

    @abstractmethod
    async def insert_if_absent(self, key: str, now: datetime, expires_at: datetime) -> bool:
        """Record ``key`` until ``expires_at`` unless a live record exists.

        Returns True when this call created the record, False when a record
        that has not expired at ``now`` already exists.

        Raises:
            DedupeStoreError: On any other storage failure
        """


class InMemoryDedupeStore(DedupeStore):
    """Process-local store, for tests and single-process deployments."""

    def __init__(self) -> None:
        self._records: dict[str, datetime] = {}
        self._lock = threading.Lock()

    async def insert_if_absent(self, key: str, now: datetime, expires_at: datetime) -> bool:
        with self._lock:
            existing = self._records.get(key)
            if existing is not None and existing > now:
                return False
            self._records[key] = expires_at
            return True

    def __len__(self) -> int:
        return len(self._records)


class MongoDedupeStore(DedupeStore):
    """Shared durable store backed by a MongoDB collection keyed on ``_id``.

    One conditional upsert per admission: the filter only matches an expired
    record, so a live record makes the upsert collide on ``_id`` and MongoDB
    rejects it with a duplicate key error. Concurrent callers for the same
    key race on the unique ``_id`` index and exactly one of them wins.
    """

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def insert_if_absent(self, key: str, now: datetime, expires_at: datetime) -> bool:
        try:
            await self.collection.update_one(
                {"_id": key, "expires_at": {"$lte": now}},
                {"$set": {"expires_at": expires_at, "admitted_at": now}},
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        except PyMongoError as e:
            raise DedupeStoreError(str(e)) from e
        return True
