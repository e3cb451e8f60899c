"""Dedupe service - at-most-once admission of review tasks."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.config import settings
from src.core.exceptions import DedupeStoreError
from src.core.logging import get_logger
from src.services.dedupe.client import get_collection
from src.services.dedupe.store import DedupeStore, InMemoryDedupeStore, MongoDedupeStore

logger = get_logger("dedupe.service")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DedupeGuard:
    """Admit each key once per expiry window.

    Args:
        store: Atomic insert-if-absent store shared by all workers
        ttl: How long an admission blocks the same key
        clock: Source of the current time, injectable for tests
    """

    def __init__(
        self,
        store: DedupeStore,
        ttl: timedelta | None = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.ttl = ttl if ttl is not None else timedelta(seconds=settings.dedupe_ttl_seconds)
        self.clock = clock or utc_now

    async def admit(self, key: str) -> bool:
        """Return True for the first admission of ``key``, False for a duplicate.

        Raises:
            DedupeStoreError: If the store fails for any other reason
        """
        now = self.clock()
        try:
            admitted = await self.store.insert_if_absent(key, now, now + self.ttl)
        except DedupeStoreError:
            logger.error(f"Dedupe store failure for {key}")
            raise
        except Exception as e:
            logger.error(f"Dedupe store failure for {key}: {e}")
            raise DedupeStoreError(str(e)) from e

        if not admitted:
            logger.info(f"Duplicate, skipping: {key}")
        return admitted


_guard: DedupeGuard | None = None


def get_dedupe_guard() -> DedupeGuard:
    """Get the process-wide guard for the configured backend."""
    global _guard

    if _guard:
        return _guard

    if settings.dedupe_backend == "mongodb":
        store: DedupeStore = MongoDedupeStore(get_collection())
    else:
        logger.warning("Using in-memory dedupe store; duplicates are only caught within this process")
        store = InMemoryDedupeStore()

    _guard = DedupeGuard(store)
    return _guard
