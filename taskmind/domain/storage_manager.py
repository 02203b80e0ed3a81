"""
Storage selection: database when reachable, in-memory demo data otherwise.

The manager probes the persistent backend once (a plain get_tasks() raced
against a timeout) and hands the chosen Storage to every caller after that.
The decision is not revisited on its own; reprobe() is the explicit way back
to the database once it becomes reachable.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from taskmind.constants import (
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    STORAGE_KIND_DATABASE,
    STORAGE_KIND_MOCK,
    STORAGE_KIND_UNTESTED,
)
from taskmind.domain.ports import Storage

logger = logging.getLogger(__name__)

StorageFactory = Callable[[], Storage]

_MESSAGES = {
    STORAGE_KIND_DATABASE: "Connected to the database successfully.",
    STORAGE_KIND_MOCK: (
        "Using mock storage with sample data for demonstration. "
        "Database connection may need configuration."
    ),
    STORAGE_KIND_UNTESTED: "Storage has not been probed yet.",
}


@dataclass(frozen=True)
class StorageInfo:
    kind: str  # 'database' | 'mock' | 'untested'
    message: str


class StorageManager:
    def __init__(
        self,
        persistent_factory: StorageFactory,
        fallback_factory: StorageFactory,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
    ) -> None:
        self._persistent_factory = persistent_factory
        self._fallback_factory = fallback_factory
        self._probe_timeout = probe_timeout
        self._storage: Optional[Storage] = None
        self._kind = STORAGE_KIND_UNTESTED
        self._probe_task: Optional[asyncio.Task[Storage]] = None

    @property
    def is_using_mock(self) -> bool:
        return self._kind == STORAGE_KIND_MOCK

    def get_storage_info(self) -> StorageInfo:
        return StorageInfo(kind=self._kind, message=_MESSAGES[self._kind])

    async def get_storage(self) -> Storage:
        if self._storage is not None:
            return self._storage
        if self._probe_task is None:
            # concurrent first callers all await this one probe
            self._probe_task = asyncio.ensure_future(self._select())
        return await asyncio.shield(self._probe_task)

    async def reprobe(self) -> StorageInfo:
        """Probe the database again and switch to it if it answers."""
        if self._probe_task is not None and not self._probe_task.done():
            await asyncio.shield(self._probe_task)
        self._probe_task = asyncio.ensure_future(self._select())
        await asyncio.shield(self._probe_task)
        return self.get_storage_info()

    async def _select(self) -> Storage:
        persistent = await self._probe()
        if persistent is not None:
            self._storage, self._kind = persistent, STORAGE_KIND_DATABASE
            logger.info("Storage probe succeeded, using database")
            return persistent

        # keep the data of an already active in-memory store across reprobes
        if self._kind != STORAGE_KIND_MOCK or self._storage is None:
            self._storage = self._fallback_factory()
        self._kind = STORAGE_KIND_MOCK
        logger.warning("Database unavailable, using mock storage with sample data")
        return self._storage

    async def _probe(self) -> Optional[Storage]:
        try:
            candidate = self._persistent_factory()
            await asyncio.wait_for(candidate.get_tasks(), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.warning("Storage probe timed out after %.1fs", self._probe_timeout)
            return None
        except Exception as e:
            logger.warning("Storage probe failed: %s", e)
            return None
        return candidate
