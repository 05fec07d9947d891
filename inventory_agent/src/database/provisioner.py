"""
Inventory Agent - DatabaseProvisioner
======================================
Makes sure the inventory collection and its Atlas vector-search index
exist before any document is written.

Sharp edge
----------
``ensure_vector_index`` is **destructive**: it drops every regular index
and every search index on the collection before creating the single
``vectorSearch`` index.  Any other index a user added by hand is lost.
Atlas drops search indexes asynchronously, so the provisioner waits for
the drop to finish before re-creating an index under the same name.

A failure while (re)building the index is logged and swallowed; seeding
continues against a collection that may lack a working vector index.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any

from pymongo.operations import SearchIndexModel

from inventory_agent.config.settings import settings
from inventory_agent.src.core.exceptions import IndexProvisioningError
from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VectorIndexSpec:
    """Geometry of the vector-search index."""
    name: str = "vector_index"
    path: str = "embedding"
    num_dimensions: int = 768
    similarity: str = "cosine"

    @classmethod
    def from_settings(cls) -> "VectorIndexSpec":
        return cls(name=settings.VECTOR_INDEX_NAME, path=settings.EMBEDDING_KEY, num_dimensions=settings.EMBEDDING_DIMENSIONS, similarity=settings.VECTOR_SIMILARITY)

    def to_definition(self) -> dict[str, Any]:
        return {"fields": [{"type": "vector", "path": self.path, "numDimensions": self.num_dimensions, "similarity": self.similarity}]}

    def to_model(self) -> SearchIndexModel:
        return SearchIndexModel(definition=self.to_definition(), name=self.name, type="vectorSearch")


class DatabaseProvisioner:
    """
    Collection and index setup for one database.

    Parameters
    ----------
    database
        An async (``motor``) database handle.
    poll_interval, drop_timeout
        Seconds between ``list_search_indexes`` checks, and the overall
        limit, while Atlas finishes dropping search indexes.  Default to settings.
    """

    __slots__ = ("_db", "_poll_interval", "_drop_timeout")

    def __init__(self, database: Any, poll_interval: float | None = None, drop_timeout: float | None = None) -> None:
        self._db = database
        self._poll_interval = settings.SEARCH_INDEX_POLL_INTERVAL if poll_interval is None else poll_interval
        self._drop_timeout = settings.SEARCH_INDEX_DROP_TIMEOUT if drop_timeout is None else drop_timeout


    async def ensure_collection(self, name: str) -> bool:
        """Create collection *name* if it does not exist.  Returns True when it was created."""
        logger.info("Setting up database and collection...")
        existing = await self._db.list_collection_names(filter={"name": name})

        if existing:
            logger.info("'%s' collection already exists in '%s' database", name, self._db.name)
            return False

        await self._db.create_collection(name)
        logger.info("Created '%s' collection in '%s' database", name, self._db.name)
        return True


    async def ensure_vector_index(self, collection_name: str, spec: VectorIndexSpec | None = None) -> bool:
        """
        Drop all indexes on the collection, then create exactly one vector-search index.

        Never raises: failures (including a drop that does not finish within
        ``drop_timeout``) are wrapped in ``IndexProvisioningError``, logged,
        and reported by returning False.
        """
        spec = spec or VectorIndexSpec.from_settings()
        collection = self._db[collection_name]

        try:
            await collection.drop_indexes()
            dropped = await self._drop_search_indexes(collection)
            if dropped:
                await self._wait_until_dropped(collection, dropped)

            logger.info("Creating vector search index '%s' (%d dims, %s)...", spec.name, spec.num_dimensions, spec.similarity)
            await collection.create_search_index(spec.to_model())
            logger.info("Vector search index created successfully")
            return True

        except Exception as exc:
            error = IndexProvisioningError(spec.name, str(exc))
            logger.error("Error creating vector search index: %s", error, exc_info=exc)
            return False


    async def _drop_search_indexes(self, collection: Any) -> set[str]:
        """``drop_indexes`` leaves Atlas search indexes in place; remove them explicitly."""
        names = await self._search_index_names(collection)
        for name in sorted(names):
            logger.debug("Dropping search index '%s'.", name)
            await collection.drop_search_index(name)
        return names


    async def _wait_until_dropped(self, collection: Any, names: set[str]) -> None:
        """
        Poll until none of *names* is listed any more.

        Atlas only *starts* a search-index drop; creating an index with the
        same name before the drop completes fails as a duplicate.
        """
        deadline = time.monotonic() + self._drop_timeout
        while True:
            pending = await self._search_index_names(collection) & names
            if not pending:
                logger.debug("Search index drop completed: %s", ", ".join(sorted(names)))
                return
            if time.monotonic() >= deadline:
                raise TimeoutError(f"search index(es) still being dropped after {self._drop_timeout:.0f}s: {', '.join(sorted(pending))}")
            logger.debug("Waiting for search index drop: %s", ", ".join(sorted(pending)))
            await asyncio.sleep(self._poll_interval)


    @staticmethod
    async def _search_index_names(collection: Any) -> set[str]:
        # motor returns the cursor directly; pymongo's async API returns a coroutine
        cursor = collection.list_search_indexes()
        if inspect.isawaitable(cursor):
            cursor = await cursor
        return {index["name"] for index in await cursor.to_list(length=None)}
