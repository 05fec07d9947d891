"""
Inventory Agent - SeedingOrchestrator
======================================
One-shot maintenance run that clears the inventory collection and
repopulates it with freshly generated, embedded items.

Stages (linear, no retry)::

    DISCONNECTED → CONNECTED → PROVISIONED → CLEARED → GENERATED → PERSISTED

Failure policy
--------------
Any error at any stage is logged and recorded on the ``SeedReport``; the
run then goes straight to teardown.  Items already written stay written
(no rollback).  The client is closed on every path.

The only error that does *not* end the run is a failed vector-index
build, which ``DatabaseProvisioner`` swallows.

Usage:
    orchestrator = SeedingOrchestrator(client, generator, embedder)
    report = await orchestrator.run(10)
"""

from __future__ import annotations

import inspect
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from inventory_agent.config.settings import settings
from inventory_agent.src.core.schema import Item
from inventory_agent.src.database.provisioner import DatabaseProvisioner, VectorIndexSpec
from inventory_agent.src.database.vector_store import Embedder, InventoryVectorStore
from inventory_agent.src.utils.logger import get_logger

logger = get_logger(__name__)


class SeedState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    PROVISIONED = "provisioned"
    CLEARED = "cleared"
    GENERATED = "generated"
    PERSISTED = "persisted"


class ItemSource(Protocol):
    """Anything that can produce a batch of validated items."""

    async def generate(self, count: int) -> list[Item]: ...


@dataclass
class SeedReport:
    """Outcome of one seeding run."""
    state: SeedState = SeedState.DISCONNECTED  # last stage reached
    index_created: bool = False
    cleared: int = 0
    generated: int = 0
    persisted: int = 0
    error: Exception | None = None
    connection_closed: bool = False
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.state is SeedState.PERSISTED


class SeedingOrchestrator:
    """
    Sequences connect → provision → clear → generate → embed+persist → disconnect.

    Parameters
    ----------
    client
        An async (``motor``) client.  It is closed when ``run`` finishes.
    generator
        Item source, normally a ``SyntheticDataGenerator``.
    embedder
        Embedding model handed to the ``InventoryVectorStore``.
    db_name, collection_name, text_key
        Target names.  Default to settings.
    index_spec
        Vector index geometry.  Defaults to ``VectorIndexSpec.from_settings()``.
    """

    __slots__ = ("_client", "_generator", "_embedder", "_db_name", "_collection_name", "_text_key", "_index_spec")

    def __init__(self, client: Any, generator: ItemSource, embedder: Embedder, db_name: str | None = None, collection_name: str | None = None, text_key: str | None = None, index_spec: VectorIndexSpec | None = None) -> None:
        self._client = client
        self._generator = generator
        self._embedder = embedder
        self._db_name = db_name or settings.MONGO_DB_NAME
        self._collection_name = collection_name or settings.MONGO_COLLECTION
        self._text_key = text_key or settings.TEXT_KEY
        self._index_spec = index_spec or VectorIndexSpec.from_settings()


    async def run(self, count: int | None = None) -> SeedReport:
        """
        Execute one seeding run.  Never raises; inspect the returned report.

        Parameters
        ----------
        count
            Number of items to generate.  Defaults to ``settings.SEED_ITEM_COUNT``.
        """
        count = count or settings.SEED_ITEM_COUNT
        report = SeedReport()
        t_start = time.perf_counter()

        try:
            # ── 1. Connect ────────────────────────────────────────────
            await self._client.admin.command("ping")
            report.state = SeedState.CONNECTED
            logger.info("You have successfully connected to MongoDB")

            # ── 2. Provision ──────────────────────────────────────────
            db = self._client[self._db_name]
            provisioner = DatabaseProvisioner(db)
            await provisioner.ensure_collection(self._collection_name)
            report.index_created = await provisioner.ensure_vector_index(self._collection_name, self._index_spec)
            report.state = SeedState.PROVISIONED

            # ── 3. Clear ──────────────────────────────────────────────
            store = InventoryVectorStore(db[self._collection_name], self._embedder, index_name=self._index_spec.name, text_key=self._text_key, embedding_key=self._index_spec.path, dimensions=self._index_spec.num_dimensions)
            report.cleared = await store.clear()
            report.state = SeedState.CLEARED

            # ── 4. Generate ───────────────────────────────────────────
            items = await self._generator.generate(count)
            report.generated = len(items)
            report.state = SeedState.GENERATED

            # ── 5. Embed + persist, one item at a time ────────────────
            for item in items:
                await store.persist(item)
                report.persisted += 1
                logger.info("Successfully processed & saved record: %s", item.item_id)
            report.state = SeedState.PERSISTED

            logger.info("Database seeding completed (%d item(s)).", report.persisted)

        except Exception as exc:
            report.error = exc
            logger.exception("Failed to seed database at stage '%s'.", report.state.value)

        finally:
            await self._close()
            report.connection_closed = True
            report.elapsed_seconds = round(time.perf_counter() - t_start, 2)

        return report


    async def _close(self) -> None:
        # motor's close() is synchronous; pymongo's async client returns a coroutine
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
