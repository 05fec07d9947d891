"""
Inventory Agent - InventoryVectorStore
=======================================
Thin vector-search layer over a MongoDB Atlas collection providing:
  • Summary → embedding → document writes, one item at a time
  • Clearing the collection before a fresh seed
  • Row counting

Every written document has the shape::

    {
        "<TEXT_KEY>": "<item summary>",
        "<EMBEDDING_KEY>": [768 floats],
        ...the item's own fields, verbatim...
    }

which is what an Atlas ``vectorSearch`` index named ``VECTOR_INDEX_NAME``
over ``EMBEDDING_KEY`` expects.

Design decisions:
    • **Dependency Injection**: the collection (``motor``) and the
      embedder are injected, so tests can run against in-memory fakes.
    • **Sequential writes**: items are embedded and written strictly in
      input order; no deduplication (re-running without ``clear()``
      duplicates documents).

Usage:
    store = InventoryVectorStore(collection, create_embedder())
    await store.clear()
    for item in items:
        await store.persist(item)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from inventory_agent.config.settings import settings
from inventory_agent.src.core.exceptions import PersistenceError
from inventory_agent.src.core.schema import Item
from inventory_agent.src.utils.logger import get_logger
from inventory_agent.src.utils.text_utils import build_item_summary

logger = get_logger(__name__)

# ── Type Aliases ──────────────────────────────────────────────────────
IndexedRecord = dict[str, Any]


# ── Embedder Protocol ─────────────────────────────────────────────────

@runtime_checkable
class Embedder(Protocol):
    """Structural type for any LangChain-compatible embedding model."""

    async def aembed_query(self, text: str) -> list[float]: ...


class SizedEmbedder:
    """
    Asks the wrapped model for vectors of exactly ``dimensions`` values.

    ``gemini-embedding-001`` returns 3072 values unless told otherwise;
    the vector index is built for ``EMBEDDING_DIMENSIONS``.
    """

    __slots__ = ("_embedder", "dimensions")

    def __init__(self, embedder: Any, dimensions: int) -> None:
        self._embedder = embedder
        self.dimensions = dimensions

    async def aembed_query(self, text: str) -> list[float]:
        return await self._embedder.aembed_query(text, output_dimensionality=self.dimensions)


def create_embedder() -> Embedder:
    """Initialise the Google Generative AI embedding model, sized to ``EMBEDDING_DIMENSIONS``."""
    from langchain_google_genai import GoogleGenerativeAIEmbeddings

    model = GoogleGenerativeAIEmbeddings(model=settings.EMBEDDING_MODEL, google_api_key=settings.GOOGLE_API_KEY.get_secret_value())
    logger.info("Embedder initialised: %s (%d dims)", settings.EMBEDDING_MODEL, settings.EMBEDDING_DIMENSIONS)
    return SizedEmbedder(model, settings.EMBEDDING_DIMENSIONS)


class InventoryVectorStore:
    """
    Writes embedded inventory items into a MongoDB collection.

    Parameters
    ----------
    collection
        An async (``motor``) collection handle.
    embedder : Embedder
        Any object exposing ``aembed_query``.
    index_name, text_key, embedding_key
        Names the documents are tagged with.  Default to settings.
    dimensions
        Required embedding length.  Defaults to ``settings.EMBEDDING_DIMENSIONS``.
    """

    __slots__ = ("_collection", "embedder", "index_name", "text_key", "embedding_key", "dimensions")

    def __init__(self, collection: Any, embedder: Embedder, index_name: str | None = None, text_key: str | None = None, embedding_key: str | None = None, dimensions: int | None = None) -> None:
        self._collection = collection
        self.embedder: Embedder = embedder
        self.index_name: str = index_name or settings.VECTOR_INDEX_NAME
        self.text_key: str = text_key or settings.TEXT_KEY
        self.embedding_key: str = embedding_key or settings.EMBEDDING_KEY
        self.dimensions: int = dimensions or settings.EMBEDDING_DIMENSIONS


    def build_record(self, item: Item, summary: str, embedding: list[float]) -> IndexedRecord:
        """Assemble the document for one item: text field, embedding field, item fields."""
        return {self.text_key: summary, self.embedding_key: embedding, **item.to_document()}


    async def persist(self, item: Item) -> IndexedRecord:
        """
        Summarise, embed and write one item.

        Returns
        -------
        IndexedRecord
            The document as written.

        Raises
        ------
        PersistenceError
            The embedding call failed, returned the wrong length, or the write failed.
        """
        summary = build_item_summary(item)

        try:
            embedding = await self.embedder.aembed_query(summary)
        except Exception as exc:
            raise PersistenceError(item.item_id, f"embedding failed: {exc}") from exc

        embedding = [float(value) for value in embedding]
        if len(embedding) != self.dimensions:
            raise PersistenceError(item.item_id, f"embedding has {len(embedding)} dimensions, expected {self.dimensions}")

        record = self.build_record(item, summary, embedding)
        try:
            # insert_one mutates its argument with the generated _id
            await self._collection.insert_one(dict(record))
        except Exception as exc:
            raise PersistenceError(item.item_id, f"write failed: {exc}") from exc

        logger.debug("Stored '%s' for index '%s' (%d chars, %d dims).", item.item_id, self.index_name, len(summary), len(embedding))
        return record


    async def clear(self) -> int:
        """Delete every document in the collection.  Returns the number removed."""
        result = await self._collection.delete_many({})
        logger.info("Cleared existing data from '%s' collection (%d document(s)).", self._collection.name, result.deleted_count)
        return result.deleted_count


    async def count(self) -> int:
        return await self._collection.count_documents({})


    def __repr__(self) -> str:
        return f"InventoryVectorStore(collection='{self._collection.name}', index='{self.index_name}')"
