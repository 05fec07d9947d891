"""Shared test fixtures: in-memory fakes for MongoDB, the embedder and the chat model."""

import copy
import json
import os

# Settings are loaded at import time and require these.
os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

import pytest
from langchain_core.messages import AIMessage

from inventory_agent.src.core.schema import Item


# === MongoDB fakes ===

class FakeDeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return list(self._documents)


class FakeCollection:
    """Async collection that keeps documents and indexes in memory."""

    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict] = []
        self.indexes: list[str] = ["_id_"]
        self.search_indexes: list[dict] = []
        self.fail_insert_on: set[str] = set()
        self.fail_create_search_index = False
        self.drop_indexes_calls = 0
        # listings a dropped search index stays visible for, as Atlas drops asynchronously
        self.search_drop_delay = 0
        self.search_list_calls = 0

    async def insert_one(self, document):
        if document.get("item_id") in self.fail_insert_on:
            raise RuntimeError("write rejected")
        document["_id"] = len(self.documents) + 1
        self.documents.append(copy.deepcopy(document))

    async def delete_many(self, query):
        assert query == {}
        removed = len(self.documents)
        self.documents.clear()
        return FakeDeleteResult(removed)

    async def count_documents(self, query):
        return len(self.documents)

    async def create_index(self, key, name):
        self.indexes.append(name)

    async def drop_indexes(self):
        self.drop_indexes_calls += 1
        self.indexes = ["_id_"]

    def list_search_indexes(self):
        self.search_list_calls += 1
        listed = [dict(index) for index in self.search_indexes]
        for index in self.search_indexes:
            if "pending_listings" in index:
                index["pending_listings"] -= 1
        self.search_indexes = [index for index in self.search_indexes if index.get("pending_listings", 1) > 0]
        return FakeCursor(listed)

    async def drop_search_index(self, name):
        if self.search_drop_delay == 0:
            self.search_indexes = [index for index in self.search_indexes if index["name"] != name]
            return
        for index in self.search_indexes:
            if index["name"] == name:
                index["pending_listings"] = self.search_drop_delay

    async def create_search_index(self, model):
        if self.fail_create_search_index:
            raise RuntimeError("Atlas search is not available on this tier")
        document = model.document
        if any(index["name"] == document["name"] for index in self.search_indexes):
            raise RuntimeError(f"Duplicate index name '{document['name']}'")
        self.search_indexes.append(copy.deepcopy(document))
        return document["name"]


class FakeDatabase:
    def __init__(self, name: str):
        self.name = name
        self.created: list[str] = []
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name):
        return self._collections.setdefault(name, FakeCollection(name))

    async def list_collection_names(self, filter=None):
        wanted = (filter or {}).get("name")
        return [name for name in self.created if wanted is None or name == wanted]

    async def create_collection(self, name):
        if name in self.created:
            raise RuntimeError(f"collection {name} already exists")
        self.created.append(name)
        return self[name]


class FakeAdmin:
    def __init__(self):
        self.fail = False
        self.commands: list[str] = []

    async def command(self, name):
        self.commands.append(name)
        if self.fail:
            raise ConnectionError("No servers available")
        return {"ok": 1}


class FakeMongoClient:
    """Async client; separate instances can share one set of databases to simulate reconnects."""

    def __init__(self, databases=None):
        self.databases: dict[str, FakeDatabase] = databases if databases is not None else {}
        self.admin = FakeAdmin()
        self.closed = False

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase(name))

    def close(self):
        self.closed = True


# === Model fakes ===

class FakeEmbedder:
    """Deterministic 768-dim embedder; can be told to fail or return the wrong size."""

    def __init__(self, dimensions: int = 768):
        self.dimensions = dimensions
        self.calls: list[str] = []
        self.fail_on: str | None = None

    async def aembed_query(self, text):
        self.calls.append(text)
        if self.fail_on is not None and self.fail_on in text:
            raise RuntimeError("embedding quota exceeded")
        seed = (sum(map(ord, text)) % 97) / 97
        return [seed] * self.dimensions


class FakeChatModel:
    def __init__(self, content=None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.prompts: list[str] = []

    async def ainvoke(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


class StubGenerator:
    """Item source returning a fixed batch, or raising."""

    def __init__(self, items=None, error: Exception | None = None):
        self.items = items or []
        self.error = error
        self.requested: list[int] = []

    async def generate(self, count):
        self.requested.append(count)
        if self.error is not None:
            raise self.error
        return list(self.items)


# === Data helpers ===

def _item_data(index: int = 1, **overrides) -> dict:
    data = {
        "item_id": f"FURN-{index:03d}",
        "item_name": "Oslo Lounge Chair",
        "item_description": "A mid-century lounge chair with walnut arms and wool upholstery",
        "brand": "Nordhaus",
        "manufacturer_address": {
            "street": "Strandgade 12",
            "city": "Copenhagen",
            "state": "Capital Region",
            "postal_code": "1401",
            "country": "Denmark",
        },
        "prices": {"full_price": 899.0, "sale_price": 749.99},
        "categories": ["Living Room", "Chairs"],
        "user_reviews": [
            {"review_date": "2024-03-02", "review_comment": "Very comfortable", "rating": 5},
            {"review_date": "2024-04-18", "review_comment": "Arms scratch easily", "rating": 3.5},
        ],
        "notes": "Assembly required",
    }
    data.update(overrides)
    return data


@pytest.fixture
def item_data():
    """Factory for raw item dicts as a model would generate them."""
    return _item_data


@pytest.fixture
def make_item():
    """Factory for validated ``Item`` objects."""
    def _make(index: int = 1, **overrides) -> Item:
        return Item.model_validate(_item_data(index, **overrides))
    return _make


@pytest.fixture
def items_json():
    """Factory rendering raw item dicts as a fenced JSON reply."""
    def _render(records) -> str:
        return "```json\n" + json.dumps(records, indent=2) + "\n```"
    return _render


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def mongo_client_factory():
    return FakeMongoClient


@pytest.fixture
def database():
    return FakeDatabase("inventory_database")


@pytest.fixture
def collection():
    return FakeCollection("items")


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def embedder_factory():
    return FakeEmbedder


@pytest.fixture
def chat_model():
    return FakeChatModel


@pytest.fixture
def stub_generator():
    return StubGenerator
