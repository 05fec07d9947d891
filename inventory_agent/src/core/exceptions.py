"""
Inventory Agent - Error Taxonomy
=================================
Every failure the seeding pipeline can surface.  All of them except
``IndexProvisioningError`` propagate to ``SeedingOrchestrator.run``,
which logs them and ends the run after closing the connection.
"""

from __future__ import annotations


class InventoryAgentError(Exception):
    """Base class for all pipeline errors."""


class SchemaViolation(InventoryAgentError):
    """A generated record does not match the ``Item`` schema."""

    def __init__(self, field: str, expected: str, message: str | None = None) -> None:
        self.field = field
        self.expected = expected
        super().__init__(message or f"Field '{field}': expected {expected}")


class GenerationError(InventoryAgentError):
    """The upstream text-generation call failed."""


class ParseError(InventoryAgentError):
    """The generated text did not decode into valid items."""


class PersistenceError(InventoryAgentError):
    """Embedding or writing a single item failed."""

    def __init__(self, item_id: str, message: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item '{item_id}': {message}")


class IndexProvisioningError(InventoryAgentError):
    """Creating the vector-search index failed.  Logged, never raised to the orchestrator."""

    def __init__(self, index_name: str, message: str) -> None:
        self.index_name = index_name
        super().__init__(f"Index '{index_name}': {message}")
