"""
Inventory Agent - Centralized Configuration
============================================
Uses ``pydantic-settings`` (``BaseSettings``) to load *all* configuration
from environment variables and the project-level ``.env`` file.

Security
--------
- ``GOOGLE_API_KEY`` is typed as ``SecretStr`` and has **no default value**.
  If the key is missing at startup, Pydantic will raise a ``ValidationError``
  before the seeder or the server touches any external service.
- ``MONGO_URI`` is also ``SecretStr``: connection strings contain
  credentials and must never leak into logs.

Vector index geometry
---------------------
``EMBEDDING_DIMENSIONS`` must match the output length of
``EMBEDDING_MODEL``.  ``gemini-embedding-001`` is asked for exactly
``EMBEDDING_DIMENSIONS`` values (its native size is 3072).  The seeder
checks every vector against it before writing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings.

    Every field is loaded from environment variables (or ``.env``).
    Fields *without* a default are **required**; the app will refuse
    to start until they are provided.

    Attributes
    ----------
    GOOGLE_API_KEY : SecretStr
        API key for Google AI Studio (Gemini chat + embeddings).  **Required.**
    MONGO_URI : SecretStr
        MongoDB Atlas connection string.  **Required.**
    MONGO_DB_NAME, MONGO_COLLECTION : str
        Target database and collection for the seeded inventory.
    VECTOR_INDEX_NAME, TEXT_KEY, EMBEDDING_KEY : str
        Names the vector-search layer tags every document with.
    EMBEDDING_DIMENSIONS : int
        Vector length expected from the embedding model.
    VECTOR_SIMILARITY : str
        Similarity metric of the Atlas vector index.
    SEARCH_INDEX_POLL_INTERVAL, SEARCH_INDEX_DROP_TIMEOUT : float
        Seconds between checks, and the overall limit, while waiting for
        Atlas to finish dropping search indexes.
    LOG_LEVEL : str | None
        Explicit log level.  When unset it follows ``ENV``.
    SEED_ITEM_COUNT : int
        Number of synthetic records requested per seeding run.
    AGENT_ENTRYPOINT : str | None
        ``"package.module:attribute"`` of the conversational agent served
        behind ``POST /chat``.
    """

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # ── API Keys (REQUIRED, no default) ───────────────────────────────
    GOOGLE_API_KEY: SecretStr

    # ── MongoDB (REQUIRED, no default) ────────────────────────────────
    MONGO_URI: SecretStr
    MONGO_DB_NAME: str = "inventory_database"
    MONGO_COLLECTION: str = "items"

    # ── Vector Search ──────────────────────────────────────────────────
    VECTOR_INDEX_NAME: str = "vector_index"
    TEXT_KEY: str = "embedding-text"
    EMBEDDING_KEY: str = "embedding"
    EMBEDDING_DIMENSIONS: int = 768
    VECTOR_SIMILARITY: Literal["cosine", "euclidean", "dotProduct"] = "cosine"
    SEARCH_INDEX_POLL_INTERVAL: float = 1.0
    SEARCH_INDEX_DROP_TIMEOUT: float = 60.0

    # ── Model Configuration ────────────────────────────────────────────
    EMBEDDING_MODEL: str = "gemini-embedding-001"
    LLM_MODEL: str = "gemini-2.0-flash"
    LLM_TEMPERATURE: float = 0.7

    # ── Seeding ────────────────────────────────────────────────────────
    SEED_ITEM_COUNT: int = 10
    SEED_DOMAIN: str = "furniture store"

    # ── HTTP Server ────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    AGENT_ENTRYPOINT: str | None = None

    # ── Validators ─────────────────────────────────────────────────────

    @field_validator("EMBEDDING_DIMENSIONS", "SEED_ITEM_COUNT")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"value must be ≥ 1, got {v}")
        return v


    @field_validator("LLM_TEMPERATURE")
    @classmethod
    def _temperature_range(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"LLM_TEMPERATURE must be 0.0–2.0, got {v}")
        return v


    @field_validator("SEARCH_INDEX_POLL_INTERVAL", "SEARCH_INDEX_DROP_TIMEOUT")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"value must be ≥ 0, got {v}")
        return v

    # ── Pydantic Settings Configuration ────────────────────────────────
    model_config = SettingsConfigDict(env_file=Path(__file__).resolve().parent.parent.parent / ".env", env_file_encoding="utf-8", extra="ignore")


# ── Singleton Instance ─────────────────────────────────────────────────
# Import this throughout the project:
#     from inventory_agent.config.settings import settings
settings = Settings()
