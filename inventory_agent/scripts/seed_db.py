"""
Inventory Agent - Database Seeding Script
==========================================
CLI entry point that:
    1. Loads settings (fail-fast on a missing ``GOOGLE_API_KEY`` / ``MONGO_URI``).
    2. Initialises the Gemini chat model, the embedder and the MongoDB client.
    3. Runs the ``SeedingOrchestrator`` (clear → generate → embed → store).
    4. Prints a structured execution summary.

Every run wipes the target collection first; there is no append mode.

Usage:
    python -m inventory_agent.scripts.seed_db              # SEED_ITEM_COUNT items
    python -m inventory_agent.scripts.seed_db --count 25   # 25 items
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


# ── CLI Argument Parsing ───────────────────────────────────────────────

def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be ≥ 1, got {number}")
    return number


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="seed_db", description="Inventory Agent: clear and re-seed the inventory collection with synthetic, embedded items.")
    parser.add_argument("--count", type=_positive_int, default=None, help="Number of items to generate (default: SEED_ITEM_COUNT).")
    return parser.parse_args(argv)


# ── Main Orchestration ─────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    t_start = time.perf_counter()

    try:
        from inventory_agent.config.settings import settings
    except Exception as exc:
        print("\n[FATAL] Configuration error, check your .env file:\n")
        print(f"  {exc}")
        print()
        return 1

    from inventory_agent.src.utils.logger import get_logger
    logger = get_logger(__name__)

    count = args.count or settings.SEED_ITEM_COUNT
    _print_header(settings, count)

    # ── 1. Initialise external clients ─────────────────────────────────
    try:
        from inventory_agent.src.core.generator import SyntheticDataGenerator, create_chat_model
        from inventory_agent.src.database.vector_store import create_embedder
        from inventory_agent.src.main import create_mongo_client

        generator = SyntheticDataGenerator(create_chat_model())
        embedder = create_embedder()
        client = create_mongo_client()
    except ImportError:
        logger.exception("A required client library is not installed.")
        return 1
    except Exception:
        logger.exception("Failed to initialise external clients.")
        return 1

    # ── 2. Run the seeding pipeline ────────────────────────────────────
    from inventory_agent.src.core.seeder import SeedingOrchestrator

    orchestrator = SeedingOrchestrator(client, generator, embedder)
    report = asyncio.run(orchestrator.run(count))

    _print_footer(report, time.perf_counter() - t_start)
    return 0 if report.succeeded else 1


# ── Pretty-print helpers ──────────────────────────────────────────────

def _print_header(settings: object, count: int) -> None:
    api_key_val = settings.GOOGLE_API_KEY.get_secret_value()  # type: ignore[attr-defined]
    masked = f"****{api_key_val[-4:]}" if len(api_key_val) > 4 else "****"

    mongo_uri_val = settings.MONGO_URI.get_secret_value()  # type: ignore[attr-defined]
    mongo_masked = mongo_uri_val.split("@")[-1] if "@" in mongo_uri_val else mongo_uri_val

    print()
    print("=" * 60)
    print("  INVENTORY AGENT | Database Seeding")
    print("=" * 60)
    print(f"  Environment  : {settings.ENV}")                   # type: ignore[attr-defined]
    print(f"  LLM          : {settings.LLM_MODEL}")             # type: ignore[attr-defined]
    print(f"  Embedding    : {settings.EMBEDDING_MODEL} ({settings.EMBEDDING_DIMENSIONS} dims)")  # type: ignore[attr-defined]
    print(f"  MongoDB      : {mongo_masked}")
    print(f"  Target       : {settings.MONGO_DB_NAME}.{settings.MONGO_COLLECTION}")  # type: ignore[attr-defined]
    print(f"  Vector index : {settings.VECTOR_INDEX_NAME} ({settings.VECTOR_SIMILARITY})")  # type: ignore[attr-defined]
    print(f"  Items        : {count} ({settings.SEED_DOMAIN})")  # type: ignore[attr-defined]
    print(f"  API Key      : {masked}")
    print("=" * 60)
    print()


def _print_footer(report: object, elapsed: float) -> None:
    error = report.error  # type: ignore[attr-defined]

    print()
    print("=" * 60)
    print("  EXECUTION SUMMARY")
    print("-" * 60)
    print(f"  Last stage reached   : {report.state.value}")        # type: ignore[attr-defined]
    print(f"  Vector index created : {'yes' if report.index_created else 'NO'}")  # type: ignore[attr-defined]
    print(f"  Documents cleared    : {report.cleared}")             # type: ignore[attr-defined]
    print(f"  Items generated      : {report.generated}")           # type: ignore[attr-defined]
    print(f"  Items stored         : {report.persisted}")           # type: ignore[attr-defined]
    print(f"  Result               : {'OK' if error is None else f'FAILED ({type(error).__name__})'}")
    print("-" * 60)
    print(f"  Pipeline time        : {report.elapsed_seconds:>8.2f}s")  # type: ignore[attr-defined]
    print(f"  Total elapsed        : {elapsed:>8.2f}s")
    print("=" * 60)
    print()


# ── Entry point ────────────────────────────────────────────────────────

if __name__ == "__main__":
    sys.exit(main())
