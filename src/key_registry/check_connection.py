"""Check database connectivity and that the api_keys table exists.

Run with ``key-registry-check`` (or ``python -m key_registry.check_connection``).
"""

import asyncio
import sys

from key_registry.config import configure_logging, get_settings
from key_registry.db import build_engine, build_session_factory
from key_registry.errors import PersistenceError
from key_registry.store import ApiKeyStore

_MISSING_TABLE_MARKERS = ("does not exist", "no such table", "UndefinedTable")

MIGRATION_HELP = """\
Table 'api_keys' does not exist!

Run the migrations against the configured database:
   1. Set DATABASE_URL (or add it to .env)
   2. Run: alembic upgrade head
   3. Re-run this check
"""


def is_missing_table(exc: PersistenceError) -> bool:
    return any(marker in exc.detail for marker in _MISSING_TABLE_MARKERS)


async def run_check(store: ApiKeyStore, limit: int = 5) -> int:
    """Count rows and read a bounded page. Returns a process exit code."""
    print("Testing database connection...\n")

    try:
        total = await store.count()
    except PersistenceError as e:
        if is_missing_table(e):
            print(MIGRATION_HELP, file=sys.stderr)
            return 1
        print("Connection test failed:", file=sys.stderr)
        print(f"   Error: {e.detail}", file=sys.stderr)
        return 1

    print("Connection successful!")
    print("Table 'api_keys' exists!")
    print(f"Current API keys count: {total}\n")

    try:
        records = await store.sample(limit)
    except PersistenceError as e:
        print("Query test failed:", file=sys.stderr)
        print(f"   Error: {e.detail}", file=sys.stderr)
        return 1

    print("Query test successful!")
    print(f"Found {len(records)} API key(s) in the database\n")
    return 0


async def _main() -> int:
    settings = get_settings()
    engine = build_engine(settings)
    try:
        store = ApiKeyStore(build_session_factory(engine))
        return await run_check(store, settings.check_sample_limit)
    finally:
        await engine.dispose()


def main():
    """CLI entry point for the connection check."""
    configure_logging(get_settings())
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
