import asyncio
import sys

from expense_tracker.config import get_settings
from expense_tracker.db.store import EntryStore


async def _prepare(reset: bool) -> EntryStore:
    store = EntryStore(get_settings().data_path)
    if reset:
        await store.clear()
    else:
        await store.ensure_initialized()
    return store


def main():
    reset = "--reset" in sys.argv[1:]
    store = asyncio.run(_prepare(reset))
    if reset:
        print(f"Entry store cleared: {store.path}")
    else:
        print(f"Entry store ready: {store.path}")


if __name__ == "__main__":
    main()
