"""Load a YAML catalog into the database.

Usage:
    python scripts/load_catalog.py --file default.yaml
    python scripts/load_catalog.py --file default.yaml --reset
"""

import argparse
import asyncio

from serviceflow.catalog.loader import CatalogLoader
from serviceflow.core.config import settings
from serviceflow.core.logging import setup_logging
from serviceflow.db.init_db import create_tables, drop_tables, seed_catalog
from serviceflow.db.session import AsyncSessionLocal, engine


async def load(filename: str, reset: bool) -> None:
    catalog = CatalogLoader().load(filename)
    print(f"Loaded {filename}: version={catalog.version} hash={catalog.content_hash[:12]}")
    print(
        f"  {len(catalog.goals)} goals, {len(catalog.questions)} questions, "
        f"{len(catalog.services)} services, {len(catalog.rules)} rules"
    )

    if reset:
        await drop_tables(engine)
    await create_tables(engine)

    async with AsyncSessionLocal() as session:
        inserted = await seed_catalog(session, catalog)

    if inserted:
        print(f"Inserted {inserted} records into {settings.database_url}")
    else:
        print("Catalog tables already populated; use --reset to replace them")

    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Load a YAML catalog into the database")
    parser.add_argument("--file", default=settings.catalog_file, help="Catalog filename in catalogs/")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate catalog tables first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(load(args.file, args.reset))


if __name__ == "__main__":
    main()
