#!/usr/bin/env python3
"""Load an asset inventory and threat actor catalogue into the database.

Reads a YAML file with ``assets`` and ``actors`` lists, creates any missing
tables and upserts every row by primary key.

Usage:
    python scripts/seed_inventory.py scripts/inventory.example.yaml --dry-run
    python scripts/seed_inventory.py scripts/inventory.example.yaml --execute
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

# Allow running from project root
sys.path.insert(0, ".")

from breachsim.database import async_session_factory, engine, init_models
from breachsim.models.database import Asset, ThreatActor

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def load_inventory(path: Path) -> dict[str, list[dict[str, Any]]]:
    """Read the inventory YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return {
        "assets": data.get("assets", []),
        "actors": data.get("actors", []),
    }


async def seed(path: Path, dry_run: bool) -> None:
    inventory = load_inventory(path)
    logger.info(
        f"{path.name}: {len(inventory['assets'])} assets, "
        f"{len(inventory['actors'])} actors"
    )

    if dry_run:
        for asset in inventory["assets"]:
            logger.info(f"  asset {asset['asset_id']} ({asset['type']})")
        for actor in inventory["actors"]:
            logger.info(f"  actor {actor['actor_id']} ({actor.get('sophistication')})")
        logger.info("Dry run - nothing written")
        return

    await init_models()
    async with async_session_factory() as db:
        for asset in inventory["assets"]:
            await db.merge(Asset(**asset))
        for actor in inventory["actors"]:
            await db.merge(ThreatActor(**actor))
        await db.commit()

    logger.info("Inventory seeded")
    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed asset inventory and threat actors")
    parser.add_argument("inventory", type=Path, help="Inventory YAML file")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--dry-run", action="store_true", help="Preview rows only")
    group.add_argument("--execute", action="store_true", help="Write rows")
    args = parser.parse_args()

    asyncio.run(seed(args.inventory, dry_run=args.dry_run))


if __name__ == "__main__":
    main()
