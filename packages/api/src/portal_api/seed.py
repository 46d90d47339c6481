# This project was developed with assistance from AI tools.
"""CLI entrypoint for demo data seeding.

Usage:
    python -m portal_api.seed          # Create tables and seed demo data
    python -m portal_api.seed --force  # Clear and re-seed
"""

import argparse
import asyncio
import json
import logging
import sys

from portal_db import DatabaseService

from .services.seeder import seed_demo_data


async def main(force: bool = False) -> dict:
    """Create missing tables, then seed demo data."""
    db_service = DatabaseService.from_settings()
    try:
        await db_service.create_schema()
        async with db_service.session() as session:
            return await seed_demo_data(session, force=force)
    finally:
        await db_service.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Seed M&A portal demo data")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Clear existing demo data and re-seed",
    )
    args = parser.parse_args()
    result = asyncio.run(main(force=args.force))
    print(json.dumps(result, indent=2, default=str))
    if result.get("status") == "already_seeded":
        print("\nDemo data already seeded. Use --force to re-seed.")
        sys.exit(0)
