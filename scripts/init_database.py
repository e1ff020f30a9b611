#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Create the member registry schema and optionally seed member types.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --seed
    python scripts/init_database.py --check-only

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="init-db")
logger = get_logger(__name__)


DEFAULT_MEMBER_TYPES = (
    ("active", "Active member"),
    ("junior", "Junior member"),
    ("passive", "Passive member"),
    ("honorary", "Honorary member"),
)


async def init_postgres(seed: bool) -> bool:
    """Create all tables and optionally seed member types."""
    from sqlalchemy import select

    from shared.database.postgres import PostgresClient, postgres_session

    # Registers the ORM models on Base.metadata
    from services.member_registry.models import MemberTypeModel

    logger.info("postgres_init_started")

    try:
        await PostgresClient.create_schema()

        if seed:
            async with postgres_session() as session:
                existing = set(
                    (await session.execute(select(MemberTypeModel.name))).scalars().all()
                )
                for name, description in DEFAULT_MEMBER_TYPES:
                    if name not in existing:
                        session.add(MemberTypeModel(name=name, description=description))
            logger.info("member_types_seeded", count=len(DEFAULT_MEMBER_TYPES))

        logger.info("postgres_init_succeeded")
        return True

    except Exception as e:
        logger.error("postgres_init_failed", error=str(e))
        return False

    finally:
        await PostgresClient.close()


async def check_postgres() -> bool:
    """Check that PostgreSQL is reachable."""
    from shared.database.postgres import PostgresClient

    health = await PostgresClient.health_check()
    await PostgresClient.close()
    logger.info("postgres_health", **health)
    return health.get("status") == "healthy"


async def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Initialize the member registry database")
    parser.add_argument("--seed", action="store_true", help="Insert default member types")
    parser.add_argument("--check-only", action="store_true", help="Only check connectivity")

    args = parser.parse_args()

    if args.check_only:
        ok = await check_postgres()
    else:
        ok = await init_postgres(seed=args.seed)

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
