"""Import properties from a CSV file on behalf of an existing user.

Run with: python -m scripts.import_properties data/property_data.csv --owner-email a@b.com
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from config.settings import settings
from src.pl_cache.facade import CacheFacade
from src.pl_cache.invalidator import WritePathInvalidator
from src.pl_cache.redis_client import close_redis, create_redis
from src.pl_common.database import async_session_factory, engine
from src.pl_gateway.user.service import UserService
from src.pl_property.application.importer import import_properties_csv
from src.pl_property.infrastructure.persistence import PropertyRepository

logger = logging.getLogger("pl.import")


async def run(csv_path: Path, owner_email: str) -> int:
    redis = create_redis()
    try:
        async with async_session_factory() as db:
            owner = await UserService().find_by_email(owner_email, db)
            if owner is None:
                logger.error("No user with email %s", owner_email)
                return 1
            report = await import_properties_csv(
                csv_path,
                owner.id,
                db,
                PropertyRepository(),
                WritePathInvalidator(CacheFacade(redis)),
            )
        logger.info("Done: imported=%d skipped=%d", report.imported, report.skipped)
        return 0
    finally:
        await close_redis(redis)
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--owner-email", required=True)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if not args.csv_path.is_file():
        logger.error("CSV file not found: %s", args.csv_path)
        return 1
    return asyncio.run(run(args.csv_path, args.owner_email))


if __name__ == "__main__":
    sys.exit(main())
