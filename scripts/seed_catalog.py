"""Load the standard movements, WODs and templates. Existing rows (by name) are left alone."""

import asyncio
import logging
import os
import sys

# Add parent directory to path so we can import wodlog modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from wodlog.db.repositories import Repositories
from wodlog.db.session import async_session_maker, engine
from wodlog.services.seeding import seed_standard_catalog


async def main() -> None:
    print("Seeding standard catalog...")
    async with async_session_maker() as session:
        result = await seed_standard_catalog(Repositories.for_session(session))
        await session.commit()
    print(
        f"Created {result.movements_created} movements, {result.wods_created} WODs, "
        f"{result.templates_created} templates."
    )
    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
