"""Recompute movement PR flags from history.

Usage: python scripts/retroactive_prs.py [USER_ID ...]   (no ids = every user)
"""

import asyncio
import logging
import os
import sys

# Add parent directory to path so we can import wodlog modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from wodlog.db.repositories import Repositories
from wodlog.db.session import async_session_maker, engine
from wodlog.services.pr_detection import retroactively_flag_prs


async def main(user_ids: list[int]) -> None:
    async with async_session_maker() as session:
        repos = Repositories.for_session(session)
        if not user_ids:
            user_ids = await repos.performances.list_user_ids()
        for user_id in user_ids:
            print(f"Running retroactive PR flagging for user {user_id}...")
            result = await retroactively_flag_prs(repos.performances, user_id)
            print(f"  flagged {result.movement_pr_count} movement PRs and {result.wod_pr_count} WOD PRs")
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main([int(arg) for arg in sys.argv[1:]]))
