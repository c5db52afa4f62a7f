"""Shared endpoint dependencies."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from wodlog.core.config import get_settings
from wodlog.db.repositories import Repositories
from wodlog.db.session import get_db


async def get_current_user_id(x_user_id: int = Header(..., ge=1)) -> int:
    """Caller identity from the X-User-Id header (authentication happens upstream)."""
    return x_user_id


async def get_repositories(db: AsyncSession = Depends(get_db)) -> Repositories:
    return Repositories.for_session(db)


def clamp_page_size(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.default_page_size
    return max(1, min(limit, settings.max_page_size))
