"""Bulk lookups of display names by id.

Ids that have no row are simply missing from the returned mapping; callers
decide how to degrade.
"""

from collections.abc import Iterable
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.db.base import Base
from wikirev.db.models import Character, Person, Subject, User

ModelT = TypeVar("ModelT", bound=Base)


async def _fetch_by_ids(
    db_session: AsyncSession,
    model: type[ModelT],
    ids: Iterable[int],
) -> dict[int, ModelT]:
    wanted = {int(i) for i in ids}
    if not wanted:
        return {}

    result = await db_session.execute(select(model).where(model.id.in_(wanted)))
    return {row.id: row for row in result.scalars().all()}


async def fetch_slim_users_by_ids(db_session: AsyncSession, ids: Iterable[int]) -> dict[int, User]:
    return await _fetch_by_ids(db_session, User, ids)


async def fetch_slim_subjects_by_ids(db_session: AsyncSession, ids: Iterable[int]) -> dict[int, Subject]:
    return await _fetch_by_ids(db_session, Subject, ids)


async def fetch_slim_persons_by_ids(db_session: AsyncSession, ids: Iterable[int]) -> dict[int, Person]:
    return await _fetch_by_ids(db_session, Person, ids)


async def fetch_slim_characters_by_ids(db_session: AsyncSession, ids: Iterable[int]) -> dict[int, Character]:
    return await _fetch_by_ids(db_session, Character, ids)


def ghost_username(user_id: int) -> str:
    """Stand-in username for an editor whose account no longer exists."""
    return f"deleted_or_missing_user_{user_id}"
