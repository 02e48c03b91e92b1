"""Revision log: recording edits and reading edit history."""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.db.models import RevisionHistory, RevisionText, RevType
from wikirev.db.services import fetcher
from wikirev.lib import observability, rev_text
from wikirev.lib.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class RevisionHistoryEntry:
    """One line of an edit-history listing."""

    id: int
    creator_name: str
    created_at: int
    commit_message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "creator": {"username": self.creator_name},
            "createdAt": self.created_at,
            "commitMessage": self.commit_message,
        }


@dataclass(frozen=True)
class HistoryPage:
    total: int
    data: list[RevisionHistoryEntry]

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "data": [entry.to_dict() for entry in self.data]}


async def record_revision(
    db_session: AsyncSession,
    *,
    target_id: int,
    rev_type: RevType,
    content: Any,
    creator_id: int,
    commit_message: str,
) -> RevisionHistory:
    """Append a revision and its text blob to the current transaction.

    Nothing is committed here; the caller owns the transaction so the
    revision lands together with the edit it describes.

    Args:
        db_session: Database session inside the edit transaction
        target_id: ID of the edited person/character/subject
        rev_type: What kind of edit this is
        content: JSON-serializable revision content
        creator_id: ID of the editing user
        commit_message: Editor supplied summary

    Returns:
        The flushed RevisionHistory row
    """
    history = RevisionHistory(
        type=int(rev_type),
        target_id=target_id,
        creator_id=creator_id,
        commit_message=commit_message,
    )
    db_session.add(history)
    await db_session.flush()

    text = RevisionText(blob=rev_text.serialize({history.id: content}))
    db_session.add(text)
    await db_session.flush()

    history.text_id = text.id
    await db_session.flush()

    logger.info(
        "Recorded revision %s (%s) for target %s by user %s",
        history.id, rev_type.name, target_id, creator_id,
    )
    return history


async def get_revision(
    db_session: AsyncSession,
    revision_id: int,
) -> RevisionHistory | None:
    result = await db_session.execute(
        select(RevisionHistory).where(RevisionHistory.id == revision_id).limit(1)
    )
    return result.scalar_one_or_none()


async def get_revision_text(
    db_session: AsyncSession,
    text_id: int,
) -> RevisionText | None:
    result = await db_session.execute(select(RevisionText).where(RevisionText.id == text_id))
    return result.scalar_one_or_none()


async def load_revision_content(
    db_session: AsyncSession,
    revision_id: int,
    rev_type: RevType | None = None,
) -> tuple[RevisionHistory, Any]:
    """Load a revision and the content it stored.

    Args:
        db_session: Database session
        revision_id: The revision ID
        rev_type: When given, revisions of any other type count as missing

    Returns:
        Tuple of the history row and its decoded content

    Raises:
        NotFoundError: If the revision, its text blob, or its entry in the
            blob does not exist
    """
    revision = await get_revision(db_session, revision_id)
    if revision is None or (rev_type is not None and revision.type != rev_type):
        raise NotFoundError(f"revision {revision_id}")

    text = await get_revision_text(db_session, revision.text_id)
    if text is None:
        raise NotFoundError(f"RevText {revision.text_id}")

    content = rev_text.select(rev_text.deserialize(text.blob), revision_id)
    if content is None:
        raise NotFoundError(f"revision {revision_id}")

    return revision, content


def _check_page_args(target_id: Any, limit: Any, offset: Any) -> None:
    if not isinstance(target_id, int) or isinstance(target_id, bool) or target_id < 1:
        raise InvalidArgumentError("target_id must be a positive integer")
    if not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_LIMIT}")
    if not isinstance(offset, int) or offset < 0:
        raise InvalidArgumentError("offset must be a non-negative integer")


def _history_filter(target_id: int, rev_types: Collection[RevType]):
    return and_(
        RevisionHistory.target_id == target_id,
        RevisionHistory.type.in_([int(t) for t in rev_types]),
    )


async def count_relation_history(
    db_session: AsyncSession,
    target_id: int,
    rev_types: Collection[RevType],
) -> int:
    result = await db_session.execute(
        select(func.count(func.distinct(RevisionHistory.id))).where(
            _history_filter(target_id, rev_types)
        )
    )
    return result.scalar() or 0


async def list_relation_history(
    db_session: AsyncSession,
    target_id: int,
    rev_types: Collection[RevType],
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> list[RevisionHistory]:
    """List matching revisions, newest first."""
    result = await db_session.execute(
        select(RevisionHistory)
        .where(_history_filter(target_id, rev_types))
        .order_by(RevisionHistory.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


async def query_relation_history(
    db_session: AsyncSession,
    target_id: int,
    rev_types: Collection[RevType],
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> HistoryPage:
    """Page through the edit history of one entity, filtered by revision type.

    ``total`` is counted before pagination. Editors without a user record get
    a ghost username instead of failing the request.

    Raises:
        InvalidArgumentError: If ``target_id``, ``limit`` or ``offset`` is
            out of range
    """
    _check_page_args(target_id, limit, offset)
    if not rev_types:
        raise InvalidArgumentError("at least one revision type is required")

    with observability.span("relation history", target_id=target_id, limit=limit, offset=offset):
        total = await count_relation_history(db_session, target_id, rev_types)
        rows = await list_relation_history(db_session, target_id, rev_types, limit, offset)
        users = await fetcher.fetch_slim_users_by_ids(db_session, (row.creator_id for row in rows))

    entries = []
    for row in rows:
        user = users.get(row.creator_id)
        entries.append(
            RevisionHistoryEntry(
                id=row.id,
                creator_name=user.username if user is not None else fetcher.ghost_username(row.creator_id),
                created_at=row.created_at,
                commit_message=row.commit_message,
            )
        )

    return HistoryPage(total=total, data=entries)
