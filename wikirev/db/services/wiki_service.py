"""Reading and editing person/character wiki pages."""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.db.models import Character, Person, RevType
from wikirev.db.models.mono import MonoMixin
from wikirev.db.services import revision_service
from wikirev.db.services.revision_decoders import WikiEditFact
from wikirev.lib.errors import LockedError, NotAllowedError, NotFoundError
from wikirev.lib.wiki import match_expected

logger = logging.getLogger(__name__)

MonoT = TypeVar("MonoT", Person, Character)

EDITABLE_FIELDS = ("name", "infobox", "summary")


async def _get_visible(db_session: AsyncSession, model: type[MonoT], entity_id: int, label: str) -> MonoT:
    result = await db_session.execute(
        select(model).where(model.id == entity_id, model.redirect == 0)
    )
    entity = result.scalar_one_or_none()
    if entity is None:
        raise NotFoundError(f"{label} {entity_id}")
    if entity.locked:
        raise NotAllowedError(f"edit a locked {label}")
    return entity


async def get_person_wiki(db_session: AsyncSession, person_id: int) -> Person:
    """Get a person for the wiki editor.

    Raises:
        NotFoundError: If the person does not exist or was merged away
        NotAllowedError: If the person is locked
    """
    return await _get_visible(db_session, Person, person_id, "person")


async def get_character_wiki(db_session: AsyncSession, character_id: int) -> Character:
    """Get a character for the wiki editor; same rules as :func:`get_person_wiki`."""
    return await _get_visible(db_session, Character, character_id, "character")


def _revision_content(entity: MonoMixin) -> dict[str, Any]:
    return WikiEditFact(
        name=entity.name,
        infobox=entity.infobox,
        summary=entity.summary,
        img=entity.img,
    ).to_rev()


async def _edit_mono(
    db_session: AsyncSession,
    model: type[MonoT],
    rev_type: RevType,
    label: str,
    entity_id: int,
    *,
    changes: Mapping[str, str],
    expected: Mapping[str, str],
    commit_message: str,
    editor_id: int,
) -> MonoT:
    """Apply one wiki edit as a single transaction.

    Load with a row lock, check the editor's expected values, apply the
    changes and record the revision, then commit. Any failure rolls the
    whole edit back, so an edit is never stored without its revision.
    """
    try:
        result = await db_session.execute(
            select(model).where(model.id == entity_id).with_for_update()
        )
        entity = result.scalar_one_or_none()
        if entity is None:
            raise NotFoundError(f"{label} {entity_id}")
        if entity.locked or entity.redirect:
            raise LockedError()

        match_expected(expected, entity.wiki_fields())

        for field in EDITABLE_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(entity, field, value)

        await db_session.flush()

        await revision_service.record_revision(
            db_session,
            target_id=entity_id,
            rev_type=rev_type,
            content=_revision_content(entity),
            creator_id=editor_id,
            commit_message=commit_message,
        )
        await db_session.commit()
    except Exception:
        await db_session.rollback()
        raise

    logger.info("User %s edited %s %s", editor_id, label, entity_id)
    return entity


async def edit_person(
    db_session: AsyncSession,
    person_id: int,
    *,
    changes: Mapping[str, str],
    expected: Mapping[str, str],
    commit_message: str,
    editor_id: int,
) -> Person:
    """Edit a person's wiki fields and record a PERSON_EDIT revision.

    Args:
        db_session: Database session; committed on success, rolled back on error
        person_id: Person to edit
        changes: New values for any of name/infobox/summary
        expected: Values the editor believes are current; stale ones abort the edit
        commit_message: Editor supplied summary
        editor_id: ID of the editing user

    Raises:
        NotFoundError: If the person does not exist
        LockedError: If the person is locked or redirected
        WikiChangedError: If ``expected`` does not match the stored values
    """
    return await _edit_mono(
        db_session,
        Person,
        RevType.PERSON_EDIT,
        "person",
        person_id,
        changes=changes,
        expected=expected,
        commit_message=commit_message,
        editor_id=editor_id,
    )


async def edit_character(
    db_session: AsyncSession,
    character_id: int,
    *,
    changes: Mapping[str, str],
    expected: Mapping[str, str],
    commit_message: str,
    editor_id: int,
) -> Character:
    """Edit a character's wiki fields and record a CHARACTER_EDIT revision."""
    return await _edit_mono(
        db_session,
        Character,
        RevType.CHARACTER_EDIT,
        "character",
        character_id,
        changes=changes,
        expected=expected,
        commit_message=commit_message,
        editor_id=editor_id,
    )
