"""Tests for person/character wiki reads and transactional edits."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from wikirev.db.models import Character, Person, RevisionHistory, RevisionText, RevType
from wikirev.db.services import wiki_service
from wikirev.db.services.revision_decoders import WikiEditFact
from wikirev.db.services.revision_service import load_revision_content
from wikirev.lib.errors import LockedError, NotAllowedError, NotFoundError, WikiChangedError


async def _revision_count(db_session) -> int:
    return (await db_session.execute(select(func.count()).select_from(RevisionHistory))).scalar()


async def _text_count(db_session) -> int:
    return (await db_session.execute(select(func.count()).select_from(RevisionText))).scalar()


class TestGetWiki:
    async def test_get_person(self, seeded_session):
        person = await wiki_service.get_person_wiki(seeded_session, 1)
        assert person.name == "Koichi Yamadera"

    async def test_missing_person(self, seeded_session):
        with pytest.raises(NotFoundError, match="person 404 not found"):
            await wiki_service.get_person_wiki(seeded_session, 404)

    async def test_redirected_person_is_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            await wiki_service.get_person_wiki(seeded_session, 3)

    async def test_locked_character_is_not_allowed(self, seeded_session):
        with pytest.raises(NotAllowedError, match="edit a locked character"):
            await wiki_service.get_character_wiki(seeded_session, 2)


class TestEditPerson:
    async def test_success_writes_one_revision(self, seeded_session):
        before = await _revision_count(seeded_session)
        before_text = await _text_count(seeded_session)

        person = await wiki_service.edit_person(
            seeded_session,
            1,
            changes={"name": "山寺宏一", "summary": "Seiyuu"},
            expected={"name": "Koichi Yamadera"},
            commit_message="use native name",
            editor_id=1,
        )

        assert person.name == "山寺宏一"
        assert person.infobox == "{{Infobox}}"
        assert await _revision_count(seeded_session) == before + 1
        assert await _text_count(seeded_session) == before_text + 1

        latest = (await seeded_session.execute(
            select(RevisionHistory).order_by(RevisionHistory.id.desc()).limit(1)
        )).scalar_one()
        assert latest.type == int(RevType.PERSON_EDIT)
        assert latest.target_id == 1
        assert latest.creator_id == 1
        assert latest.commit_message == "use native name"

        _, content = await load_revision_content(seeded_session, latest.id, RevType.PERSON_EDIT)
        assert WikiEditFact.from_rev(content) == WikiEditFact(
            name="山寺宏一", infobox="{{Infobox}}", summary="Seiyuu", img=""
        )

    async def test_stale_expected_leaves_no_trace(self, seeded_session):
        before = await _revision_count(seeded_session)

        with pytest.raises(WikiChangedError) as exc_info:
            await wiki_service.edit_person(
                seeded_session,
                1,
                changes={"name": "New"},
                expected={"name": "Somebody Else", "summary": "Voice actor"},
                commit_message="edit",
                editor_id=1,
            )

        assert "Index: name" in exc_info.value.diff
        assert "Index: summary" not in exc_info.value.diff
        assert await _revision_count(seeded_session) == before

        person = (await seeded_session.execute(select(Person).where(Person.id == 1))).scalar_one()
        assert person.name == "Koichi Yamadera"

    async def test_locked_person_raises_locked(self, seeded_session):
        with pytest.raises(LockedError):
            await wiki_service.edit_person(
                seeded_session, 2, changes={"name": "x"}, expected={}, commit_message="m", editor_id=1
            )

    async def test_redirected_person_raises_locked(self, seeded_session):
        with pytest.raises(LockedError):
            await wiki_service.edit_person(
                seeded_session, 3, changes={"name": "x"}, expected={}, commit_message="m", editor_id=1
            )

    async def test_missing_person(self, seeded_session):
        with pytest.raises(NotFoundError, match="person 404"):
            await wiki_service.edit_person(
                seeded_session, 404, changes={}, expected={}, commit_message="m", editor_id=1
            )

    async def test_revision_failure_rolls_back_edit(self, seeded_session):
        before = await _revision_count(seeded_session)

        with patch(
            "wikirev.db.services.wiki_service.revision_service.record_revision",
            new_callable=AsyncMock,
            side_effect=RuntimeError("disk full"),
        ):
            with pytest.raises(RuntimeError):
                await wiki_service.edit_person(
                    seeded_session, 1, changes={"name": "Lost"}, expected={}, commit_message="m", editor_id=1
                )

        seeded_session.expire_all()
        person = (await seeded_session.execute(select(Person).where(Person.id == 1))).scalar_one()
        assert person.name == "Koichi Yamadera"
        assert await _revision_count(seeded_session) == before


class TestEditCharacter:
    async def test_records_character_edit(self, seeded_session):
        await wiki_service.edit_character(
            seeded_session,
            1,
            changes={"infobox": "{{Infobox Crt|new}}"},
            expected={},
            commit_message="infobox",
            editor_id=2,
        )

        character = (await seeded_session.execute(select(Character).where(Character.id == 1))).scalar_one()
        assert character.infobox == "{{Infobox Crt|new}}"

        latest = (await seeded_session.execute(
            select(RevisionHistory).order_by(RevisionHistory.id.desc()).limit(1)
        )).scalar_one()
        assert latest.type == int(RevType.CHARACTER_EDIT)
        assert latest.creator_id == 2

    async def test_locked_character(self, seeded_session):
        with pytest.raises(LockedError):
            await wiki_service.edit_character(
                seeded_session, 2, changes={}, expected={}, commit_message="m", editor_id=1
            )
