"""Person wiki endpoints."""

from typing import Annotated, Any

from litestar import Controller, get, patch
from litestar.params import Parameter
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.auth import AuthContext
from wikirev.auth.context import MONO_EDIT
from wikirev.db.models import RevType
from wikirev.db.services import revision_decoders, wiki_service
from wikirev.schemas import PersonEditBody, person_wiki_info

PositiveId = Annotated[int, Parameter(ge=1)]


class PersonWikiController(Controller):
    path = "/persons"
    tags = ["wiki"]

    @get("/{person_id:int}", operation_id="getPersonWikiInfo", summary="Get the current person wiki")
    async def get_person(self, db_session: AsyncSession, person_id: PositiveId) -> dict[str, Any]:
        person = await wiki_service.get_person_wiki(db_session, person_id)
        return person_wiki_info(person)

    @patch("/{person_id:int}", operation_id="patchPersonInfo", summary="Edit a person wiki")
    async def patch_person(
        self,
        db_session: AsyncSession,
        auth: AuthContext,
        person_id: PositiveId,
        data: PersonEditBody,
    ) -> dict[str, Any]:
        auth.require_login("editing a person")
        auth.require_permission(MONO_EDIT, "edit person")

        await wiki_service.edit_person(
            db_session,
            person_id,
            changes=data.person.as_fields(),
            expected=data.expected_revision.as_fields(),
            commit_message=data.commit_message,
            editor_id=auth.user_id,
        )
        return {}

    @get(
        "/-/revisions/{revision_id:int}",
        operation_id="getPersonRevision",
        summary="Get a person wiki as of a revision",
    )
    async def get_revision(self, db_session: AsyncSession, revision_id: PositiveId) -> dict[str, Any]:
        return await revision_decoders.describe_revision(db_session, revision_id, RevType.PERSON_EDIT)

    @get(
        "/-/subjects/revisions/{revision_id:int}",
        operation_id="getPersonSubjectRevision",
        summary="Get person-subject relations as of a revision",
    )
    async def get_subject_revision(
        self, db_session: AsyncSession, revision_id: PositiveId
    ) -> list[dict[str, Any]]:
        return await revision_decoders.describe_revision(
            db_session, revision_id, RevType.PERSON_SUBJECT_RELATION
        )

    @get(
        "/-/characters/revisions/{revision_id:int}",
        operation_id="getPersonCharacterRevision",
        summary="Get person-character relations as of a revision",
    )
    async def get_character_revision(
        self, db_session: AsyncSession, revision_id: PositiveId
    ) -> list[dict[str, Any]]:
        return await revision_decoders.describe_revision(
            db_session, revision_id, RevType.PERSON_CAST_RELATION
        )
