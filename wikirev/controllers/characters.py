"""Character wiki endpoints."""

from typing import Annotated, Any

from litestar import Controller, get, patch
from litestar.params import Parameter
from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.auth import AuthContext
from wikirev.auth.context import MONO_EDIT
from wikirev.db.models import RevType
from wikirev.db.services import revision_decoders, wiki_service
from wikirev.schemas import CharacterEditBody, character_wiki_info

PositiveId = Annotated[int, Parameter(ge=1)]


class CharacterWikiController(Controller):
    path = "/characters"
    tags = ["wiki"]

    @get("/{character_id:int}", operation_id="getCharacterWikiInfo", summary="Get the current character wiki")
    async def get_character(self, db_session: AsyncSession, character_id: PositiveId) -> dict[str, Any]:
        character = await wiki_service.get_character_wiki(db_session, character_id)
        return character_wiki_info(character)

    @patch("/{character_id:int}", operation_id="patchCharacterInfo", summary="Edit a character wiki")
    async def patch_character(
        self,
        db_session: AsyncSession,
        auth: AuthContext,
        character_id: PositiveId,
        data: CharacterEditBody,
    ) -> dict[str, Any]:
        auth.require_login("editing a character")
        auth.require_permission(MONO_EDIT, "edit character")

        await wiki_service.edit_character(
            db_session,
            character_id,
            changes=data.character.as_fields(),
            expected=data.expected_revision.as_fields(),
            commit_message=data.commit_message,
            editor_id=auth.user_id,
        )
        return {}

    @get(
        "/-/revisions/{revision_id:int}",
        operation_id="getCharacterRevision",
        summary="Get a character wiki as of a revision",
    )
    async def get_revision(self, db_session: AsyncSession, revision_id: PositiveId) -> dict[str, Any]:
        return await revision_decoders.describe_revision(db_session, revision_id, RevType.CHARACTER_EDIT)

    # No "/-/" segment here, unlike the person routes; kept for client compatibility
    @get(
        "/subjects/revisions/{revision_id:int}",
        operation_id="getCharacterSubjectRevision",
        summary="Get character-subject relations as of a revision",
    )
    async def get_subject_revision(
        self, db_session: AsyncSession, revision_id: PositiveId
    ) -> list[dict[str, Any]]:
        return await revision_decoders.describe_revision(
            db_session, revision_id, RevType.CHARACTER_SUBJECT_RELATION
        )

    @get(
        "/persons/revisions/{revision_id:int}",
        operation_id="getCharacterPersonRevision",
        summary="Get character-person relations as of a revision",
    )
    async def get_person_revision(
        self, db_session: AsyncSession, revision_id: PositiveId
    ) -> list[dict[str, Any]]:
        return await revision_decoders.describe_revision(
            db_session, revision_id, RevType.CHARACTER_CAST_RELATION
        )
