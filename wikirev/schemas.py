"""Request bodies and response shapes for the wiki API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wikirev.db.models import Character, Person


class MonoEditPatch(BaseModel):
    """Partial person/character wiki fields; omitted fields are left alone."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    infobox: str | None = Field(default=None, min_length=1)
    summary: str | None = None

    def as_fields(self) -> dict[str, str]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class MonoEditBody(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    commit_message: str = Field(alias="commitMessage", min_length=1, max_length=200)
    expected_revision: MonoEditPatch = Field(default_factory=MonoEditPatch, alias="expectedRevision")


class PersonEditBody(MonoEditBody):
    person: MonoEditPatch


class CharacterEditBody(MonoEditBody):
    character: MonoEditPatch


def person_wiki_info(person: Person) -> dict[str, Any]:
    return {
        "id": person.id,
        "name": person.name,
        "typeID": person.type_id,
        "infobox": person.infobox,
        "summary": person.summary,
    }


def character_wiki_info(character: Character) -> dict[str, Any]:
    return {
        "id": character.id,
        "name": character.name,
        "role": character.role,
        "infobox": character.infobox,
        "summary": character.summary,
    }
