"""Per-type decoders for stored revision content.

Each :class:`RevType` that has a detail view maps to exactly one decoder in
:data:`DECODERS`. A decoder turns the raw content stored in a revision blob
into typed facts, can encode those facts back into the stored shape, and
describes them for API responses with names looked up in bulk. Names that
cannot be resolved are rendered as an empty string.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from wikirev.db.models import RevType
from wikirev.db.services import fetcher, revision_service


def _name_of(rows: Mapping[int, Any], entity_id: int) -> str:
    row = rows.get(entity_id)
    return row.name if row is not None and row.name else ""


def _as_int(value: Any) -> int:
    # Legacy rows store ids as strings, sometimes blank
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return int(value)


def _relation_items(content: Any) -> list[Mapping[str, Any]]:
    # Relation content is stored either as an index-keyed object or a list
    if isinstance(content, Mapping):
        return list(content.values())
    return list(content or [])


@dataclass(frozen=True)
class CharacterSubjectFact:
    subject_id: int
    character_type: int

    @classmethod
    def from_rev(cls, item: Mapping[str, Any]) -> CharacterSubjectFact:
        return cls(subject_id=_as_int(item["subject_id"]), character_type=_as_int(item["crt_type"]))

    def to_rev(self) -> dict[str, Any]:
        return {"subject_id": self.subject_id, "crt_type": self.character_type}


@dataclass(frozen=True)
class CharacterCastFact:
    subject_id: int
    person_id: int

    @classmethod
    def from_rev(cls, item: Mapping[str, Any]) -> CharacterCastFact:
        return cls(subject_id=_as_int(item["subject_id"]), person_id=_as_int(item["prsn_id"]))

    def to_rev(self) -> dict[str, Any]:
        return {"subject_id": self.subject_id, "prsn_id": self.person_id}


@dataclass(frozen=True)
class PersonSubjectFact:
    subject_id: int
    position: int

    @classmethod
    def from_rev(cls, item: Mapping[str, Any]) -> PersonSubjectFact:
        return cls(subject_id=_as_int(item["subject_id"]), position=_as_int(item["position"]))

    def to_rev(self) -> dict[str, Any]:
        return {"subject_id": self.subject_id, "position": self.position}


@dataclass(frozen=True)
class PersonCastFact:
    subject_id: int
    character_id: int

    @classmethod
    def from_rev(cls, item: Mapping[str, Any]) -> PersonCastFact:
        return cls(subject_id=_as_int(item["subject_id"]), character_id=_as_int(item["crt_id"]))

    def to_rev(self) -> dict[str, Any]:
        return {"subject_id": self.subject_id, "crt_id": self.character_id}


@dataclass(frozen=True)
class WikiEditFact:
    """Snapshot of a person or character wiki after an edit."""

    name: str
    infobox: str
    summary: str
    img: str = ""

    @classmethod
    def from_rev(cls, item: Mapping[str, Any]) -> WikiEditFact:
        extra = item.get("extra") or {}
        return cls(
            name=str(item.get("crt_name", "")),
            infobox=str(item.get("crt_infobox", "")),
            summary=str(item.get("crt_summary", "")),
            img=str(extra.get("img", "")),
        )

    def to_rev(self) -> dict[str, Any]:
        return {
            "crt_name": self.name,
            "crt_infobox": self.infobox,
            "crt_summary": self.summary,
            "extra": {"img": self.img},
        }


class Fact(Protocol):
    def to_rev(self) -> dict[str, Any]: ...


FactT = TypeVar("FactT")


@dataclass(frozen=True)
class RelationDecoder(Generic[FactT]):
    """Decoder for revisions that store a list of relation items."""

    parse: Callable[[Mapping[str, Any]], FactT]
    describe_facts: Callable[[AsyncSession, list[FactT]], Awaitable[list[dict[str, Any]]]]

    def decode(self, content: Any) -> list[FactT]:
        return [self.parse(item) for item in _relation_items(content)]

    def encode(self, facts: Iterable[Fact]) -> dict[str, dict[str, Any]]:
        return {str(index): fact.to_rev() for index, fact in enumerate(facts)}

    async def describe(self, db_session: AsyncSession, content: Any) -> list[dict[str, Any]]:
        return await self.describe_facts(db_session, self.decode(content))


@dataclass(frozen=True)
class EditDecoder:
    """Decoder for revisions that store a single wiki snapshot."""

    def decode(self, content: Any) -> WikiEditFact:
        return WikiEditFact.from_rev(content)

    def encode(self, fact: WikiEditFact) -> dict[str, Any]:
        return fact.to_rev()

    async def describe(self, db_session: AsyncSession, content: Any) -> dict[str, Any]:
        fact = self.decode(content)
        return {"name": fact.name, "infobox": fact.infobox, "summary": fact.summary, "img": fact.img}


async def _describe_character_subjects(
    db_session: AsyncSession, facts: list[CharacterSubjectFact]
) -> list[dict[str, Any]]:
    subjects = await fetcher.fetch_slim_subjects_by_ids(db_session, (f.subject_id for f in facts))
    return [
        {
            "subjectId": f.subject_id,
            "subjectName": _name_of(subjects, f.subject_id),
            "characterType": f.character_type,
        }
        for f in facts
    ]


async def _describe_character_casts(
    db_session: AsyncSession, facts: list[CharacterCastFact]
) -> list[dict[str, Any]]:
    subjects = await fetcher.fetch_slim_subjects_by_ids(db_session, (f.subject_id for f in facts))
    persons = await fetcher.fetch_slim_persons_by_ids(db_session, (f.person_id for f in facts))
    return [
        {
            "subjectId": f.subject_id,
            "subjectName": _name_of(subjects, f.subject_id),
            "personId": f.person_id,
            "personName": _name_of(persons, f.person_id),
        }
        for f in facts
    ]


async def _describe_person_subjects(
    db_session: AsyncSession, facts: list[PersonSubjectFact]
) -> list[dict[str, Any]]:
    subjects = await fetcher.fetch_slim_subjects_by_ids(db_session, (f.subject_id for f in facts))
    return [
        {
            "subjectId": f.subject_id,
            "subjectName": _name_of(subjects, f.subject_id),
            "position": f.position,
        }
        for f in facts
    ]


async def _describe_person_casts(
    db_session: AsyncSession, facts: list[PersonCastFact]
) -> list[dict[str, Any]]:
    subjects = await fetcher.fetch_slim_subjects_by_ids(db_session, (f.subject_id for f in facts))
    characters = await fetcher.fetch_slim_characters_by_ids(db_session, (f.character_id for f in facts))
    return [
        {
            "subjectId": f.subject_id,
            "subjectName": _name_of(subjects, f.subject_id),
            "characterId": f.character_id,
            "characterName": _name_of(characters, f.character_id),
        }
        for f in facts
    ]


RevisionDecoder = RelationDecoder | EditDecoder

DECODERS: dict[RevType, RevisionDecoder] = {
    RevType.CHARACTER_SUBJECT_RELATION: RelationDecoder(CharacterSubjectFact.from_rev, _describe_character_subjects),
    RevType.CHARACTER_CAST_RELATION: RelationDecoder(CharacterCastFact.from_rev, _describe_character_casts),
    RevType.PERSON_SUBJECT_RELATION: RelationDecoder(PersonSubjectFact.from_rev, _describe_person_subjects),
    RevType.PERSON_CAST_RELATION: RelationDecoder(PersonCastFact.from_rev, _describe_person_casts),
    RevType.PERSON_EDIT: EditDecoder(),
    RevType.CHARACTER_EDIT: EditDecoder(),
}


def get_decoder(rev_type: RevType) -> RevisionDecoder:
    try:
        return DECODERS[rev_type]
    except KeyError:
        raise ValueError(f"no decoder registered for {rev_type.name}") from None


async def describe_revision(
    db_session: AsyncSession,
    revision_id: int,
    rev_type: RevType,
) -> list[dict[str, Any]] | dict[str, Any]:
    """Load a revision of ``rev_type`` and describe its content for the API.

    Raises:
        NotFoundError: If the revision is missing, is of another type, or
            its text blob or blob entry is missing
    """
    decoder = get_decoder(rev_type)
    _, content = await revision_service.load_revision_content(db_session, revision_id, rev_type)
    return await decoder.describe(db_session, content)
