from wikirev.controllers.characters import CharacterWikiController
from wikirev.controllers.history_factory import create_relation_history_controller
from wikirev.controllers.persons import PersonWikiController
from wikirev.controllers.subjects import (
    SubjectCharacterHistoryController,
    SubjectPersonHistoryController,
    SubjectRelationHistoryController,
)
from wikirev.db.models import RevType

PersonHistoryController = create_relation_history_controller(
    "/persons",
    "/{target_id:int}/history-summary",
    operation_id="personHistorySummary",
    summary="List person wiki edits",
    rev_types=[RevType.PERSON_EDIT],
)
PersonSubjectHistoryController = create_relation_history_controller(
    "/persons",
    "/{target_id:int}/subjects/history-summary",
    operation_id="personSubjectHistorySummary",
    summary="List person-subject relation edits",
    rev_types=[RevType.PERSON_SUBJECT_RELATION],
)
PersonCharacterHistoryController = create_relation_history_controller(
    "/persons",
    "/{target_id:int}/characters/history-summary",
    operation_id="personCharacterHistorySummary",
    summary="List person-character relation edits",
    rev_types=[RevType.PERSON_CAST_RELATION],
)

CharacterHistoryController = create_relation_history_controller(
    "/characters",
    "/{target_id:int}/history-summary",
    operation_id="characterHistorySummary",
    summary="List character wiki edits",
    rev_types=[RevType.CHARACTER_EDIT],
)
CharacterSubjectHistoryController = create_relation_history_controller(
    "/characters",
    "/{target_id:int}/subjects/history-summary",
    operation_id="characterSubjectHistorySummary",
    summary="List character-subject relation edits",
    rev_types=[RevType.CHARACTER_SUBJECT_RELATION],
)
CharacterPersonHistoryController = create_relation_history_controller(
    "/characters",
    "/{target_id:int}/persons/history-summary",
    operation_id="characterPersonHistorySummary",
    summary="List character-person relation edits",
    rev_types=[RevType.CHARACTER_CAST_RELATION],
)

ROUTE_HANDLERS = [
    PersonWikiController,
    PersonHistoryController,
    PersonSubjectHistoryController,
    PersonCharacterHistoryController,
    CharacterWikiController,
    CharacterHistoryController,
    CharacterSubjectHistoryController,
    CharacterPersonHistoryController,
    SubjectRelationHistoryController,
    SubjectCharacterHistoryController,
    SubjectPersonHistoryController,
]

__all__ = ["ROUTE_HANDLERS"]
