"""Subject relation history endpoints."""

from wikirev.controllers.history_factory import create_relation_history_controller
from wikirev.db.models import RevType

SubjectRelationHistoryController = create_relation_history_controller(
    "/subjects",
    "/{target_id:int}/subjects/history-summary",
    operation_id="subjectRelationHistorySummary",
    summary="List subject-subject relation edits",
    rev_types=[RevType.SUBJECT_RELATION],
)

# Character and cast edits made from the subject page share one listing
SubjectCharacterHistoryController = create_relation_history_controller(
    "/subjects",
    "/{target_id:int}/characters/history-summary",
    operation_id="subjectCharacterHistorySummary",
    summary="List subject-character relation edits",
    rev_types=[RevType.SUBJECT_CHARACTER_RELATION, RevType.SUBJECT_CAST_RELATION],
)

SubjectPersonHistoryController = create_relation_history_controller(
    "/subjects",
    "/{target_id:int}/persons/history-summary",
    operation_id="subjectPersonHistorySummary",
    summary="List subject-person relation edits",
    rev_types=[RevType.SUBJECT_PERSON_RELATION],
)
