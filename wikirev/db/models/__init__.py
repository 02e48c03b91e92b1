from wikirev.db.models.character import Character
from wikirev.db.models.person import Person
from wikirev.db.models.revision import RevisionHistory, RevisionText, RevType
from wikirev.db.models.subject import Subject
from wikirev.db.models.user import User

__all__ = ["Character", "Person", "RevType", "RevisionHistory", "RevisionText", "Subject", "User"]
