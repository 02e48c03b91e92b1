from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from wikirev.db.base import Base
from wikirev.db.models.mono import MonoMixin


class Person(MonoMixin, Base):
    """Real-world person: voice actor, author, staff..."""

    __tablename__ = "persons"

    type_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
