from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wikirev.db.base import Base


class Subject(Base):
    """Subject (anime, book, game...) referenced by relation revisions."""

    __tablename__ = "subjects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_cn: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    type_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
