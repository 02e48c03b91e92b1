from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from wikirev.db.base import Base
from wikirev.db.models.mono import MonoMixin


class Character(MonoMixin, Base):
    """Fictional character."""

    __tablename__ = "characters"

    role: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
