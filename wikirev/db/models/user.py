from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from wikirev.db.base import Base


class User(Base):
    """Editor account, read only to resolve display names."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    nickname: Mapped[str] = mapped_column(String(64), nullable=False, default="")
