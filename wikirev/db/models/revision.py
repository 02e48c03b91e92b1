"""Revision log tables.

``revision_history`` is an append-only log with one row per edit. The edited
content lives in ``revision_text`` blobs (see :mod:`wikirev.lib.rev_text`).
"""

import time
from enum import IntEnum

from sqlalchemy import BigInteger, Index, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from wikirev.db.base import Base


class RevType(IntEnum):
    """What kind of edit a revision recorded."""

    CHARACTER_EDIT = 2
    PERSON_EDIT = 3
    CHARACTER_SUBJECT_RELATION = 4
    CHARACTER_CAST_RELATION = 5
    PERSON_CAST_RELATION = 6
    PERSON_SUBJECT_RELATION = 10
    SUBJECT_RELATION = 17
    SUBJECT_CHARACTER_RELATION = 18
    SUBJECT_CAST_RELATION = 19
    SUBJECT_PERSON_RELATION = 20


class RevisionHistory(Base):
    __tablename__ = "revision_history"
    __table_args__ = (Index("ix_revision_history_target_type", "target_id", "type"),)

    type: Mapped[int] = mapped_column(Integer, nullable=False)
    # Id of the edited person/character/subject
    target_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    creator_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    text_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # Unix seconds
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=lambda: int(time.time()))
    commit_message: Mapped[str] = mapped_column(String(200), nullable=False, default="")


class RevisionText(Base):
    __tablename__ = "revision_text"

    blob: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
