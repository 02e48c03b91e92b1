"""Columns shared by persons and characters ("mono" entries)."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column


class MonoMixin:
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    infobox: Mapped[str] = mapped_column(Text, nullable=False, default="")
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    img: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Editing state
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Non-zero when merged into another entry
    redirect: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    def wiki_fields(self) -> dict[str, str]:
        """Fields an editor can assert in an expected revision."""
        return {"name": self.name, "infobox": self.infobox, "summary": self.summary}
