"""Columns shared by every owner's preference table."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import TimestampMixin


class PreferenceRecordMixin(TimestampMixin):
    """A single named attribute attached to an owner.

    ``ix`` is None for a scalar preference and an integer for one element of
    an indexed preference. ``expires_at`` of None means the preference never
    expires. Concrete classes add ``owner_id`` and the ``owner`` relationship.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    ix: Mapped[int | None] = mapped_column(Integer, nullable=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}(id={self.id}, name='{self.name}', "
            f"ix={self.ix}, expires_at={self.expires_at})>"
        )
