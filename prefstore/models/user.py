"""User accounts and their preferences."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .owner import HasPreferences
from .preference import PreferenceRecordMixin


class UserPreference(Base, PreferenceRecordMixin):
    """Preference record owned by a User."""

    __tablename__ = "user_preferences"
    __table_args__ = (Index("ix_user_preferences_owner_name", "owner_id", "name"),)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="preferences")


class User(Base, TimestampMixin, HasPreferences):
    """Application user carrying arbitrary preferences."""

    __tablename__ = "users"

    preference_class = UserPreference

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    preferences: Mapped[list["UserPreference"]] = relationship(
        "UserPreference",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="UserPreference.id",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
