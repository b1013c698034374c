"""Customers and their preferences."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .owner import HasPreferences
from .preference import PreferenceRecordMixin


class CustomerPreference(Base, PreferenceRecordMixin):
    """Preference record owned by a Customer."""

    __tablename__ = "customer_preferences"
    __table_args__ = (Index("ix_customer_preferences_owner_name", "owner_id", "name"),)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["Customer"] = relationship("Customer", back_populates="preferences")


class Customer(Base, TimestampMixin, HasPreferences):
    """Customer account; shares the preference engine with User."""

    __tablename__ = "customers"

    preference_class = CustomerPreference

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    preferences: Mapped[list["CustomerPreference"]] = relationship(
        "CustomerPreference",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="CustomerPreference.id",
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}')>"
