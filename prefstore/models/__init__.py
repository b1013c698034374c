"""Database models for the preference store."""

from .base import Base, TimestampMixin
from .preference import PreferenceRecordMixin
from .owner import HasPreferences
from .user import User, UserPreference
from .customer import Customer, CustomerPreference

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "PreferenceRecordMixin",
    "HasPreferences",
    # Owners and their preference records
    "User",
    "UserPreference",
    "Customer",
    "CustomerPreference",
]
