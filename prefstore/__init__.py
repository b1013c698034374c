"""Named, indexed and expiring preferences attached to ORM entities."""

from .clock import Clock, FixedClock, SystemClock
from .exceptions import (
    IndexLimitError,
    MalformedKeyError,
    PreferenceError,
    PreferenceStoreNotBoundError,
)
from .folding import fold_path
from .index import PreferenceIndex
from .repository import PreferenceRepository, SQLAlchemyPreferenceRepository
from .store import PreferenceStore

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "PreferenceError",
    "IndexLimitError",
    "MalformedKeyError",
    "PreferenceStoreNotBoundError",
    "fold_path",
    "PreferenceIndex",
    "PreferenceRepository",
    "SQLAlchemyPreferenceRepository",
    "PreferenceStore",
]
