"""Persistence collaborators for the preference store.

The store never commits; repositories only stage work on the caller's unit
of work.
"""

import logging
from typing import Protocol

from sqlalchemy import delete, inspect
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class PreferenceRepository(Protocol):
    def add(self, pref) -> None: ...

    def remove(self, pref) -> None: ...

    def delete_all_for_owner(self, owner_type: type, owner) -> int: ...


class SQLAlchemyPreferenceRepository:
    """Stages preference changes on a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, pref) -> None:
        self.session.add(pref)

    def remove(self, pref) -> None:
        """Delete a persisted record, or discard one that was never flushed."""
        state = inspect(pref)
        if state.persistent:
            self.session.delete(pref)
        elif pref in self.session:
            self.session.expunge(pref)

    def delete_all_for_owner(self, owner_type: type, owner) -> int:
        """Bulk delete every preference row of ``owner`` in one statement.

        Bypasses the loaded collection; the owner's ``preferences`` attribute
        is expired afterwards so the next access reloads it.
        """
        pref_class = owner_type.preference_class
        self.session.flush()
        result = self.session.execute(
            delete(pref_class)
            .where(pref_class.owner_id == owner.id)
            .execution_options(synchronize_session="evaluate")
        )
        self.session.expire(owner, ["preferences"])
        logger.info(
            f"Expunged {result.rowcount} {pref_class.__name__} rows for "
            f"{owner_type.__name__} id={owner.id}"
        )
        return result.rowcount
