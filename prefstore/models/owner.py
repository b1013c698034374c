"""Preference capability for owner entities."""

from typing import ClassVar

from ..clock import Clock
from ..config import Settings
from ..exceptions import PreferenceStoreNotBoundError
from ..repository import PreferenceRepository
from ..store import PreferenceStore


class HasPreferences:
    """Mixin for entities that carry preferences.

    A concrete owner declares the record type it uses and a ``preferences``
    relationship back-populating the record's ``owner``::

        class User(Base, HasPreferences):
            preference_class = UserPreference
            preferences: Mapped[list["UserPreference"]] = relationship(...)

    Bind a store once per unit of work, then call the preference methods on
    the owner directly::

        user.bind_preferences(SQLAlchemyPreferenceRepository(db))
        user.set_preference("theme", "dark")
    """

    preference_class: ClassVar[type]

    _preference_store = None

    def new_preference(self):
        """Create an empty preference record attached to this owner."""
        pref = self.preference_class()
        self.preferences.append(pref)
        return pref

    def bind_preferences(
        self,
        repository: PreferenceRepository,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> PreferenceStore:
        self._preference_store = PreferenceStore.from_settings(
            self, repository, clock=clock, settings=settings
        )
        return self._preference_store

    @property
    def preference_store(self) -> PreferenceStore:
        if self._preference_store is None:
            raise PreferenceStoreNotBoundError(
                f"{type(self).__name__} has no preference store; call bind_preferences() first"
            )
        return self._preference_store

    def get_preferences(self):
        return self.preference_store.get_preferences()

    def load_preference(self, name, index=None, include_expired=False):
        return self.preference_store.load_preference(name, index, include_expired)

    def has_preference(self, name, index=None, include_expired=False):
        return self.preference_store.has_preference(name, index, include_expired)

    def get_preference(self, name, index=None, include_expired=False, default=None):
        return self.preference_store.get_preference(name, index, include_expired, default)

    def set_preference(self, name, value, expires=None, index=None):
        return self.preference_store.set_preference(name, value, expires, index)

    def add_indexed_preference(self, name, value, expires=None, max_count=0):
        return self.preference_store.add_indexed_preference(name, value, expires, max_count)

    def clean_expired_preferences(self, as_of=None, name=None):
        return self.preference_store.clean_expired_preferences(as_of, name)

    def delete_preference(self, name, index=None):
        return self.preference_store.delete_preference(name, index)

    def expunge_preferences(self):
        return self.preference_store.expunge_preferences()

    def get_indexed_preference(self, name, with_index=False, ignore_expired=True):
        return self.preference_store.get_indexed_preference(name, with_index, ignore_expired)

    def get_assoc_preference(self, name, index=None, ignore_expired=True):
        return self.preference_store.get_assoc_preference(name, index, ignore_expired)

    def delete_assoc_preference(self, name, index=None):
        return self.preference_store.delete_assoc_preference(name, index)
