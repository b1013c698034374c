"""In-memory lookups over one owner's preference records.

Every lookup is a linear scan of the owner's collection; owners are expected
to carry a handful of preferences, so no secondary index is kept.
"""

from typing import Iterable


class PreferenceIndex:
    """Read-only view over a collection of preference records."""

    def __init__(self, records: Iterable):
        self.records = list(records)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def find(self, name: str, index: int | None = None):
        """First record with exactly this name and index (None matches None only)."""
        for pref in self.records:
            if pref.name == name and pref.ix == index:
                return pref
        return None

    def find_all_by_name(self, name: str) -> list:
        return [pref for pref in self.records if pref.name == name]

    def find_all_by_prefix(self, prefix: str) -> list:
        """Records whose name starts with ``prefix``.

        This is a raw string prefix, not a path match: ``"email"`` also
        matches ``"emailx.y"``.
        """
        return [pref for pref in self.records if pref.name.startswith(prefix)]

    def highest_index(self, name: str) -> int:
        """Largest non-null index used by ``name``, or -1."""
        return max(
            (pref.ix for pref in self.records if pref.name == name and pref.ix is not None),
            default=-1,
        )

    def count(self, name: str) -> int:
        """Number of records for ``name``, the unindexed slot included."""
        return sum(1 for pref in self.records if pref.name == name)
