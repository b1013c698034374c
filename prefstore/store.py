"""Preference resolution and mutation engine.

A PreferenceStore works on one owner's ``preferences`` collection. Reads scan
that collection; writes mutate it and stage the change on the repository.
Nothing here flushes or commits: callers own the transaction, e.g.::

    with get_db_session() as db:
        user = db.get(User, user_id)
        user.bind_preferences(SQLAlchemyPreferenceRepository(db))
        user.add_indexed_preference("mailing_list.goalies.email", "j@k.l")
"""

import logging
from datetime import datetime
from typing import Literal

from .clock import Clock, SystemClock
from .config import Settings, get_settings
from .expiry import is_expired, is_live, resolve_as_of, to_datetime
from .exceptions import IndexLimitError
from .folding import SEPARATOR, fold_path
from .index import PreferenceIndex
from .repository import PreferenceRepository

logger = logging.getLogger(__name__)

AssocExpiryMode = Literal["legacy", "consistent"]


class PreferenceStore:
    """Get/set/index/expire/assemble preferences for a single owner.

    Args:
        owner: Entity exposing a mutable ``preferences`` collection and a
            ``new_preference()`` factory (see HasPreferences).
        repository: Where additions and removals are staged.
        clock: Source of "now"; defaults to the system clock.
        strict_keys: Raise MalformedKeyError on bad dotted names while
            assembling associative preferences instead of skipping them.
        assoc_expiry_mode: How ``ignore_expired`` is read by
            get_assoc_preference. ``"legacy"`` drops expired records only
            when ``ignore_expired`` is False, so the default call returns
            expired records too. ``"consistent"`` reads it the same way as
            get_indexed_preference.
    """

    def __init__(
        self,
        owner,
        repository: PreferenceRepository,
        clock: Clock | None = None,
        strict_keys: bool = False,
        assoc_expiry_mode: AssocExpiryMode = "legacy",
    ):
        if assoc_expiry_mode not in ("legacy", "consistent"):
            raise ValueError(f"Unknown assoc_expiry_mode: {assoc_expiry_mode}")
        self.owner = owner
        self.repository = repository
        self.clock = clock or SystemClock()
        self.strict_keys = strict_keys
        self.assoc_expiry_mode = assoc_expiry_mode

    @classmethod
    def from_settings(
        cls,
        owner,
        repository: PreferenceRepository,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> "PreferenceStore":
        settings = settings or get_settings()
        return cls(
            owner,
            repository,
            clock=clock,
            strict_keys=settings.strict_key_folding,
            assoc_expiry_mode=settings.assoc_expiry_mode,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index(self) -> PreferenceIndex:
        return PreferenceIndex(self.owner.preferences)

    def _now(self) -> datetime:
        return self.clock.now()

    def _remove(self, pref) -> None:
        self.owner.preferences.remove(pref)
        self.repository.remove(pref)

    # ------------------------------------------------------------------
    # Scalar preferences
    # ------------------------------------------------------------------

    def get_preferences(self) -> tuple:
        """All preference records of the owner, expired ones included."""
        return tuple(self.owner.preferences)

    def load_preference(self, name: str, index: int | None = None, include_expired: bool = False):
        """Return the record for (name, index) if it exists and is live, else None."""
        pref = self._index().find(name, index)
        if pref is None:
            return None
        if is_live(pref, include_expired=include_expired, clock=self.clock):
            return pref
        return None

    def get_preference(
        self,
        name: str,
        index: int | None = None,
        include_expired: bool = False,
        default=None,
    ):
        """Value of the named preference, or ``default`` if missing or expired.

        Stored values are strings and may be falsy ("" or "0"); compare the
        result against ``default`` rather than testing its truthiness.
        """
        pref = self.load_preference(name, index, include_expired)
        if pref is None:
            return default
        return pref.value

    def has_preference(self, name: str, index: int | None = None, include_expired: bool = False) -> bool:
        return self.load_preference(name, index, include_expired) is not None

    def set_preference(self, name: str, value, expires=None, index: int | None = None):
        """Create or update the preference at (name, index).

        An existing record is updated in place even if it has expired.
        ``expires`` may be a datetime, a Unix timestamp, a date/time string,
        a relative expression such as ``"+1 day"`` (resolved against the
        store clock) or None (never expires).

        Returns:
            The created or updated record.
        """
        expires_at = to_datetime(expires, self._now())
        value = value if isinstance(value, str) else str(value)

        pref = self._index().find(name, index)
        if pref is not None:
            pref.value = value
            pref.expires_at = expires_at
            pref.ix = index
            logger.debug(f"Updated preference {name}[{index}]")
            return pref

        pref = self.owner.new_preference()
        pref.name = name
        pref.value = value
        pref.created_at = self._now()
        pref.expires_at = expires_at
        pref.ix = index
        self.repository.add(pref)
        logger.debug(f"Created preference {name}[{index}]")
        return pref

    # ------------------------------------------------------------------
    # Indexed preferences
    # ------------------------------------------------------------------

    def add_indexed_preference(self, name: str, value, expires=None, max_count: int = 0) -> list:
        """Append one value, or each value of a list/tuple, after the highest index.

        With three addresses stored at indexes 0-2, adding ``"j@k.l"`` stores
        it at index 3. The limit covers the records already stored under
        ``name`` (the unindexed slot counts too) plus the values being added;
        nothing is staged when it would be exceeded.

        Raises:
            IndexLimitError: If ``max_count`` is set and would be exceeded.
        """
        index = self._index()
        count = index.count(name)
        highest = index.highest_index(name)
        values = value if isinstance(value, (list, tuple)) else [value]

        if max_count and count + len(values) > max_count:
            raise IndexLimitError(name, max_count)

        created = []
        for v in values:
            highest += 1
            created.append(self.set_preference(name, v, expires, highest))
        return created

    def get_indexed_preference(self, name: str, with_index: bool = False, ignore_expired: bool = True):
        """Indexed preference as a dict ordered by index, or None if there is none.

        Values are plain strings, or ``{"index": ix, "value": value}`` dicts
        when ``with_index`` is set. Expired records are left out unless
        ``ignore_expired`` is False.
        """
        now = self._now()
        values = {}

        for pref in self._index().find_all_by_name(name):
            if ignore_expired and not is_live(pref, as_of=now):
                continue

            if with_index:
                values[pref.ix] = {"index": pref.ix, "value": pref.value}
            else:
                values[pref.ix] = pref.value

        if not values:
            return None

        return {ix: values[ix] for ix in sorted(values, key=lambda ix: -1 if ix is None else ix)}

    # ------------------------------------------------------------------
    # Associative preferences
    # ------------------------------------------------------------------

    def _skip_assoc(self, pref, ignore_expired: bool, now: datetime) -> bool:
        if self.assoc_expiry_mode == "consistent":
            return ignore_expired and not is_live(pref, as_of=now)
        return not ignore_expired and is_expired(pref, now)

    def get_assoc_preference(self, name: str, index: int | None = None, ignore_expired: bool = True):
        """Reassemble dotted preferences under ``name`` into nested dicts keyed by index.

        Given::

            email.address    ix=0  a@b.c
            email.confirmed  ix=0  false
            email.address    ix=1  d@e.f

        ``get_assoc_preference("email")`` returns::

            {0: {"address": "a@b.c", "confirmed": "false"}, 1: {"address": "d@e.f"}}

        Records named exactly ``name`` are stored flat as ``{ix: value}``.
        Returns None when nothing matches.
        """
        now = self._now()
        values = {}

        for pref in self._index().find_all_by_prefix(name):
            if index is not None and pref.ix != index:
                continue
            if self._skip_assoc(pref, ignore_expired, now):
                continue

            key = pref.name[len(name) + 1:] if SEPARATOR in pref.name else ""
            if key:
                # unindexed records yield ".<key>", which folding rejects
                ix = "" if pref.ix is None else pref.ix
                values = fold_path(
                    values, f"{ix}{SEPARATOR}{key}", pref.value, strict=self.strict_keys
                )
            else:
                values[pref.ix] = pref.value

        if not values:
            return None

        return values

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def clean_expired_preferences(self, as_of=None, name: str | None = None) -> int:
        """Remove preferences that expired before ``as_of`` (default now).

        Records without an expiry are never removed. The removals are only
        staged; flush or commit when the result is non-zero.

        Returns:
            Number of preferences removed.
        """
        as_of = resolve_as_of(as_of, self.clock)
        count = 0

        for pref in list(self.owner.preferences):
            if name and pref.name != name:
                continue
            if is_expired(pref, as_of):
                self._remove(pref)
                count += 1

        if count:
            logger.info(f"Cleaned {count} expired preferences (as of {as_of.isoformat()})")
        return count

    def delete_preference(self, name: str, index: int | None = None) -> int:
        """Delete the named preference; every index when ``index`` is None."""
        count = 0
        for pref in self._index().find_all_by_name(name):
            if index is None or pref.ix == index:
                self._remove(pref)
                count += 1

        logger.debug(f"Deleted {count} preferences named '{name}'")
        return count

    def delete_assoc_preference(self, name: str, index: int | None = None) -> int:
        """Delete every preference whose name starts with ``name``."""
        count = 0
        for pref in self._index().find_all_by_prefix(name):
            if index is None or pref.ix == index:
                self._remove(pref)
                count += 1

        logger.debug(f"Deleted {count} preferences under '{name}'")
        return count

    def expunge_preferences(self) -> int:
        """Delete all of the owner's preferences directly in the repository."""
        return self.repository.delete_all_for_owner(type(self.owner), self.owner)
