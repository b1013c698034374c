"""Exceptions raised by the preference engine."""


class PreferenceError(Exception):
    """Base class for preference store errors."""


class IndexLimitError(PreferenceError):
    """Raised when adding an indexed preference would exceed the requested maximum."""

    def __init__(self, name: str, limit: int):
        self.name = name
        self.limit = limit
        super().__init__(
            f"Requested maximum number of indexed preferences reached for '{name}' ({limit})"
        )


class MalformedKeyError(PreferenceError, ValueError):
    """Raised by strict path folding when a dotted key cannot be applied."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid key '{key}': {reason}")


class PreferenceStoreNotBoundError(PreferenceError):
    """Raised when an owner delegates to a preference store it was never bound to."""
