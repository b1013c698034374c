"""Fold dotted key paths into nested mappings.

Used to assemble associative preferences such as::

    email.address   ix=0  ->  {0: {"address": ...}}
    email.tokens.1  ix=0  ->  {0: {"tokens": {1: ...}}}
"""

import logging
import re

from .exceptions import MalformedKeyError

logger = logging.getLogger(__name__)

SEPARATOR = "."

_INT_SEGMENT = re.compile(r"^(0|-?[1-9][0-9]*)$")


def segment_key(segment: str) -> int | str:
    """Canonical integer segments become int keys, everything else stays a string."""
    if _INT_SEGMENT.match(segment):
        return int(segment)
    return segment


def _reject(key: str, reason: str, strict: bool) -> None:
    if strict:
        raise MalformedKeyError(key, reason)
    logger.warning(f"Ignoring key '{key}': {reason}")


def fold_path(root: dict, dotted_key: str, value, strict: bool = False) -> dict:
    """Assign ``value`` at ``dotted_key`` inside ``root``, creating sub-mappings.

    ``root`` is mutated and returned. Always use the return value: when the
    first segment is ``"0"`` and does not yet exist in a non-empty ``root``,
    the existing contents are pushed down under key ``0`` and a new mapping
    is returned. That promotion is long-standing behaviour kept for
    compatibility with stored data; do not build on it.

    Malformed keys (empty, or with an empty segment around the first
    separator) and paths that would descend through a scalar are ignored
    with a warning, or raise MalformedKeyError when ``strict`` is set.
    """
    if not dotted_key:
        _reject(dotted_key, "empty key", strict)
        return root

    if SEPARATOR not in dotted_key:
        root[segment_key(dotted_key)] = value
        return root

    head, rest = dotted_key.split(SEPARATOR, 1)
    if not head or not rest:
        _reject(dotted_key, "empty path segment", strict)
        return root

    key = segment_key(head)
    if key not in root:
        if head == "0" and root:
            root = {key: root}
        else:
            root[key] = {}
    elif not isinstance(root[key], dict):
        _reject(dotted_key, f"cannot create sub-key for '{head}' as key already exists", strict)
        return root

    root[key] = fold_path(root[key], rest, value, strict=strict)
    return root
