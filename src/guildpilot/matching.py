"""
GuildPilot Matching Primitives

Every table in GuildPilot matches the same way: a candidate role or
department name matches a key when the lowercased, trimmed candidate
contains the lowercased key as a substring. No stemming, no tokenizing;
punctuation and partial words are significant ("Set Dec" matches
"Set Decorator", "DOP / Operator" does not match "DOP").

All substring policy lives here so it can be tested on its own.
``contains_key`` is the single primitive; the rule tables call
``first_match`` (rules and overlaps, which report the key that fired)
and ``longest_match`` (national standards), both built on it.
``matches`` is the boolean form for callers that only need yes/no.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")


def normalize(value: Optional[str]) -> str:
    """Lowercase and strip a role or department name. None becomes ''."""
    if value is None:
        return ""
    return value.strip().lower()


def contains_key(candidate: str, key: str) -> bool:
    """
    Check a single key against an already-normalized candidate.

    Empty keys never match; an empty key would otherwise match every
    candidate.
    """
    needle = normalize(key)
    if not needle or not candidate:
        return False
    return needle in candidate


def first_match(candidate: str, keys: Iterable[str]) -> Optional[str]:
    """Return the first key (as declared) contained in the candidate."""
    for key in keys:
        if contains_key(candidate, key):
            return key
    return None


def matches(candidate: Optional[str], keys: Iterable[str]) -> bool:
    """
    True if the candidate contains any of the keys.

    The candidate is normalized here, so raw user input is fine.

    Example:
        >>> matches("Key Grip", ["grip", "electric"])
        True
        >>> matches("", ["grip"])
        False
    """
    return first_match(normalize(candidate), keys) is not None


def longest_match(
    candidate: Optional[str],
    entries: Sequence[T],
    key_of=lambda entry: entry,
) -> Optional[T]:
    """
    Pick the most specific entry whose key the candidate contains.

    The longest matching key wins. Equal lengths go to the entry that
    appears first in ``entries``, so declaration order is the
    tie-break.

    Args:
        candidate: Raw role or department name
        entries: Ordered entries to search
        key_of: Extracts the key string from an entry

    Returns:
        The winning entry, or None if nothing matched
    """
    text = normalize(candidate)
    best: Optional[T] = None
    best_length = 0
    for entry in entries:
        key = key_of(entry)
        if contains_key(text, key):
            length = len(normalize(key))
            if length > best_length:
                best = entry
                best_length = length
    return best
