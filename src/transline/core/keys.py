"""Translation key parsing.

A translation key has the shape ``[namespace::]group.item`` where the item
may itself contain dots addressing nested structure:

    "validation.required"           -> ("*", "validation", "required")
    "courier::mail.subject.welcome" -> ("courier", "mail", "subject.welcome")
    "auth"                          -> ("*", "auth", None)

Parsing is pure and total: it never raises, and malformed keys simply
produce triples that miss downstream.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import NamedTuple

from transline.constants import DEFAULT_NAMESPACE, ITEM_SEPARATOR, NAMESPACE_SEPARATOR

__all__ = ["KeyParser", "ParsedKey", "parse_key"]


class ParsedKey(NamedTuple):
    """Parsed translation key. Unpacks as ``namespace, group, item``."""

    namespace: str
    group: str
    item: str | None


def parse_key(key: str) -> ParsedKey:
    """Split a translation key into namespace, group and item.

    Args:
        key: Translation key, e.g. ``"package::group.item.nested"``

    Returns:
        ParsedKey; namespace defaults to ``"*"``, item is None when the key
        has no dot after the namespace.

    Example:
        >>> parse_key("ns::group.a.b")
        ParsedKey(namespace='ns', group='group', item='a.b')
        >>> parse_key("group")
        ParsedKey(namespace='*', group='group', item=None)
    """
    namespace, sep, rest = key.partition(NAMESPACE_SEPARATOR)
    if not sep:
        namespace, rest = DEFAULT_NAMESPACE, key

    group, sep, item = rest.partition(ITEM_SEPARATOR)
    return ParsedKey(namespace, group, item if sep else None)


class KeyParser:
    """Memoising wrapper around parse_key.

    Keys are parsed on every lookup, usually from a small fixed vocabulary,
    so results are remembered per instance. ``set_parsed_key`` lets callers
    pin a key to an explicit triple (e.g. a legacy alias).

    Thread Safety:
        Dict assignment of an immutable value is atomic; concurrent misses
        may parse the same key twice, which is harmless.
    """

    __slots__ = ("_parsed",)

    def __init__(self) -> None:
        """Initialize with an empty memo."""
        self._parsed: dict[str, ParsedKey] = {}

    def parse_key(self, key: str) -> ParsedKey:
        """Parse key, returning the memoised triple when available."""
        parsed = self._parsed.get(key)
        if parsed is None:
            parsed = parse_key(key)
            self._parsed[key] = parsed
        return parsed

    def set_parsed_key(self, key: str, parsed: tuple[str, str, str | None]) -> None:
        """Pin ``key`` to an explicit (namespace, group, item) triple."""
        self._parsed[key] = ParsedKey(*parsed)
