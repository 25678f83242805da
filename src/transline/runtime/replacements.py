"""Placeholder substitution.

Lines carry colon-prefixed placeholders in three casings:

    ":name"  -> value as given
    ":Name"  -> value with its first character upper-cased
    ":NAME"  -> value fully upper-cased

A callable replacement instead rewrites tagged regions: for the key
``link`` every ``<link>text</link>`` region is replaced by ``value("text")``.

All literal tokens are substituted in one simultaneous pass. At each
position the longest matching token wins and replaced text is never
scanned again, so a value that itself contains ``:other`` is left as is.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

__all__ = [
    "StringableHandler",
    "StringableRegistry",
    "make_replacements",
    "ucfirst",
]

type StringableHandler = Callable[[Any], str]
"""Renders an object of a registered type to its display string."""


def ucfirst(value: str) -> str:
    """Upper-case the first character, leaving the rest untouched.

    Unlike ``str.capitalize`` the remainder keeps its case:

        >>> ucfirst("mcDonald")
        'McDonald'
    """
    return value[:1].upper() + value[1:]


class StringableRegistry:
    """Renderers for replacement values, keyed by exact runtime type.

    Dispatch uses ``type(value)`` only: a handler registered for a base
    class does not apply to its subclasses. Registration is explicit.

    Example:
        >>> registry = StringableRegistry()
        >>> registry.register(Money, lambda m: f"{m.amount:.2f} {m.currency}")
        >>> registry.render(Money(5, "EUR"))
        '5.00 EUR'
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        """Initialize with no handlers."""
        self._handlers: dict[type, StringableHandler] = {}

    def register(self, cls: type, handler: StringableHandler) -> None:
        """Register ``handler`` for values whose type is exactly ``cls``."""
        self._handlers[cls] = handler

    def __contains__(self, cls: object) -> bool:
        return cls in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def render(self, value: Any) -> Any:
        """Return the handler's rendering of ``value``, or ``value`` unchanged."""
        handler = self._handlers.get(type(value))
        return value if handler is None else handler(value)


def _replace_tags(line: str, key: str, callback: Callable[[str], Any]) -> str:
    pattern = re.compile(f"<{re.escape(key)}>(.*?)</{re.escape(key)}>")
    return pattern.sub(lambda match: str(callback(match.group(1))), line)


def _translate_tokens(line: str, tokens: Mapping[str, str]) -> str:
    # Alternation takes the first alternative that matches at a position,
    # so sorting by length gives strtr's longest-match semantics.
    alternatives = sorted(tokens, key=len, reverse=True)
    pattern = re.compile("|".join(map(re.escape, alternatives)))
    return pattern.sub(lambda match: tokens[match.group(0)], line)


def make_replacements(
    line: str,
    replace: Mapping[str, Any] | None,
    stringables: StringableRegistry | None = None,
) -> str:
    """Substitute placeholders in ``line``.

    Args:
        line: Line containing ``:placeholder`` tokens and/or ``<tag>`` regions
        replace: Placeholder values; callables rewrite tagged regions
        stringables: Renderers applied to values of registered types

    Returns:
        Line with all placeholders substituted

    Example:
        >>> make_replacements(":Name is here", {"name": "sam"})
        'Sam is here'
        >>> make_replacements("Read <link>the docs</link>", {"link": lambda t: f"[{t}]"})
        'Read [the docs]'
    """
    if not replace:
        return line

    tokens: dict[str, str] = {}

    for key, value in replace.items():
        key = str(key)

        if callable(value) and not isinstance(value, type):
            line = _replace_tags(line, key, value)
            continue

        if stringables is not None:
            value = stringables.render(value)

        text = "" if value is None else str(value)

        tokens[":" + ucfirst(key)] = ucfirst(text)
        tokens[":" + key.upper()] = text.upper()
        tokens[":" + key] = text

    if not tokens:
        return line

    return _translate_tokens(line, tokens)
