"""Free functions resolving through the process-wide translator.

    >>> from transline.functions import trans, trans_choice
    >>> trans("auth.failed")
    'These credentials do not match our records.'
    >>> trans_choice("messages.apples", 3)
    '3 apples'

Register the translator with ``transline.factory.set_translator`` during
application startup; otherwise one is built from the default configuration.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import TYPE_CHECKING, Any, overload

from transline.factory import get_translator

if TYPE_CHECKING:
    from transline.localization.types import MessageTree
    from transline.runtime.plural_rules import Count
    from transline.runtime.translator import Translator

__all__ = [
    "trans",
    "trans_choice",
    "translate",
    "translate_or_choice",
]


@overload
def translate(
    key: None = None, replace: Mapping[str, Any] | None = None, locale: str | None = None
) -> Translator: ...


@overload
def translate(
    key: str, replace: Mapping[str, Any] | None = None, locale: str | None = None
) -> str | MessageTree: ...


def translate(
    key: str | None = None,
    replace: Mapping[str, Any] | None = None,
    locale: str | None = None,
) -> Translator | str | MessageTree:
    """Translate ``key``, or return the translator itself when no key is given.

    Args:
        key: Translation key
        replace: Placeholder values
        locale: Locale to resolve in (default: current locale)
    """
    translator = get_translator()
    if key is None:
        return translator
    return translator.get(key, replace, locale)


def translate_or_choice(
    key: str,
    number: Count | Sized,
    replace: Mapping[str, Any] | None = None,
    locale: str | None = None,
) -> str:
    """Translate the plural line ``key`` according to ``number``."""
    return get_translator().choice(key, number, replace, locale)


trans = translate
trans_choice = translate_or_choice
