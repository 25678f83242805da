"""Locale fallback policy.

Computes the ordered locales tried for a single lookup: the requested
locale (or the translator's current locale), then the configured fallback
locale. An application hook may replace the computed chain wholesale.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from transline.localization.types import LocaleCode

__all__ = ["DetermineLocales", "locale_chain"]

type DetermineLocales = Callable[[list[LocaleCode]], Iterable[LocaleCode]]
"""Hook receiving the computed chain and returning the chain to use."""


def locale_chain(
    requested: LocaleCode | None,
    default: LocaleCode,
    fallback: LocaleCode | None,
    *,
    allow_fallback: bool = True,
    determine: DetermineLocales | None = None,
) -> tuple[LocaleCode, ...]:
    """Compute the locales to try, in order.

    Args:
        requested: Locale requested by the caller (None or "" for default)
        default: The translator's current locale
        fallback: Configured fallback locale (None or "" for none)
        allow_fallback: When False the chain is exactly ``(requested,)``
        determine: Optional override hook; when given, its result is the
            chain as-is (it receives the computed chain as input)

    Returns:
        Tuple of locale codes. The computed chain has empty entries and
        duplicates removed, preserving first occurrence.

    Example:
        >>> locale_chain("fr", "en", "en")
        ('fr', 'en')
        >>> locale_chain(None, "de", "de")
        ('de',)
        >>> locale_chain("fr", "en", "en", allow_fallback=False)
        ('fr',)
    """
    if not allow_fallback:
        return (requested or default,)

    locales = [locale for locale in (requested or default, fallback) if locale]
    if determine is not None:
        return tuple(determine(locales))

    # dict.fromkeys() removes duplicates while maintaining insertion order
    return tuple(dict.fromkeys(locales))
