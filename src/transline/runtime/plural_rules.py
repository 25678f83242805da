"""Plural rule families and the static locale-to-family table.

A plural family turns a count into the zero-based index of the segment to
use in a pipe-delimited line ("apple|apples" or "jablko|jablka|jablek").
The families encode the classic gettext-style formulas; which locales use
which family is static configuration data (``LOCALE_FAMILIES``), not
computed from CLDR at runtime.

Lookup order for a locale:
    1. the normalised full tag ("pt-BR" -> "pt_BR")
    2. its language subtag, resolved through Babel ("zh_Hant_TW" -> "zh")
    3. ONE_OTHER (the generic singular/plural split)

Python 3.13+. Depends on Babel (via locale_utils) for subtag resolution.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from decimal import Decimal
from types import MappingProxyType

from transline.enums import PluralFamily
from transline.locale_utils import language_subtag, normalize_locale

__all__ = [
    "LOCALE_FAMILIES",
    "Count",
    "check_count",
    "plural_family",
    "plural_index",
]

type Count = int | float | Decimal


def check_count(count: Count) -> None:
    """Reject counts that have no plural form (NaN, infinities).

    Raises:
        ValueError: If ``count`` is not finite
    """
    if isinstance(count, int):
        return
    finite = count.is_finite() if isinstance(count, Decimal) else math.isfinite(count)
    if not finite:
        msg = f"Plural count must be finite, got {count!r}"
        raise ValueError(msg)


def _group(family: PluralFamily, *locales: str) -> dict[str, PluralFamily]:
    return dict.fromkeys(locales, family)


LOCALE_FAMILIES: MappingProxyType[str, PluralFamily] = MappingProxyType({
    **_group(
        PluralFamily.NONE,
        "az", "bo", "dz", "id", "ja", "jv", "ka", "km", "kn", "ko", "ms", "th",
        "tr", "vi", "zh",
    ),
    **_group(
        PluralFamily.ONE_OTHER,
        "af", "bg", "bn", "ca", "da", "de", "el", "en", "eo", "es", "et", "eu",
        "fa", "fi", "fo", "fur", "fy", "gl", "gu", "ha", "he", "hu", "is", "it",
        "ku", "lb", "ml", "mn", "mr", "nah", "nb", "ne", "nl", "nn", "no", "om",
        "or", "pa", "pap", "ps", "pt", "so", "sq", "sv", "sw", "ta", "te", "tk",
        "ur", "zu",
    ),
    **_group(
        PluralFamily.ZERO_ONE_OTHER,
        "am", "bh", "fil", "fr", "gun", "hi", "hy", "ln", "mg", "nso", "pt_BR",
        "ti", "wa",
    ),
    **_group(PluralFamily.EAST_SLAVIC, "be", "bs", "hr", "ru", "sh", "sr", "uk"),
    **_group(PluralFamily.CZECH, "cs", "sk"),
    **_group(PluralFamily.IRISH, "ga"),
    **_group(PluralFamily.LITHUANIAN, "lt"),
    **_group(PluralFamily.SLOVENIAN, "sl"),
    **_group(PluralFamily.MACEDONIAN, "mk"),
    **_group(PluralFamily.MALTESE, "mt"),
    **_group(PluralFamily.LATVIAN, "lv"),
    **_group(PluralFamily.POLISH, "pl"),
    **_group(PluralFamily.WELSH, "cy"),
    **_group(PluralFamily.ROMANIAN, "ro"),
    **_group(PluralFamily.ARABIC, "ar"),
})
"""Locale or language subtag -> plural family. Read-only."""


def plural_family(locale: str) -> PluralFamily:
    """Return the plural family for ``locale``.

    Example:
        >>> plural_family("pt-BR")
        <PluralFamily.ZERO_ONE_OTHER: 'zero_one_other'>
        >>> plural_family("pt_PT")
        <PluralFamily.ONE_OTHER: 'one_other'>
        >>> plural_family("ru_RU")
        <PluralFamily.EAST_SLAVIC: 'east_slavic'>
    """
    family = LOCALE_FAMILIES.get(normalize_locale(locale))
    if family is None:
        family = LOCALE_FAMILIES.get(language_subtag(locale), PluralFamily.ONE_OTHER)
    return family


def _none(n: Count, i: int) -> int:
    return 0


def _one_other(n: Count, i: int) -> int:
    return 0 if n == 1 else 1


def _zero_one_other(n: Count, i: int) -> int:
    return 0 if n in (0, 1) else 1


def _east_slavic(n: Count, i: int) -> int:
    if i % 10 == 1 and i % 100 != 11:
        return 0
    if 2 <= i % 10 <= 4 and not 10 <= i % 100 < 20:
        return 1
    return 2


def _czech(n: Count, i: int) -> int:
    if n == 1:
        return 0
    return 1 if 2 <= n <= 4 else 2


def _irish(n: Count, i: int) -> int:
    if n == 1:
        return 0
    return 1 if n == 2 else 2


def _lithuanian(n: Count, i: int) -> int:
    if i % 10 == 1 and i % 100 != 11:
        return 0
    if i % 10 >= 2 and not 10 <= i % 100 < 20:
        return 1
    return 2


def _slovenian(n: Count, i: int) -> int:
    match i % 100:
        case 1:
            return 0
        case 2:
            return 1
        case 3 | 4:
            return 2
        case _:
            return 3


def _macedonian(n: Count, i: int) -> int:
    return 0 if i % 10 == 1 else 1


def _maltese(n: Count, i: int) -> int:
    if n == 1:
        return 0
    if n == 0 or 1 < i % 100 < 11:
        return 1
    if 10 < i % 100 < 20:
        return 2
    return 3


def _latvian(n: Count, i: int) -> int:
    if n == 0:
        return 0
    if i % 10 == 1 and i % 100 != 11:
        return 1
    return 2


def _polish(n: Count, i: int) -> int:
    if n == 1:
        return 0
    if 2 <= i % 10 <= 4 and not 12 <= i % 100 <= 14:
        return 1
    return 2


def _welsh(n: Count, i: int) -> int:
    if n == 1:
        return 0
    if n == 2:
        return 1
    return 2 if n in (8, 11) else 3


def _romanian(n: Count, i: int) -> int:
    if n == 1:
        return 0
    if n == 0 or 0 < i % 100 < 20:
        return 1
    return 2


def _arabic(n: Count, i: int) -> int:
    if n in (0, 1, 2):
        return int(n)
    if 3 <= i % 100 <= 10:
        return 3
    if 11 <= i % 100 <= 99:
        return 4
    return 5


_RULES: dict[PluralFamily, Callable[[Count, int], int]] = {
    PluralFamily.NONE: _none,
    PluralFamily.ONE_OTHER: _one_other,
    PluralFamily.ZERO_ONE_OTHER: _zero_one_other,
    PluralFamily.EAST_SLAVIC: _east_slavic,
    PluralFamily.CZECH: _czech,
    PluralFamily.IRISH: _irish,
    PluralFamily.LITHUANIAN: _lithuanian,
    PluralFamily.SLOVENIAN: _slovenian,
    PluralFamily.MACEDONIAN: _macedonian,
    PluralFamily.MALTESE: _maltese,
    PluralFamily.LATVIAN: _latvian,
    PluralFamily.POLISH: _polish,
    PluralFamily.WELSH: _welsh,
    PluralFamily.ROMANIAN: _romanian,
    PluralFamily.ARABIC: _arabic,
}


def plural_index(count: Count, locale: str) -> int:
    """Return the zero-based plural segment index of ``count`` for ``locale``.

    The sign is ignored. Rules that look at trailing digits use the integer
    part of the count.

    Args:
        count: Number being described
        locale: Locale code (BCP-47 or POSIX)

    Returns:
        Segment index; callers clamp it to the segments actually present

    Raises:
        ValueError: If ``count`` is NaN or infinite

    Example:
        >>> plural_index(1, "en")
        0
        >>> plural_index(5, "ru")
        2
        >>> plural_index(22, "pl")
        1
        >>> plural_index(0, "fr")
        0
    """
    check_count(count)
    n = abs(count)
    return _RULES[plural_family(locale)](n, int(n))
