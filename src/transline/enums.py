"""Enumerations for transline type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PluralFamily(StrEnum):
    """Grammatical-number rule family used to pick a plural segment.

    Each family maps a count to a zero-based segment index. The mapping of
    locales to families lives in ``transline.runtime.plural_rules``.

    StrEnum provides automatic string conversion: str(PluralFamily.POLISH) == "polish"
    """

    NONE = "none"
    """No plural distinction: always the first segment (ja, zh, ko, tr, ...)"""

    ONE_OTHER = "one_other"
    """n == 1 selects the first segment, everything else the second (en, de, ...)"""

    ZERO_ONE_OTHER = "zero_one_other"
    """0 and 1 select the first segment (fr, pt_BR, hi, ...)"""

    EAST_SLAVIC = "east_slavic"
    """one / few / many by last digits (ru, uk, be, hr, sr, bs)"""

    CZECH = "czech"
    """one / 2-4 / other (cs, sk)"""

    IRISH = "irish"
    """one / two / other (ga)"""

    LITHUANIAN = "lithuanian"
    """one / few / other by last digits (lt)"""

    SLOVENIAN = "slovenian"
    """one / two / few / other by last two digits (sl)"""

    MACEDONIAN = "macedonian"
    """last digit 1 / other (mk)"""

    MALTESE = "maltese"
    """one / few / many / other (mt)"""

    LATVIAN = "latvian"
    """zero / one / other by last digits (lv)"""

    POLISH = "polish"
    """one / few / many (pl)"""

    WELSH = "welsh"
    """one / two / eight-or-eleven / other (cy)"""

    ROMANIAN = "romanian"
    """one / few / other (ro)"""

    ARABIC = "arabic"
    """zero / one / two / few / many / other (ar)"""


class LoadStatus(StrEnum):
    """Outcome of reading one layer of a message source.

    StrEnum provides automatic string conversion: str(LoadStatus.MERGED) == "merged"
    """

    MERGED = "merged"
    """File existed and was merged into the accumulated tree"""

    SKIPPED = "skipped"
    """File did not exist (optional layer) or held no mapping"""


__all__ = [
    "LoadStatus",
    "PluralFamily",
]
