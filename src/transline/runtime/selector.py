"""Plural segment selection for pipe-delimited lines.

Line syntax:

    "apple|apples"                                   positional
    "{0} No apples|{1} One apple|[2,*] :count apples" explicit
    "{1,3,5} odd few|[0,10] up to ten|many"          enumeration / range

An explicit segment starts with a condition in braces or brackets. A
condition with exactly two comma-separated parts is an inclusive range
whose bounds may be ``*`` (open). Any other condition lists the accepted
values. The first explicit segment whose condition matches wins.

Without a match the conditions are stripped and the segment is chosen
positionally: one segment is returned as is, two segments split on
``count == 1``, and more segments use the locale's plural family
(``plural_rules``), falling back to the last segment when the family's
index is beyond the segments present.

Python 3.13+.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from transline.constants import PLURAL_SEPARATOR
from transline.runtime.plural_rules import Count, check_count, plural_index

__all__ = ["MessageSelector"]

_CONDITION = re.compile(r"^[\{\[]([^\[\]\{\}]*)[\}\]](.*)", re.DOTALL)
_OPEN_BOUND = "*"


def _to_decimal(text: str) -> Decimal | None:
    try:
        number = Decimal(text.strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


class MessageSelector:
    """Selects the plural segment of a line for a count and locale.

    Stateless; the translator creates one lazily and it can be replaced
    through ``Translator.set_selector`` with a subclass overriding
    ``plural_index``.

    Example:
        >>> selector = MessageSelector()
        >>> selector.choose("one apple|:count apples", 1, "en")
        'one apple'
        >>> selector.choose("{0} none|[1,19] some|[20,*] many", 25, "en")
        'many'
        >>> selector.choose("jablko|jablka|jablek", 3, "cs")
        'jablka'
    """

    __slots__ = ()

    def choose(self, line: str, number: Count, locale: str) -> str:
        """Select the segment of ``line`` that applies to ``number``.

        Args:
            line: Pipe-delimited plural line
            number: Count being described
            locale: Locale whose plural family applies to 3+ segments

        Returns:
            Selected segment, stripped of surrounding whitespace

        Raises:
            ValueError: If ``number`` is NaN or infinite
        """
        check_count(number)
        segments = line.split(PLURAL_SEPARATOR)

        value = self.extract(segments, number)
        if value is not None:
            return value.strip()

        segments = self.strip_conditions(segments)

        match len(segments):
            case 1:
                return segments[0].strip()
            case 2:
                return segments[0 if abs(number) == 1 else 1].strip()

        index = self.plural_index(locale, number)
        if index >= len(segments):
            index = len(segments) - 1
        return segments[index].strip()

    def extract(self, segments: list[str], number: Count) -> str | None:
        """Return the text of the first explicit segment matching ``number``."""
        for segment in segments:
            value = self.extract_from_string(segment, number)
            if value is not None:
                return value
        return None

    def extract_from_string(self, segment: str, number: Count) -> str | None:
        """Return the segment text if its explicit condition matches ``number``.

        Unparseable bounds or values never match; segments without a
        condition return None.
        """
        match = _CONDITION.match(segment)
        if match is None:
            return None

        check_count(number)
        condition, value = match.group(1), match.group(2)
        target = Decimal(str(number))
        parts = condition.split(",")

        if len(parts) == 2:
            low, high = (part.strip() for part in parts)
            if low != _OPEN_BOUND:
                bound = _to_decimal(low)
                if bound is None or target < bound:
                    return None
            if high != _OPEN_BOUND:
                bound = _to_decimal(high)
                if bound is None or target > bound:
                    return None
            return value

        for part in parts:
            accepted = _to_decimal(part)
            if accepted is not None and accepted == target:
                return value
        return None

    @staticmethod
    def strip_conditions(segments: list[str]) -> list[str]:
        """Remove leading ``{...}`` / ``[...]`` conditions from every segment."""
        return [_CONDITION.sub(r"\2", segment) for segment in segments]

    def plural_index(self, locale: str, number: Count) -> int:
        """Return the locale's plural segment index for ``number``."""
        return plural_index(number, locale)
