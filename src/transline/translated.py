"""Strings that may or may not have been translated yet.

``PotentiallyTranslatedString`` wraps an original string and, once
``translate`` or ``translate_choice`` ran, its translation. ``str()`` yields
the translation when present and the original otherwise.

``PendingTranslatedString`` is the builder handed out while composing
validation messages: the caller may translate it, then must call
``finish()`` (or leave a ``with`` block) to write the final text into the
target collection. Writing is explicit; nothing happens on garbage
collection.

    >>> messages: dict[str, str] = {}
    >>> pending = pending_translated_string(messages, "email", "validation.email", translator)
    >>> with pending:
    ...     pending.translate({"attribute": "email"})
    >>> messages
    {'email': 'The email field must be a valid email address.'}

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping, MutableSequence, Sized
from functools import partial
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from types import TracebackType

    from transline.runtime.plural_rules import Count
    from transline.runtime.translator import Translator

__all__ = [
    "PendingTranslatedString",
    "PotentiallyTranslatedString",
    "pending_translated_string",
]


class PotentiallyTranslatedString:
    """A string paired with its translation, if one was computed."""

    __slots__ = ("_string", "_translation", "_translator")

    def __init__(self, string: str, translator: Translator) -> None:
        """Initialize with the string that may be translated.

        Args:
            string: Original string (usually a translation key)
            translator: Translator performing the translation
        """
        self._string = string
        self._translator = translator
        self._translation: str | None = None

    def translate(
        self, replace: Mapping[str, Any] | None = None, locale: str | None = None
    ) -> Self:
        """Translate the string."""
        translation = self._translator.get(self._string, replace, locale)
        self._translation = translation if isinstance(translation, str) else str(translation)
        return self

    def translate_choice(
        self,
        number: Count | Sized,
        replace: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> Self:
        """Translate the string based on a count."""
        self._translation = self._translator.choice(self._string, number, replace, locale)
        return self

    def original(self) -> str:
        """Get the original string."""
        return self._string

    @property
    def is_translated(self) -> bool:
        """True once a translation was computed and differs from the original."""
        return self._translation is not None and self._translation != self._string

    def __str__(self) -> str:
        return self._translation if self._translation is not None else self._string

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PotentiallyTranslatedString):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"PotentiallyTranslatedString({self._string!r}, translation={self._translation!r})"


class PendingTranslatedString(PotentiallyTranslatedString):
    """Potentially translated string that is written to a target on ``finish``.

    Also a context manager: leaving the block normally calls ``finish``;
    leaving it through an exception writes nothing.
    """

    __slots__ = ("_finished", "_on_finish")

    def __init__(
        self, string: str, translator: Translator, on_finish: Callable[[str], None]
    ) -> None:
        """Initialize the builder.

        Args:
            string: Original string
            translator: Translator performing the translation
            on_finish: Receives the final text exactly once
        """
        super().__init__(string, translator)
        self._on_finish = on_finish
        self._finished = False

    @property
    def finished(self) -> bool:
        """True once the text was written to the target."""
        return self._finished

    def finish(self) -> str:
        """Write the (possibly translated) text to the target and return it.

        Raises:
            RuntimeError: If called more than once
        """
        if self._finished:
            msg = f"Pending string '{self._string}' was already finished"
            raise RuntimeError(msg)
        self._finished = True
        text = str(self)
        self._on_finish(text)
        return text

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None and not self._finished:
            self.finish()


def pending_translated_string(
    messages: MutableMapping[str, str] | MutableSequence[str],
    attribute: str,
    message: str | None,
    translator: Translator,
) -> PendingTranslatedString:
    """Create a pending string whose final text lands in ``messages``.

    Args:
        messages: Target; sequences are appended to, mappings receive the
            text under ``attribute``
        attribute: Attribute the message describes; also the string to
            translate when ``message`` is None
        message: Message (or translation key) to translate
        translator: Translator performing the translation

    Returns:
        Builder; call ``finish()`` or use it as a context manager
    """
    if isinstance(messages, MutableSequence):
        on_finish: Callable[[str], None] = messages.append
    else:
        on_finish = partial(messages.__setitem__, attribute)

    return PendingTranslatedString(
        message if message is not None else attribute, translator, on_finish
    )
