"""Tests for potentially translated strings and the pending-string builder."""

from __future__ import annotations

import pytest

from transline.localization import ArrayMessageSource
from transline.runtime.translator import Translator
from transline.translated import (
    PendingTranslatedString,
    PotentiallyTranslatedString,
    pending_translated_string,
)


@pytest.fixture
def translator() -> Translator:
    source = ArrayMessageSource().add_messages(
        "en",
        "validation",
        {
            "email": "The :attribute field must be a valid email address.",
            "items": "Pick one item|Pick :count items",
        },
    )
    return Translator(source, "en")


class TestPotentiallyTranslatedString:
    """Test the wrapper."""

    def test_untranslated_shows_original(self, translator: Translator) -> None:
        """Before translation str() is the original."""
        text = PotentiallyTranslatedString("validation.email", translator)
        assert str(text) == "validation.email"
        assert not text.is_translated

    def test_translate(self, translator: Translator) -> None:
        """translate stores the translation and returns self."""
        text = PotentiallyTranslatedString("validation.email", translator)
        assert text.translate({"attribute": "email"}) is text
        assert str(text) == "The email field must be a valid email address."
        assert text.original() == "validation.email"
        assert text.is_translated

    def test_translate_choice(self, translator: Translator) -> None:
        """translate_choice selects the plural form."""
        text = PotentiallyTranslatedString("validation.items", translator).translate_choice(3)
        assert str(text) == "Pick 3 items"

    def test_missing_translation_is_not_translated(self, translator: Translator) -> None:
        """A miss leaves the original visible."""
        text = PotentiallyTranslatedString("Some raw message", translator).translate()
        assert str(text) == "Some raw message"
        assert not text.is_translated

    def test_equality_with_strings(self, translator: Translator) -> None:
        """Compares by displayed text."""
        text = PotentiallyTranslatedString("plain", translator)
        assert text == "plain"
        assert text == PotentiallyTranslatedString("plain", translator)
        assert hash(text) == hash("plain")


class TestPendingTranslatedString:
    """Test the explicit builder."""

    def test_finish_writes_to_mapping(self, translator: Translator) -> None:
        """finish stores the text under the attribute."""
        messages: dict[str, str] = {}
        pending = pending_translated_string(messages, "email", "validation.email", translator)
        pending.translate({"attribute": "email"})

        assert messages == {}
        assert pending.finish() == "The email field must be a valid email address."
        assert messages == {"email": "The email field must be a valid email address."}
        assert pending.finished

    def test_finish_appends_to_list(self, translator: Translator) -> None:
        """Sequences receive the text appended."""
        messages: list[str] = []
        pending_translated_string(messages, "email", "Untranslated", translator).finish()
        assert messages == ["Untranslated"]

    def test_attribute_used_without_message(self, translator: Translator) -> None:
        """A None message translates the attribute itself."""
        messages: dict[str, str] = {}
        pending = pending_translated_string(messages, "validation.items", None, translator)
        pending.translate_choice(1).finish()
        assert messages == {"validation.items": "Pick one item"}

    def test_context_manager_finishes(self, translator: Translator) -> None:
        """Leaving the block normally finishes the builder."""
        messages: dict[str, str] = {}
        pending = pending_translated_string(messages, "email", "validation.email", translator)
        with pending:
            pending.translate({"attribute": "e-mail"})
        assert messages == {"email": "The e-mail field must be a valid email address."}

    def test_context_manager_skips_on_error(self, translator: Translator) -> None:
        """An exception inside the block writes nothing."""
        messages: dict[str, str] = {}
        with (
            pytest.raises(LookupError),
            pending_translated_string(messages, "email", "validation.email", translator),
        ):
            raise LookupError
        assert messages == {}

    def test_explicit_finish_inside_block(self, translator: Translator) -> None:
        """Finishing explicitly inside the block does not write twice."""
        messages: list[str] = []
        with pending_translated_string(messages, "a", "text", translator) as pending:
            pending.finish()
        assert messages == ["text"]

    def test_double_finish_rejected(self, translator: Translator) -> None:
        """The target is written exactly once."""
        pending = PendingTranslatedString("text", translator, lambda text: None)
        pending.finish()
        with pytest.raises(RuntimeError, match="already finished"):
            pending.finish()
