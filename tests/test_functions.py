"""Tests for the free functions and the package surface."""

from __future__ import annotations

import logging

import pytest

import transline
from transline.factory import set_translator
from transline.functions import trans, trans_choice, translate, translate_or_choice
from transline.localization import ArrayMessageSource
from transline.runtime.translator import Translator


@pytest.fixture
def registered() -> Translator:
    source = (
        ArrayMessageSource()
        .add_messages("en", "messages", {"apples": "one apple|:count apples", "hi": "Hi :name"})
        .add_messages("fr", "messages", {"hi": "Salut :name"})
    )
    translator = Translator(source, "en", fallback="en")
    set_translator(translator)
    return translator


class TestFreeFunctions:
    """Test forwarding to the registered translator."""

    def test_translate_without_key_returns_translator(self, registered: Translator) -> None:
        """translate() is the escape hatch to the translator."""
        assert translate() is registered

    def test_translate_key(self, registered: Translator) -> None:
        """translate forwards key, replacements and locale."""
        assert translate("messages.hi", {"name": "sam"}) == "Hi sam"
        assert translate("messages.hi", {"name": "sam"}, "fr") == "Salut sam"

    def test_translate_or_choice(self, registered: Translator) -> None:
        """translate_or_choice selects a plural form."""
        assert translate_or_choice("messages.apples", 1) == "one apple"
        assert translate_or_choice("messages.apples", 4) == "4 apples"

    def test_aliases(self) -> None:
        """trans and trans_choice are the same functions."""
        assert trans is translate
        assert trans_choice is translate_or_choice

    def test_follows_current_locale(self, registered: Translator) -> None:
        """The registered translator's context locale applies."""
        with registered.using_locale("fr"):
            assert trans("messages.hi", {"name": "sam"}) == "Salut sam"


class TestPackageSurface:
    """Test the top-level package."""

    def test_exports(self) -> None:
        """Main types are importable from the package root."""
        names = ("Translator", "TranslatorConfig", "create_translator", "trans", "trans_choice")
        for name in names:
            assert hasattr(transline, name)
            assert name in transline.__all__

    def test_version_string(self) -> None:
        """__version__ is always a string."""
        assert isinstance(transline.__version__, str)
        assert transline.__version__

    def test_library_installs_null_handler(self) -> None:
        """The package logger has a NullHandler and no output handlers."""
        handlers = logging.getLogger("transline").handlers
        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)
