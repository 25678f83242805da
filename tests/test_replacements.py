"""Tests for placeholder substitution."""

from __future__ import annotations

from dataclasses import dataclass

from hypothesis import given
from hypothesis import strategies as st

from transline.runtime.replacements import StringableRegistry, make_replacements, ucfirst


@dataclass
class Money:
    amount: int
    currency: str


class LocalMoney(Money):
    pass


class TestCaseForms:
    """Test the three token casings."""

    def test_capitalised_token(self) -> None:
        """':Name' upper-cases the first character of the value."""
        assert make_replacements(":Name is here", {"name": "sam"}) == "Sam is here"

    def test_upper_token(self) -> None:
        """':NAME' upper-cases the whole value."""
        assert make_replacements(":NAME is here", {"name": "sam"}) == "SAM is here"

    def test_as_is_token(self) -> None:
        """':name' inserts the value unchanged."""
        assert make_replacements(":name is here", {"name": "sAm"}) == "sAm is here"

    def test_ucfirst_keeps_rest(self) -> None:
        """Only the first character changes case."""
        assert ucfirst("mcDonald") == "McDonald"
        assert ucfirst("") == ""

    def test_none_value_renders_empty(self) -> None:
        """None becomes an empty string."""
        assert make_replacements("[:name]", {"name": None}) == "[]"

    def test_non_string_values(self) -> None:
        """Numbers are converted with str()."""
        assert make_replacements(":count apples", {"count": 5}) == "5 apples"


class TestSinglePass:
    """Test simultaneous substitution semantics."""

    def test_no_double_substitution(self) -> None:
        """A value containing another token is not re-scanned."""
        line = make_replacements(":a and :b", {"a": ":b", "b": "B"})
        assert line == ":b and B"

    def test_longest_token_wins(self) -> None:
        """':username' is not split into ':user' + 'name'."""
        line = make_replacements(":user / :username", {"user": "U", "username": "UN"})
        assert line == "U / UN"

    def test_empty_replace_is_identity(self) -> None:
        """No replacements leave the line untouched."""
        assert make_replacements(":name", {}) == ":name"
        assert make_replacements(":name", None) == ":name"

    @given(st.text(max_size=30))
    def test_identity_property(self, line: str) -> None:
        """PROPERTY: an empty mapping never changes the line."""
        assert make_replacements(line, {}) == line

    @given(
        value=st.text(alphabet=st.characters(exclude_characters=":"), max_size=10),
        prefix=st.text(alphabet=st.characters(exclude_characters=":"), max_size=10),
    )
    def test_lowercase_token_property(self, value: str, prefix: str) -> None:
        """PROPERTY: ':key' is replaced by the value verbatim."""
        assert make_replacements(f"{prefix}:key", {"key": value}) == f"{prefix}{value}"


class TestCallableTags:
    """Test tagged regions rewritten by callables."""

    def test_callable_rewrites_tag(self) -> None:
        """Every <key>...</key> region is replaced by callback(inner)."""
        line = make_replacements(
            "Read <link>the docs</link> or <link>the FAQ</link>",
            {"link": lambda text: f"[{text}]"},
        )
        assert line == "Read [the docs] or [the FAQ]"

    def test_callable_runs_before_literal_pass(self) -> None:
        """Callable output takes part in the literal pass of other keys."""
        line = make_replacements(
            "<b>:name</b>", {"b": lambda text: f"**{text}**", "name": "sam"}
        )
        assert line == "**sam**"

    def test_classes_are_not_callbacks(self) -> None:
        """A type value is rendered, not invoked."""
        assert make_replacements(":kind", {"kind": int}) == "<class 'int'>"


class TestStringables:
    """Test exact-type renderer registry."""

    def test_registered_type_rendered(self) -> None:
        """The handler output replaces the value."""
        registry = StringableRegistry()
        registry.register(Money, lambda m: f"{m.amount} {m.currency}")

        line = make_replacements("Total: :total", {"total": Money(5, "EUR")}, registry)
        assert line == "Total: 5 EUR"

    def test_subclass_not_matched(self) -> None:
        """Dispatch is by exact type; subclasses use str()."""
        registry = StringableRegistry()
        registry.register(Money, lambda m: "handled")

        value = LocalMoney(5, "EUR")
        assert make_replacements(":total", {"total": value}, registry) == str(value)

    def test_registry_membership(self) -> None:
        """Registered classes are reported."""
        registry = StringableRegistry()
        registry.register(Money, str)

        assert Money in registry
        assert LocalMoney not in registry
        assert len(registry) == 1
