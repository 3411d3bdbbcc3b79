"""Tests for catch pattern matching."""

from __future__ import annotations

import pytest

from activity_workflows.core.matcher import describe_error, error_matches, matches


@pytest.mark.unit
class TestMatches:
    """Tests for the wildcard pattern matcher."""

    @pytest.mark.parametrize(
        ("pattern", "text", "expected"),
        [
            ("Timeout", "Timeout", True),
            ("Timeout", "Timeout reached", False),
            ("Timeout", "timeout", False),
            ("Timeout*", "Timeout reached", True),
            ("Timeout*", "Upstream Timeout", False),
            ("*Timeout", "Upstream Timeout", True),
            ("*Timeout", "Timeout reached", False),
            ("*Timeout*", "Upstream Timeout reached", True),
            ("*Timeout*", "Upstream timeout reached", False),
        ],
    )
    def test_pattern_shapes(self, pattern: str, text: str, expected: bool) -> None:
        """Test exact, prefix, suffix and substring patterns."""
        assert matches(pattern, text) is expected

    @pytest.mark.parametrize("text", ["", "anything", "*", "Timeout: connection lost"])
    def test_lone_wildcard_matches_everything(self, text: str) -> None:
        """Test that '*' matches any text, including the empty string."""
        assert matches("*", text)

    def test_double_wildcard_matches_everything(self) -> None:
        """Test that '**' behaves like a lone wildcard."""
        assert matches("**", "")
        assert matches("**", "NotFound")

    def test_inner_wildcard_is_literal(self) -> None:
        """Test that a wildcard in the middle of a pattern is not special."""
        assert matches("Not*Found", "Not*Found")
        assert not matches("Not*Found", "NotReallyFound")

    def test_only_one_wildcard_trimmed_per_side(self) -> None:
        """Test that extra wildcards at the edges are matched literally."""
        assert matches("**Timeout", "*Timeout")
        assert not matches("**Timeout", "Timeout")

    def test_pattern_equal_to_text_always_matches(self) -> None:
        """Test that every wildcard-free pattern matches itself."""
        for text in ["NotFound", "Timeout", "a b c", ""]:
            assert matches(text, text)


@pytest.mark.unit
class TestDescribeError:
    """Tests for failure descriptions."""

    def test_exception_with_message(self) -> None:
        """Test that exceptions are described by message, then qualified form."""
        assert describe_error(ValueError("bad input")) == ["bad input", "ValueError: bad input"]

    def test_exception_without_message(self) -> None:
        """Test that an empty message falls back to the class name."""
        assert describe_error(KeyError()) == ["", "KeyError"]

    def test_plain_value(self) -> None:
        """Test that non-exception failures are described by str()."""
        assert describe_error("NotFound") == ["NotFound"]
        assert describe_error(404) == ["404"]


@pytest.mark.unit
class TestErrorMatches:
    """Tests for matching catch patterns against failures."""

    def test_matches_exception_message(self) -> None:
        """Test that a pattern matches the raised exception's message."""
        assert error_matches("Timeout", RuntimeError("Timeout"))

    def test_matches_exception_class_name(self) -> None:
        """Test that a pattern can target the exception class."""
        assert error_matches("ValueError*", ValueError("bad input"))
        assert error_matches("TimeoutError", TimeoutError())

    def test_matches_failure_value(self) -> None:
        """Test that a pattern matches a string failure value."""
        assert error_matches("Not*", "NotFound")
        assert not error_matches("Timeout", "NotFound")

    def test_wildcard_matches_any_failure(self) -> None:
        """Test that '*' catches every kind of failure."""
        assert error_matches("*", RuntimeError())
        assert error_matches("*", None)
