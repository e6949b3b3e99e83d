"""Tests for input sanitization utilities."""
import pytest

from slotpoll.core.sanitization import (
    sanitize_text,
    sanitize_poll_name,
    sanitize_description,
    normalize_email,
    MAX_POLL_NAME_LENGTH,
    MAX_DESCRIPTION_LENGTH,
)


class TestSanitizeText:
    """Tests for sanitize_text function."""

    def test_sanitize_basic_text(self):
        """Test basic text sanitization."""
        assert sanitize_text("Hello World") == "Hello World"

    def test_sanitize_with_html_tags(self):
        """Test that HTML tags are stripped."""
        result = sanitize_text("<b>Team</b> sync")
        assert result == "Team sync"

    def test_sanitize_preserves_ampersand(self):
        assert sanitize_text("R & D") == "R & D"

    def test_sanitize_normalizes_whitespace(self):
        assert sanitize_text("  Hello    World  ") == "Hello World"

    def test_sanitize_with_max_length(self):
        """Test that max length is enforced."""
        with pytest.raises(ValueError, match="exceeds maximum length"):
            sanitize_text("A" * 100, max_length=50)

    def test_sanitize_leftover_brackets_rejected(self):
        with pytest.raises(ValueError, match="HTML-like"):
            sanitize_text("a < b")

    def test_sanitize_non_string_raises_error(self):
        with pytest.raises(ValueError, match="must be a string"):
            sanitize_text(42)


class TestSanitizePollName:
    """Tests for sanitize_poll_name function."""

    def test_valid_name(self):
        assert sanitize_poll_name("Team sync") == "Team sync"

    def test_empty_name(self):
        with pytest.raises(ValueError, match="Please enter a poll name"):
            sanitize_poll_name("   ")

    def test_name_at_max_length(self):
        assert len(sanitize_poll_name("A" * MAX_POLL_NAME_LENGTH)) == MAX_POLL_NAME_LENGTH

    def test_name_too_long(self):
        with pytest.raises(ValueError):
            sanitize_poll_name("A" * (MAX_POLL_NAME_LENGTH + 1))


class TestSanitizeDescription:
    """Tests for sanitize_description function."""

    def test_none_stays_none(self):
        assert sanitize_description(None) is None

    def test_blank_becomes_none(self):
        assert sanitize_description("   ") is None

    def test_too_long(self):
        with pytest.raises(ValueError):
            sanitize_description("A" * (MAX_DESCRIPTION_LENGTH + 1))


class TestNormalizeEmail:
    """Tests for normalize_email function."""

    def test_lowercases_and_trims(self):
        assert normalize_email("  Sam@Example.COM ") == "sam@example.com"

    @pytest.mark.parametrize("bad", ["", "   ", "sam", "sam@example", "s am@example.com", "@example.com"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            normalize_email(bad)

    def test_rejects_overlong(self):
        with pytest.raises(ValueError, match="maximum length"):
            normalize_email("a" * 250 + "@example.com")
