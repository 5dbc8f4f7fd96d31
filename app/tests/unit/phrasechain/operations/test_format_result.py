"""Unit tests for phrasechain.operations module."""

import pytest

from phrasechain.operations import FormatResult, ResolutionStatus


@pytest.mark.unit
class TestFormatResult:
    """Test suite for FormatResult."""

    def test_ok(self):
        """ok() creates an OK result with the value."""
        result = FormatResult.ok("42")
        assert result.is_ok
        assert result.status == ResolutionStatus.OK
        assert result.value == "42"
        assert result.message is None

    def test_fallback(self):
        """fallback() carries the degraded status and replacement text."""
        result = FormatResult.fallback(
            ResolutionStatus.FORMAT_ERROR, "raw", "ValueError: bad"
        )
        assert not result.is_ok
        assert result.value == "raw"
        assert result.message == "ValueError: bad"

    def test_is_immutable(self):
        """Results cannot be modified."""
        result = FormatResult.ok("x")
        with pytest.raises(AttributeError):
            result.value = "y"  # type: ignore[misc]


@pytest.mark.unit
class TestResolutionStatus:
    """Test suite for ResolutionStatus."""

    def test_values_are_snake_case(self):
        """Status values are the lower-case member names."""
        for status in ResolutionStatus:
            assert status.value == status.name.lower()
