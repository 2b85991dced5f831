"""Tests for replay configuration."""

import pytest

from pokerlog.config import DEFAULT_CONFIG, ReplayConfig


class TestReplayConfig:
    """Tests for ReplayConfig."""

    def test_defaults(self) -> None:
        """Test default policies."""
        assert DEFAULT_CONFIG.min_span_big_blinds == 100
        assert not DEFAULT_CONFIG.strict_payloads
        assert not DEFAULT_CONFIG.split_runouts

    def test_invalid_min_span(self) -> None:
        """Test that min_span_big_blinds must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            ReplayConfig(min_span_big_blinds=0)

    def test_frozen(self) -> None:
        """Test that configuration cannot be modified."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.strict_payloads = True  # type: ignore[misc]
