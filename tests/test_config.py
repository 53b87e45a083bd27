"""Tests for environment-driven settings."""

import pytest

from driver_outline_mcp.config import OutlineSettings


def test_defaults():
    settings = OutlineSettings.from_env({})

    assert settings.concurrency == 8
    assert settings.max_passes == 15
    assert settings.pass_delay == 0.5
    assert settings.retry_delays == (0.1, 0.3, 0.6)
    assert settings.log_level == "WARNING"


def test_env_overrides():
    """Test reading every DRIVER_OUTLINE_* variable."""
    settings = OutlineSettings.from_env({
        "DRIVER_OUTLINE_CONCURRENCY": "4",
        "DRIVER_OUTLINE_MAX_PASSES": " 3 ",
        "DRIVER_OUTLINE_PASS_DELAY": "0",
        "DRIVER_OUTLINE_RETRY_DELAYS": "0.05, 0.2",
        "DRIVER_OUTLINE_LOG_LEVEL": "debug",
    })

    assert settings.concurrency == 4
    assert settings.max_passes == 3
    assert settings.pass_delay == 0.0
    assert settings.retry_delays == (0.05, 0.2)
    assert settings.log_level == "DEBUG"


def test_blank_values_keep_defaults():
    settings = OutlineSettings.from_env({"DRIVER_OUTLINE_CONCURRENCY": "  "})
    assert settings.concurrency == 8


@pytest.mark.parametrize("env", [
    {"DRIVER_OUTLINE_CONCURRENCY": "many"},
    {"DRIVER_OUTLINE_CONCURRENCY": "0"},
    {"DRIVER_OUTLINE_MAX_PASSES": "0"},
    {"DRIVER_OUTLINE_PASS_DELAY": "-1"},
    {"DRIVER_OUTLINE_RETRY_DELAYS": "0.1,soon"},
])
def test_invalid_values(env):
    """Test that malformed values name the variable."""
    with pytest.raises(ValueError, match="DRIVER_OUTLINE_"):
        OutlineSettings.from_env(env)
