"""Tests for environment-driven settings."""

import pytest

from jsonld_recipe.config import DEFAULT_USER_AGENT, Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.fetch_timeout_seconds == 10.0
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.strict_jsonld is True
    assert settings.expand_graph is False
    assert settings.log_level == "INFO"


def test_reads_overrides():
    settings = Settings.from_env(
        {
            "RECIPE_FETCH_TIMEOUT_SECONDS": "2.5",
            "RECIPE_USER_AGENT": " my-bot/1.0 ",
            "RECIPE_JSONLD_STRICT": "false",
            "RECIPE_EXPAND_GRAPH": "YES",
            "RECIPE_LOG_LEVEL": "debug",
        }
    )
    assert settings.fetch_timeout_seconds == 2.5
    assert settings.user_agent == "my-bot/1.0"
    assert settings.strict_jsonld is False
    assert settings.expand_graph is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_rejects_bad_timeout(raw):
    with pytest.raises(ValueError, match="RECIPE_FETCH_TIMEOUT_SECONDS"):
        Settings.from_env({"RECIPE_FETCH_TIMEOUT_SECONDS": raw})


def test_rejects_bad_bool():
    with pytest.raises(ValueError, match="RECIPE_JSONLD_STRICT"):
        Settings.from_env({"RECIPE_JSONLD_STRICT": "maybe"})


def test_rejects_empty_user_agent():
    with pytest.raises(ValueError, match="RECIPE_USER_AGENT"):
        Settings.from_env({"RECIPE_USER_AGENT": "  "})


def test_rejects_unknown_log_level():
    with pytest.raises(ValueError, match="RECIPE_LOG_LEVEL"):
        Settings.from_env({"RECIPE_LOG_LEVEL": "LOUD"})


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.strict_jsonld = False
