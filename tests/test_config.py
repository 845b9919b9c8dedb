"""Tests for EngineConfig and its environment variables."""

import pytest

from solver import EngineConfig

ENV_VARS = ("SDL_STRICT", "SDL_CHECK_ARGS", "SDL_STATIC_ONTOLOGY", "SDL_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    """Test reading the configuration from the environment."""

    def test_defaults(self):
        """Without variables the defaults apply."""
        assert EngineConfig.from_env() == EngineConfig()

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("SDL_STRICT", "true")
        monkeypatch.setenv("SDL_CHECK_ARGS", "0")
        monkeypatch.setenv("SDL_STATIC_ONTOLOGY", "Yes")
        monkeypatch.setenv("SDL_TIMEOUT", "2.5")
        assert EngineConfig.from_env() == EngineConfig(
            strict=True, check_arguments=False, static_ontology=True, timeout=2.5,
        )

    def test_empty_values_use_defaults(self, monkeypatch):
        """Empty strings behave like unset variables."""
        monkeypatch.setenv("SDL_CHECK_ARGS", "")
        monkeypatch.setenv("SDL_TIMEOUT", " ")
        config = EngineConfig.from_env()
        assert config.check_arguments is True
        assert config.timeout is None

    @pytest.mark.parametrize(("name", "value"), [
        ("SDL_STRICT", "maybe"),
        ("SDL_TIMEOUT", "soon"),
        ("SDL_TIMEOUT", "0"),
        ("SDL_TIMEOUT", "-1"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        """Unparseable or non-positive values raise ValueError naming the variable."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            EngineConfig.from_env()


class TestOverrides:
    """Test command-line overrides."""

    def test_none_is_skipped(self):
        base = EngineConfig(strict=True, timeout=1.0)
        assert base.with_overrides(strict=None, timeout=None) == base

    def test_values_replace(self):
        config = EngineConfig().with_overrides(check_arguments=False, timeout=3.0)
        assert config.check_arguments is False
        assert config.timeout == 3.0
        assert config.strict is False
