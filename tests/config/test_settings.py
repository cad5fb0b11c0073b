"""Tests for ShapecheckSettings and the cached accessor."""

import pytest

from shapecheck.config.settings import ShapecheckSettings, get_settings, reset_settings


class TestShapecheckSettingsDefaults:
    def test_all_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """With no env vars, all fields use code defaults."""
        for name in ("ISSUE_SEPARATOR", "PATH_SEPARATOR", "ROOT_LABEL", "VERBOSE", "LOG_JSON"):
            monkeypatch.delenv(f"SHAPECHECK_{name}", raising=False)
        settings = ShapecheckSettings()
        assert settings.issue_separator == "; "
        assert settings.path_separator == "."
        assert settings.root_label == "(root)"
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self) -> None:
        settings = ShapecheckSettings()
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestEnvSource:
    def test_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPECHECK_PATH_SEPARATOR", "/")
        monkeypatch.setenv("SHAPECHECK_VERBOSE", "true")
        settings = ShapecheckSettings()
        assert settings.path_separator == "/"
        assert settings.verbose is True
        assert settings.root_label == "(root)"  # default preserved

    def test_unprefixed_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROOT_LABEL", "nope")
        assert ShapecheckSettings().root_label == "(root)"

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPECHECK_ROOT_LABEL", "env")
        assert ShapecheckSettings(root_label="kwarg").root_label == "kwarg"


class TestCache:
    def test_same_instance(self) -> None:
        assert get_settings() is get_settings()

    def test_reset_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("SHAPECHECK_ISSUE_SEPARATOR", " / ")
        assert get_settings().issue_separator == first.issue_separator
        reset_settings()
        assert get_settings().issue_separator == " / "
