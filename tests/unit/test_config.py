"""Test RuntimeSettings defaults, env overrides and TOML loading."""

import pydantic
import pytest

from scorm_runtime.core.config import RuntimeSettings, load_settings
from scorm_runtime.core.enums import CommitFormat, LogLevel


class TestRuntimeSettingsDefaults:
    def test_defaults(self):
        settings = RuntimeSettings()
        assert settings.autocommit.enabled is False
        assert settings.autocommit.interval_ms == 60_000
        assert settings.commit.url is None
        assert settings.commit.format is CommitFormat.STRUCTURED
        assert settings.observability.log_level is LogLevel.ERROR
        assert settings.scorm12.mastery_override is False

    def test_delay_in_seconds(self):
        settings = RuntimeSettings(autocommit={"enabled": True, "interval_ms": 1500})
        assert settings.autocommit_delay_seconds == 1.5

    def test_interval_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            RuntimeSettings(autocommit={"interval_ms": 0})

    def test_format_from_string(self):
        settings = RuntimeSettings(commit={"format": "params"})
        assert settings.commit.format is CommitFormat.PARAMS


class TestEnvOverrides:
    def test_nested_env_vars(self, monkeypatch):
        monkeypatch.setenv("SCORM_AUTOCOMMIT__ENABLED", "true")
        monkeypatch.setenv("SCORM_AUTOCOMMIT__INTERVAL_MS", "250")
        monkeypatch.setenv("SCORM_OBSERVABILITY__LOG_LEVEL", "debug")

        settings = RuntimeSettings()

        assert settings.autocommit.enabled is True
        assert settings.autocommit.interval_ms == 250
        assert settings.observability.log_level is LogLevel.DEBUG


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.commit.url is None

    def test_toml_file(self, tmp_path):
        path = tmp_path / "scorm.toml"
        path.write_text(
            '[commit]\n'
            'url = "https://lms.test/commit"\n'
            'format = "flattened"\n'
            '\n'
            '[scorm12]\n'
            'mastery_override = true\n'
        )
        settings = load_settings(path)
        assert settings.commit.url == "https://lms.test/commit"
        assert settings.commit.format is CommitFormat.FLATTENED
        assert settings.scorm12.mastery_override is True

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "scorm.toml"
        path.write_text('[commit]\nurl = "https://a.test"\n')
        settings = load_settings(path, overrides={"commit": {"url": "https://b.test"}})
        assert settings.commit.url == "https://b.test"
