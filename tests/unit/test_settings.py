"""
Unit tests for settings and YAML configuration loading.
"""

from pathlib import Path

import pytest

from elb_log_analyzer.config import (
    Settings,
    clear_settings_cache,
    get_settings,
    load_config,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("ELB_LOG_ENCODING", "ELB_LOG_STRICT", "ELB_LOG_TOP_N", "ELB_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_defaults(self):
        settings = Settings()

        assert settings.encoding == "utf-8"
        assert settings.strict_validation is False
        assert settings.top_client_ips == 5
        assert settings.log_level == "INFO"
        assert settings.validate() == []

    def test_validate_reports_errors(self):
        settings = Settings(encoding="", top_client_ips=0, log_level="LOUD")
        errors = settings.validate()

        assert len(errors) == 3
        assert any("top_client_ips" in e for e in errors)

    def test_from_dict(self):
        settings = Settings.from_dict(
            {
                "parsing": {"encoding": "latin-1", "strict_validation": True},
                "analysis": {"top_client_ips": 10},
                "logging": {"level": "debug"},
            }
        )

        assert settings.encoding == "latin-1"
        assert settings.strict_validation is True
        assert settings.top_client_ips == 10
        assert settings.log_level == "DEBUG"

    def test_from_dict_empty_sections(self):
        """Sections left empty in YAML load as None and use defaults."""
        settings = Settings.from_dict({"parsing": None})
        assert settings == Settings()

    def test_to_dict(self):
        assert Settings().to_dict() == {
            "encoding": "utf-8",
            "strict_validation": False,
            "top_client_ips": 5,
            "log_level": "INFO",
        }

    def test_from_env(self, clean_env):
        clean_env.setenv("ELB_LOG_ENCODING", "utf-16")
        clean_env.setenv("ELB_LOG_STRICT", "TRUE")
        clean_env.setenv("ELB_LOG_TOP_N", "3")
        clean_env.setenv("ELB_LOG_LEVEL", "warning")

        settings = Settings.from_env()

        assert settings.encoding == "utf-16"
        assert settings.strict_validation is True
        assert settings.top_client_ips == 3
        assert settings.log_level == "WARNING"

    def test_from_env_malformed_number(self, clean_env):
        clean_env.setenv("ELB_LOG_TOP_N", "many")
        assert Settings.from_env().top_client_ips == 5


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_non_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("analysis:\n  top_client_ips: 7\n")
        assert load_config(path) == {"analysis": {"top_client_ips": 7}}


class TestGetSettings:
    """Tests for get_settings."""

    def test_loads_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("parsing:\n  strict_validation: true\n")

        settings = get_settings(str(path))

        assert settings.strict_validation is True

    def test_cached(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("analysis:\n  top_client_ips: 2\n")

        assert get_settings(str(path)) is get_settings(str(path))

    def test_falls_back_to_env(self, tmp_path: Path, clean_env):
        clean_env.setenv("ELB_LOG_TOP_N", "9")
        settings = get_settings(str(tmp_path / "missing.yaml"))
        assert settings.top_client_ips == 9

    def test_invalid_yaml_falls_back_to_env(self, tmp_path: Path, clean_env, caplog):
        path = tmp_path / "bad.yaml"
        path.write_text("- not\n- a mapping\n")

        settings = get_settings(str(path))

        assert settings == Settings()
        assert "Failed to load config" in caplog.text
