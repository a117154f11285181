"""Tests for runtime configuration loading and environment overrides."""

import pytest

from fastform.appspec.capabilities import API_ENDPOINT_NAMES
from fastform.config import runtime_config
from fastform.config.runtime_config import (
    DEFAULT_API_ENDPOINTS,
    EnvironmentSettings,
    get_api_endpoints,
    get_available_environments,
    get_environment_settings,
    get_log_level,
    reset_config,
)


class TestLogLevel:
    """Tests for get_log_level."""

    def test_default_from_yaml(self):
        assert get_log_level() == "WARNING"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FASTFORM_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("FASTFORM_LOG_LEVEL", "chatty")
        assert get_log_level() == "WARNING"


class TestEnvironmentSettings:
    """Tests for get_environment_settings."""

    def test_staging_defaults(self):
        settings = get_environment_settings("staging")
        assert settings == EnvironmentSettings(
            name="staging",
            domain_template="{app_slug}-{org_slug}-staging.getfastform.com",
            api_url="https://api-staging.getfastform.com",
        )

    def test_domain_for(self):
        settings = get_environment_settings("production")
        assert settings.domain_for("psych-intake", "test-org") == "psych-intake-test-org.getfastform.com"

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("FASTFORM_STAGING_API_URL", "http://localhost:8080")
        monkeypatch.setenv("FASTFORM_STAGING_DOMAIN_TEMPLATE", "{app_slug}.localhost")
        settings = get_environment_settings("staging")
        assert settings.api_url == "http://localhost:8080"
        assert settings.domain_for("intake", "org") == "intake.localhost"

    def test_override_is_per_environment(self, monkeypatch):
        monkeypatch.setenv("FASTFORM_STAGING_API_URL", "http://localhost:8080")
        assert get_environment_settings("production").api_url == "https://api.getfastform.com"

    def test_unknown_environment(self):
        with pytest.raises(ValueError, match="preview"):
            get_environment_settings("preview")

    def test_available_environments(self):
        assert get_available_environments() == ["staging", "production"]


class TestConfigLoading:
    """Tests for YAML loading, defaults and caching."""

    def test_endpoint_catalogue(self):
        endpoints = get_api_endpoints()
        assert len(endpoints) == 10
        assert endpoints["trackEvent"] == "POST /api/apps/:appId/events"

    def test_missing_yaml_uses_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", tmp_path / "absent.yaml")
        reset_config()
        assert get_log_level() == "WARNING"
        assert get_environment_settings("production").api_url == "https://api.getfastform.com"

    def test_custom_yaml(self, monkeypatch, tmp_path):
        path = tmp_path / "runtime.yaml"
        path.write_text(
            "logging:\n  level: INFO\n"
            "environments:\n  production:\n    api_url: https://api.example.org\n",
            encoding="utf-8",
        )
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", path)
        reset_config()
        assert get_log_level() == "INFO"
        production = get_environment_settings("production")
        assert production.api_url == "https://api.example.org"
        # Keys the file leaves out fall back to built-in defaults.
        assert production.domain_template == "{app_slug}-{org_slug}.getfastform.com"
        assert len(get_api_endpoints()) == 10

    def test_yaml_endpoint_overrides_single_entries(self, monkeypatch, tmp_path):
        """Endpoints named in runtime.yaml replace built-ins; the rest stay."""
        path = tmp_path / "runtime.yaml"
        path.write_text(
            "api:\n  endpoints:\n    trackEvent: POST /api/apps/:appId/analytics\n",
            encoding="utf-8",
        )
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", path)
        reset_config()
        endpoints = get_api_endpoints()
        assert endpoints["trackEvent"] == "POST /api/apps/:appId/analytics"
        assert endpoints["createSubmission"] == DEFAULT_API_ENDPOINTS["createSubmission"]
        assert set(endpoints) == set(API_ENDPOINT_NAMES)

    def test_config_is_cached_until_reset(self, monkeypatch, tmp_path):
        path = tmp_path / "runtime.yaml"
        path.write_text("logging:\n  level: ERROR\n", encoding="utf-8")
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", path)
        reset_config()
        assert get_log_level() == "ERROR"

        path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")
        assert get_log_level() == "ERROR"
        reset_config()
        assert get_log_level() == "DEBUG"
