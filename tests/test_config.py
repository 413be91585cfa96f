"""Tests for configuration module."""

from __future__ import annotations

from collected.commands import ExecutionContext
from collected.config import (
    DEFAULT_USER_AGENT,
    AppConfig,
    AWSConfig,
    HTTPConfig,
    VariablesConfig,
    load_config,
    save_config,
)


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.http.timeout == 30
        assert config.http.deadline == 60
        assert config.http.proxy == ""
        assert config.http.user_agent == DEFAULT_USER_AGENT
        assert config.aws.endpoint_url == ""
        assert config.variables.github_oauth_token == ""
        assert config.logging.level == "WARNING"

    def test_save_and_load(self, tmp_path, monkeypatch):
        import collected.config as cfg_module

        config_file = tmp_path / "config.toml"
        config_dir = tmp_path

        monkeypatch.setattr(cfg_module, "CONFIG_FILE", config_file)
        monkeypatch.setattr(cfg_module, "CONFIG_DIR", config_dir)

        config = AppConfig(
            http=HTTPConfig(timeout=5, deadline=0, proxy="http://proxy.internal:3128"),
            aws=AWSConfig(endpoint_url="http://localhost:9000"),
            variables=VariablesConfig(github_oauth_token="gho_123"),
        )

        save_config(config)
        assert config_file.exists()

        loaded = load_config()
        assert loaded.http.timeout == 5
        assert loaded.http.deadline == 0
        assert loaded.http.proxy == "http://proxy.internal:3128"
        assert loaded.aws.endpoint_url == "http://localhost:9000"
        assert loaded.variables.github_oauth_token == "gho_123"

    def test_env_overrides(self, tmp_path, monkeypatch):
        import collected.config as cfg_module

        monkeypatch.setattr(cfg_module, "CONFIG_FILE", tmp_path / "missing.toml")
        monkeypatch.setenv("COLLECTED_HTTP_TIMEOUT", "7")
        monkeypatch.setenv("COLLECTED_GITHUB_TOKEN", "gho_env")
        monkeypatch.setenv("COLLECTED_LOG_LEVEL", "DEBUG")

        loaded = load_config()
        assert loaded.http.timeout == 7
        assert loaded.variables.github_oauth_token == "gho_env"
        assert loaded.logging.level == "DEBUG"


class TestExecutionContextFromConfig:
    def test_from_config(self, app_config):
        ctx = ExecutionContext.from_config(app_config)
        assert ctx.timeout == 5.0
        assert ctx.deadline == 10.0
        assert ctx.proxy is None
        assert ctx.user_agent == "collected-tests"
        assert ctx.aws_endpoint_url is None

    def test_zero_deadline_disables_it(self):
        ctx = ExecutionContext.from_config(AppConfig(http=HTTPConfig(deadline=0)))
        assert ctx.deadline is None

    def test_client_per_call(self, app_config):
        ctx = ExecutionContext.from_config(app_config)
        first, second = ctx.http_client(), ctx.http_client()
        assert first is not second
        assert first.headers["User-Agent"] == "collected-tests"
