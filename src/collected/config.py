"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from collected import __version__

CONFIG_DIR = Path.home() / ".collected"
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_FILE = CONFIG_DIR / "collected.log"

DEFAULT_USER_AGENT = f"collected/{__version__}"


@dataclass
class HTTPConfig:
    timeout: int = 30
    deadline: int = 60
    proxy: str = ""
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class AWSConfig:
    endpoint_url: str = ""


@dataclass
class VariablesConfig:
    github_oauth_token: str = ""


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = "~/.collected/collected.log"


@dataclass
class AppConfig:
    http: HTTPConfig = field(default_factory=HTTPConfig)
    aws: AWSConfig = field(default_factory=AWSConfig)
    variables: VariablesConfig = field(default_factory=VariablesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def ensure_config_dir() -> None:
    """Create config directory with secure permissions."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)


def load_config() -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()

    if CONFIG_FILE.exists():
        with open(CONFIG_FILE, "rb") as f:
            data = tomllib.load(f)

        http = data.get("http", {})
        config.http.timeout = http.get("timeout", config.http.timeout)
        config.http.deadline = http.get("deadline", config.http.deadline)
        config.http.proxy = http.get("proxy", config.http.proxy)
        config.http.user_agent = http.get("user_agent", config.http.user_agent)

        aws = data.get("aws", {})
        config.aws.endpoint_url = aws.get("endpoint_url", config.aws.endpoint_url)

        variables = data.get("variables", {})
        config.variables.github_oauth_token = variables.get(
            "github_oauth_token", config.variables.github_oauth_token
        )

        logging_cfg = data.get("logging", {})
        config.logging.level = logging_cfg.get("level", config.logging.level)
        config.logging.file = logging_cfg.get("file", config.logging.file)

    # Environment variable overrides
    if env_timeout := os.environ.get("COLLECTED_HTTP_TIMEOUT"):
        config.http.timeout = int(env_timeout)
    if env_deadline := os.environ.get("COLLECTED_DEADLINE"):
        config.http.deadline = int(env_deadline)
    if env_proxy := os.environ.get("COLLECTED_HTTP_PROXY"):
        config.http.proxy = env_proxy
    if env_user_agent := os.environ.get("COLLECTED_USER_AGENT"):
        config.http.user_agent = env_user_agent
    if env_endpoint := os.environ.get("COLLECTED_AWS_ENDPOINT_URL"):
        config.aws.endpoint_url = env_endpoint
    if env_token := os.environ.get("COLLECTED_GITHUB_TOKEN"):
        config.variables.github_oauth_token = env_token
    if env_log_level := os.environ.get("COLLECTED_LOG_LEVEL"):
        config.logging.level = env_log_level

    return config


def save_config(config: AppConfig) -> None:
    """Save configuration to TOML file."""
    ensure_config_dir()

    data = {
        "http": {
            "timeout": config.http.timeout,
            "deadline": config.http.deadline,
            "proxy": config.http.proxy,
            "user_agent": config.http.user_agent,
        },
        "aws": {
            "endpoint_url": config.aws.endpoint_url,
        },
        "variables": {
            "github_oauth_token": config.variables.github_oauth_token,
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
        },
    }

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(data, f)

    os.chmod(CONFIG_FILE, 0o600)


# Global singleton
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or load the global config singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
