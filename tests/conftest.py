"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from collected.commands import ExecutionContext
from collected.config import AppConfig, AWSConfig, HTTPConfig, LoggingConfig, VariablesConfig


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration."""
    return AppConfig(
        http=HTTPConfig(timeout=5, deadline=10, proxy="", user_agent="collected-tests"),
        aws=AWSConfig(endpoint_url=""),
        variables=VariablesConfig(github_oauth_token="gho_test"),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "test.log")),
    )


@pytest.fixture
def make_context() -> Callable[..., ExecutionContext]:
    """Build an execution context whose HTTP traffic goes to ``handler``."""

    def _make(handler=None, **kwargs) -> ExecutionContext:
        transport = httpx.MockTransport(handler) if handler is not None else None
        return ExecutionContext(timeout=5, deadline=5, transport=transport, **kwargs)

    return _make
