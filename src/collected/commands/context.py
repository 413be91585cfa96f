"""Execution context handed to every command run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import boto3
import httpx
from botocore.config import Config as BotocoreConfig

from collected.config import DEFAULT_USER_AGENT, AppConfig

logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    """Outbound I/O and deadline for a single command run.

    Clients are built fresh on every call and never shared between runs.
    """

    timeout: float = 30.0
    deadline: float | None = 60.0
    proxy: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    aws_endpoint_url: str | None = None
    transport: httpx.AsyncBaseTransport | None = None
    s3_client_factory: Callable[[str], Any] | None = None

    @classmethod
    def from_config(cls, config: AppConfig) -> ExecutionContext:
        return cls(
            timeout=float(config.http.timeout),
            deadline=float(config.http.deadline) if config.http.deadline > 0 else None,
            proxy=config.http.proxy or None,
            user_agent=config.http.user_agent,
            aws_endpoint_url=config.aws.endpoint_url or None,
        )

    def http_client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.proxy:
            kwargs["proxy"] = self.proxy
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            **kwargs,
        )

    def s3_client(self, region: str) -> Any:
        if self.s3_client_factory is not None:
            return self.s3_client_factory(region)

        config = BotocoreConfig(
            region_name=region,
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
            retries={"total_max_attempts": 1},
            proxies={"http": self.proxy, "https": self.proxy} if self.proxy else None,
            user_agent_extra=self.user_agent,
        )
        logger.debug("Creating S3 client for region %s", region)
        return boto3.client("s3", endpoint_url=self.aws_endpoint_url, config=config)
