"""``/graphql``: run a query against a remote GraphQL endpoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING

import httpx

from collected.commands.base import (
    Command,
    CommandExecutionError,
    CommandParams,
    register_family,
    route_subcommands,
)
from collected.commands.params import decode_params, require_http_url
from collected.commands.results import CommandResult, HTMLCommandResult
from collected.utils.formatting import pre_block

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphQLRemoteQueryCommand(Command):
    path = ("graphql",)

    endpoint: str
    query: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, params: str) -> GraphQLRemoteQueryCommand:
        cmd = decode_params(params, cls)
        require_http_url("endpoint", cmd.endpoint)
        return cmd

    def params(self) -> CommandParams | None:
        # header values may carry tokens
        values = asdict(self)
        values["headers"] = sorted(self.headers)
        return CommandParams(values)

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        logger.info("Querying GraphQL endpoint %s", self.endpoint)
        try:
            async with ctx.http_client() as client:
                response = await client.post(
                    self.endpoint,
                    json={"query": self.query},
                    headers=self.headers,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CommandExecutionError(
                f"{self.endpoint} responded with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CommandExecutionError(f"Cannot query {self.endpoint}: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise CommandExecutionError(f"{self.endpoint} did not return JSON") from e

        pretty = json.dumps(result, indent=2, ensure_ascii=False)
        # TODO: decide whether remote GraphQL output should go through the sanitizer instead
        html = pre_block(pretty, css_class="whitespace-pre-wrap break-words")
        return HTMLCommandResult.dangerous_from_safe(html, plain_text=pretty)


@register_family(
    "graphql",
    requires_subcommand=False,
    description="Run a query against a GraphQL endpoint",
    usage=['/graphql\nendpoint = "https://api.github.com/graphql"\nquery = "{ viewer { login } }"\n'
           '[headers]\nAuthorization = "bearer {{ github_oauth_token }}"'],
)
def parse_graphql_command(subcommands: Sequence[str], params: str) -> Command:
    return route_subcommands("graphql", {(): GraphQLRemoteQueryCommand.parse}, subcommands, params)
