"""``/graphiql``: mount an embedded GraphQL console."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from collected.commands.base import Command, CommandParams, register_family, route_subcommands
from collected.commands.params import decode_params, require_http_url
from collected.commands.results import CommandResult, HTMLCommandResult

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext

logger = logging.getLogger(__name__)

MOUNT_ELEMENT_ID = "collected-graphiql-command-result"


def script_json(value: Any) -> str:
    """JSON that cannot close the surrounding ``<script>`` element."""
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


@dataclass(frozen=True)
class GraphiqlMainCommand(Command):
    path = ("graphiql",)

    endpoint: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, params: str) -> GraphiqlMainCommand:
        cmd = decode_params(params, cls)
        require_http_url("endpoint", cmd.endpoint)
        return cmd

    def params(self) -> CommandParams | None:
        values = asdict(self)
        values["headers"] = sorted(self.headers)
        return CommandParams(values)

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        html = f"""
<div id="{MOUNT_ELEMENT_ID}" style="height: 1000px;"></div>
<script>
window.collectedTasks.push({{
  method: 'renderGraphiqlForURL',
  params: {{
    domElement: document.getElementById('{MOUNT_ELEMENT_ID}'),
    endpointURL: {script_json(self.endpoint)},
    headers: {script_json(self.headers)}
  }}
}})
</script>
"""
        return HTMLCommandResult.dangerous_from_safe(html, wants_full_width=True)


@register_family(
    "graphiql",
    requires_subcommand=False,
    description="Open a GraphiQL console for an endpoint",
    usage=['/graphiql\nendpoint = "https://api.github.com/graphql"'],
)
def parse_graphiql_command(subcommands: Sequence[str], params: str) -> Command:
    return route_subcommands("graphiql", {(): GraphiqlMainCommand.parse}, subcommands, params)
