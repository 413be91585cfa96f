"""``/aws`` commands: S3 bucket listings and object previews."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from collected.commands.base import (
    Command,
    CommandExecutionError,
    CommandParams,
    register_family,
    route_subcommands,
)
from collected.commands.params import decode_params
from collected.commands.results import CommandResult, HTMLCommandResult
from collected.utils.formatting import escape_text

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AWSS3Command(Command):
    """``/aws s3``: list the keys of a bucket."""

    path = ("aws", "s3")

    bucket: str
    region: str

    @classmethod
    def parse(cls, params: str) -> AWSS3Command:
        return decode_params(params, cls)

    def params(self) -> CommandParams | None:
        return CommandParams(asdict(self))

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        logger.info("Listing s3://%s (%s)", self.bucket, self.region)
        try:
            client = ctx.s3_client(self.region)
            output = await asyncio.to_thread(client.list_objects_v2, Bucket=self.bucket)
        except (BotoCoreError, ClientError) as e:
            raise CommandExecutionError(f"Cannot list objects in '{self.bucket}': {e}") from e

        parts = ["<pre>"]
        for obj in output.get("Contents", []):
            parts.append(escape_text(obj["Key"]))
            parts.append("<br>")
        parts.append("</pre>")

        return HTMLCommandResult.dangerous_from_safe("".join(parts))


@dataclass(frozen=True)
class AWSS3ObjectCommand(Command):
    """``/aws s3 object``: show the body of one object."""

    path = ("aws", "s3", "object")

    bucket: str
    region: str
    key: str

    @classmethod
    def parse(cls, params: str) -> AWSS3ObjectCommand:
        return decode_params(params, cls)

    def params(self) -> CommandParams | None:
        return CommandParams(asdict(self))

    def _read_body(self, client) -> bytes:
        output = client.get_object(Bucket=self.bucket, Key=self.key)
        body = output["Body"]
        try:
            return body.read()
        finally:
            body.close()

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        logger.info("Fetching s3://%s/%s (%s)", self.bucket, self.key, self.region)
        try:
            client = ctx.s3_client(self.region)
            data = await asyncio.to_thread(self._read_body, client)
        except (BotoCoreError, ClientError) as e:
            raise CommandExecutionError(f"Cannot get object '{self.key}': {e}") from e

        text = data.decode("utf-8", errors="replace")
        return HTMLCommandResult.dangerous_from_safe(f"<pre>{escape_text(text)}</pre>", plain_text=text)


@register_family(
    "aws",
    requires_subcommand=True,
    description="Preview S3 buckets and objects",
    usage=[
        '/aws s3\nbucket = "my-bucket"\nregion = "us-east-1"',
        '/aws s3 object\nbucket = "my-bucket"\nregion = "us-east-1"\nkey = "notes.txt"',
    ],
)
def parse_aws_command(subcommands: Sequence[str], params: str) -> Command:
    return route_subcommands(
        "aws",
        {
            ("s3",): AWSS3Command.parse,
            ("s3", "object"): AWSS3ObjectCommand.parse,
        },
        subcommands,
        params,
    )
