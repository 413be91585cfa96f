"""``/web`` commands: page snippets and meta tags."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
import soupsieve
from bs4 import BeautifulSoup, Tag

from collected.commands.base import (
    Command,
    CommandExecutionError,
    CommandParams,
    ParamsError,
    register_family,
    route_subcommands,
)
from collected.commands.params import decode_params, require_http_url
from collected.commands.results import CommandResult, HTMLCommandResult
from collected.utils.formatting import description_list

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext

logger = logging.getLogger(__name__)


async def fetch_page(ctx: ExecutionContext, url: str) -> tuple[str, str]:
    """GET a page, returning its final URL and body text."""
    logger.info("Fetching %s", url)
    try:
        async with ctx.http_client() as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CommandExecutionError(f"{url} responded with status {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise CommandExecutionError(f"Cannot fetch {url}: {e}") from e
    return str(response.url), response.text


def absolutize_links(root: Tag, base_url: str) -> None:
    for anchor in root.find_all("a", href=True):
        try:
            anchor["href"] = urljoin(base_url, anchor["href"])
        except ValueError:
            # unparseable href, left as written
            continue


@dataclass(frozen=True)
class WebSnippetCommand(Command):
    """``/web snippet``: embed part of a page."""

    path = ("web", "snippet")

    url: str
    selector: str | None = None

    @classmethod
    def parse(cls, params: str) -> WebSnippetCommand:
        cmd = decode_params(params, cls)
        require_http_url("url", cmd.url)
        if cmd.selector is not None:
            try:
                soupsieve.compile(cmd.selector)
            except soupsieve.SelectorSyntaxError as e:
                raise ParamsError(f"Invalid selector {cmd.selector!r}: {e}") from e
        return cmd

    def params(self) -> CommandParams | None:
        return CommandParams({k: v for k, v in asdict(self).items() if v is not None})

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        page_url, body = await fetch_page(ctx, self.url)
        doc = BeautifulSoup(body, "html.parser")

        if self.selector is None:
            nodes: list[Tag] = [doc]
            absolutize_links(doc, page_url)
        else:
            nodes = doc.select(self.selector)
            parents: list[Tag] = []
            for node in nodes:
                parent = node.parent if node.parent is not None else node
                if not any(parent is p for p in parents):
                    parents.append(parent)
            for parent in parents:
                absolutize_links(parent, page_url)

        html = "<br>".join(str(node) for node in nodes)
        return HTMLCommandResult.from_unsafe(html)


@dataclass(frozen=True)
class WebMetaCommand(Command):
    """``/web meta``: list a page's title and meta tags."""

    path = ("web", "meta")

    url: str

    @classmethod
    def parse(cls, params: str) -> WebMetaCommand:
        cmd = decode_params(params, cls)
        require_http_url("url", cmd.url)
        return cmd

    def params(self) -> CommandParams | None:
        return CommandParams(asdict(self))

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        _, body = await fetch_page(ctx, self.url)
        doc = BeautifulSoup(body, "html.parser", multi_valued_attributes=None)

        parts = ["<ol>"]
        for title in doc.find_all("title"):
            text = title.get_text()
            if not text:
                break
            parts.append('<div class="mb-2">')
            parts.append(description_list([("title", text)]))
            parts.append("</div>")

        for meta in doc.select("head meta"):
            parts.append('<li class="mb-2">')
            parts.append(description_list((key, str(value)) for key, value in meta.attrs.items()))
            parts.append("</li>")
        parts.append("</ol>")

        # every third-party string above went through description_list escaping
        return HTMLCommandResult.dangerous_from_safe("".join(parts))


@register_family(
    "web",
    requires_subcommand=True,
    description="Embed a snippet or the meta tags of a web page",
    usage=['/web snippet\nurl = "https://example.com"\nselector = "main"', '/web meta\nurl = "https://example.com"'],
)
def parse_web_command(subcommands: Sequence[str], params: str) -> Command:
    return route_subcommands(
        "web",
        {
            ("snippet",): WebSnippetCommand.parse,
            ("meta",): WebMetaCommand.parse,
        },
        subcommands,
        params,
    )
