"""Command runner service: parse, run and sanitize one command."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from collected.commands import (
    CommandError,
    ExecutionContext,
    ParamVariables,
    parse_command_input,
    safe_html_for_command_result,
    variables_preprocessor,
)
from collected.config import AppConfig
from collected.services.sanitizer import UGCPolicy, ugc_policy
from collected.utils.formatting import render_error_html

logger = logging.getLogger(__name__)


@dataclass
class RenderedCommand:
    """Result of running a command, ready to embed."""

    html: str = ""
    plain_text: str = ""
    wants_full_width: bool = False
    error: str = ""
    path: tuple[str, ...] = ()
    execution_time_ms: int = 0

    @property
    def ok(self) -> bool:
        return not self.error

    def embed_html(self) -> str:
        """HTML to place in the page: the result, or an inline error block."""
        if self.error:
            return render_error_html(self.error)
        return self.html


class CommandRunner:
    """Execute slash commands with a deadline and sanitized output."""

    def __init__(self, config: AppConfig, policy: UGCPolicy = ugc_policy) -> None:
        self.config = config
        self.policy = policy

    def variables(self) -> ParamVariables:
        return ParamVariables(github_oauth_token=self.config.variables.github_oauth_token)

    async def execute(
        self,
        text: str,
        variables: ParamVariables | None = None,
        context: ExecutionContext | None = None,
    ) -> RenderedCommand:
        """Run a command from text. Errors come back in ``RenderedCommand.error``."""
        ctx = context or ExecutionContext.from_config(self.config)
        preprocess = variables_preprocessor(variables or self.variables())

        start = time.monotonic()
        path: tuple[str, ...] = ()
        try:
            command = parse_command_input(text, preprocess)
            path = command.path
            result = await asyncio.wait_for(command.run(ctx), timeout=ctx.deadline)
            html = safe_html_for_command_result(result, self.policy)
        except asyncio.TimeoutError:
            logger.warning("Command %s timed out after %ss", "/".join(path), ctx.deadline)
            return RenderedCommand(
                error=f"Command timed out after {ctx.deadline:g}s",
                path=path,
                execution_time_ms=int((time.monotonic() - start) * 1000),
            )
        except CommandError as e:
            logger.warning("Command %s failed: %s", "/".join(path) or "(unparsed)", e)
            return RenderedCommand(
                error=str(e),
                path=path,
                execution_time_ms=int((time.monotonic() - start) * 1000),
            )
        except Exception as e:
            logger.exception("Command execution error")
            return RenderedCommand(
                error=str(e),
                path=path,
                execution_time_ms=int((time.monotonic() - start) * 1000),
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("Command %s finished in %dms", "/".join(path), elapsed_ms)

        return RenderedCommand(
            html=html,
            plain_text=result.plain_text,
            wants_full_width=result.wants_full_width,
            path=path,
            execution_time_ms=elapsed_ms,
        )
