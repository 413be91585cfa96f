"""Command results and the sanitization gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from collected.services.sanitizer import UGCPolicy, ugc_policy


class CommandResult(Protocol):
    """The output of running a command."""

    @property
    def plain_text(self) -> str: ...

    @property
    def unsafe_html(self) -> str: ...

    @property
    def dangerous_html_is_safe(self) -> bool: ...

    @property
    def wants_full_width(self) -> bool: ...


@dataclass(frozen=True)
class CommandResultHTML:
    """HTML produced by a command, possibly unsafe."""

    unsafe_html: str
    is_actually_safe: bool = False


@dataclass(frozen=True)
class HTMLCommandResult:
    """Standard HTML result."""

    html: CommandResultHTML
    wants_full_width: bool = False
    plain_text: str = ""

    @classmethod
    def from_unsafe(cls, unsafe_html: str, plain_text: str = "") -> HTMLCommandResult:
        """Result whose HTML must go through the sanitizer."""
        return cls(CommandResultHTML(unsafe_html, False), plain_text=plain_text)

    @classmethod
    def dangerous_from_safe(
        cls,
        safe_html: str,
        plain_text: str = "",
        wants_full_width: bool = False,
    ) -> HTMLCommandResult:
        """Result whose HTML the command built itself and vouches for.

        Only use this when no attacker-controlled text reaches the markup
        unescaped.
        """
        return cls(
            CommandResultHTML(safe_html, True),
            wants_full_width=wants_full_width,
            plain_text=plain_text,
        )

    @property
    def unsafe_html(self) -> str:
        return self.html.unsafe_html

    @property
    def dangerous_html_is_safe(self) -> bool:
        return self.html.is_actually_safe


def safe_html_for_command_result(result: CommandResult, policy: UGCPolicy = ugc_policy) -> str:
    """Return browser-safe HTML for a command result."""
    if result.dangerous_html_is_safe:
        return result.unsafe_html
    return policy.sanitize(result.unsafe_html)
