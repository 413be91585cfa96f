"""Tokenizer turning raw slash-command text into a command."""

from __future__ import annotations

import logging
from collections.abc import Callable

from collected.commands.base import Command, CommandParseError, UnknownCommandError, family_registry

logger = logging.getLogger(__name__)

Preprocess = Callable[[str], str]


def split_command_input(input: str) -> tuple[list[str], str]:
    """Split input into the command path tokens and the parameter body."""
    input = input.lstrip("/")
    header, _, params = input.partition("\n")
    return parse_subcommands(header), params


def parse_subcommands(header: str) -> list[str]:
    tokens: list[str] = []
    for token in header.split(" "):
        token = token.strip()
        if token:
            tokens.append(token)
    return tokens


def parse_command_input(input: str, preprocess: Preprocess | None = None) -> Command:
    """Parse a ``/family sub ...`` line plus parameter body into a command."""
    commands, params = split_command_input(input)

    if preprocess is not None:
        params = preprocess(params)

    return parse_command(commands, params)


def parse_command(commands: list[str], params: str) -> Command:
    if not commands:
        raise CommandParseError("No command passed")

    family = family_registry.get(commands[0])
    if family is None or (family.requires_subcommand and len(commands) < 2):
        raise UnknownCommandError(f"Unknown command {commands}")

    command = family.parse(commands[1:], params)
    logger.debug("Parsed command %s", "/".join(command.path))
    return command
