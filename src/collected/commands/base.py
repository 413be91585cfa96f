"""Command interface, errors and the family registry."""

from __future__ import annotations

import abc
import json
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext
    from collected.commands.results import CommandResult

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Base class for every command failure."""


class CommandParseError(CommandError):
    """The command text could not be turned into a command."""


class UnknownCommandError(CommandParseError):
    """No command is registered for the given path."""


class ParamsError(CommandParseError):
    """The parameter block is malformed or incomplete."""


class CommandExecutionError(CommandError):
    """Running the command failed."""


@dataclass(frozen=True)
class CommandParams:
    values: Mapping[str, Any]

    def json_encoded(self) -> str | None:
        if not self.values:
            return None
        return json.dumps(dict(self.values), sort_keys=True)


class Command(abc.ABC):
    """A parsed slash command, ready to run once."""

    # full path including the family, e.g. ("aws", "s3", "object")
    path: ClassVar[tuple[str, ...]] = ()

    @abc.abstractmethod
    async def run(self, ctx: ExecutionContext) -> CommandResult:
        raise NotImplementedError

    def subcommands(self) -> list[str] | None:
        return list(self.path[1:]) or None

    def params(self) -> CommandParams | None:
        return None


FamilyParser = Callable[[Sequence[str], str], Command]
SubcommandParser = Callable[[str], Command]


@dataclass(frozen=True)
class CommandFamily:
    name: str
    parse: FamilyParser
    requires_subcommand: bool
    description: str = ""
    usage: tuple[str, ...] = field(default_factory=tuple)


# Registry -----------------------------------------------------------------
family_registry: dict[str, CommandFamily] = {}


def register_family(
    name: str,
    *,
    requires_subcommand: bool,
    description: str = "",
    usage: Sequence[str] = (),
) -> Callable[[FamilyParser], FamilyParser]:
    """Function decorator to register a family parser in the global registry."""

    def decorator(parse: FamilyParser) -> FamilyParser:
        family_registry[name] = CommandFamily(
            name=name,
            parse=parse,
            requires_subcommand=requires_subcommand,
            description=description,
            usage=tuple(usage),
        )
        return parse

    return decorator


def iter_families() -> Iterator[CommandFamily]:
    for name in sorted(family_registry):
        yield family_registry[name]


def route_subcommands(
    family: str,
    table: Mapping[tuple[str, ...], SubcommandParser],
    subcommands: Sequence[str],
    params: str,
) -> Command:
    """Dispatch a subcommand path through a family's lookup table."""
    parser = table.get(tuple(subcommands))
    if parser is None:
        raise UnknownCommandError(f"Unknown {family} subcommand(s) {list(subcommands)}")
    return parser(params)
