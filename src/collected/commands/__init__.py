from .base import (
    Command,
    CommandError,
    CommandExecutionError,
    CommandFamily,
    CommandParams,
    CommandParseError,
    ParamsError,
    UnknownCommandError,
    family_registry,
    iter_families,
    register_family,
)

# Import family modules to ensure registration
from .aws import AWSS3Command, AWSS3ObjectCommand
from .color import ColorCommand, ColorGradientCommand
from .context import ExecutionContext
from .graphiql import GraphiqlMainCommand
from .graphql import GraphQLRemoteQueryCommand
from .params import ParamVariables, decode_params, variables_preprocessor
from .parser import parse_command_input
from .results import CommandResult, HTMLCommandResult, safe_html_for_command_result
from .web import WebMetaCommand, WebSnippetCommand

__all__ = [
    "AWSS3Command",
    "AWSS3ObjectCommand",
    "ColorCommand",
    "ColorGradientCommand",
    "Command",
    "CommandError",
    "CommandExecutionError",
    "CommandFamily",
    "CommandParams",
    "CommandParseError",
    "CommandResult",
    "ExecutionContext",
    "GraphQLRemoteQueryCommand",
    "GraphiqlMainCommand",
    "HTMLCommandResult",
    "ParamVariables",
    "ParamsError",
    "UnknownCommandError",
    "WebMetaCommand",
    "WebSnippetCommand",
    "decode_params",
    "family_registry",
    "iter_families",
    "parse_command_input",
    "register_family",
    "safe_html_for_command_result",
    "variables_preprocessor",
]
