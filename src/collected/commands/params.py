"""Parameter block decoding and variable substitution."""

from __future__ import annotations

import logging
import re
import sys
import types
from collections.abc import Callable
from dataclasses import MISSING, dataclass, fields
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints
from urllib.parse import urlsplit

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from collected.commands.base import ParamsError

logger = logging.getLogger(__name__)

T = TypeVar("T")

VARIABLE_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def decode_params(params: str, cls: type[T]) -> T:
    """Decode a TOML parameter block into the dataclass ``cls``.

    Fields without a default are required. Supported field types are ``str``,
    ``str | None`` and ``dict[str, str]``. Keys the dataclass does not declare
    are ignored.
    """
    try:
        data = tomllib.loads(params)
    except tomllib.TOMLDecodeError as e:
        raise ParamsError(f"Invalid parameters: {e}") from e

    hints = get_type_hints(cls)
    values: dict[str, Any] = {}
    known: set[str] = set()
    for f in fields(cls):  # type: ignore[arg-type]
        if not f.init:
            continue
        key = f.metadata.get("toml", f.name)
        known.add(key)
        if key not in data:
            if f.default is MISSING and f.default_factory is MISSING:
                raise ParamsError(f"Missing required parameter '{key}'")
            continue
        values[f.name] = _coerce(key, data[key], hints[f.name])

    unknown = set(data) - known
    if unknown:
        logger.debug("Ignoring unknown parameters for %s: %s", cls.__name__, sorted(unknown))

    return cls(**values)


def _coerce(key: str, value: Any, hint: Any) -> Any:
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        hint = next(arg for arg in get_args(hint) if arg is not type(None))
        origin = get_origin(hint)

    if hint is str:
        if not isinstance(value, str):
            raise ParamsError(f"Parameter '{key}' must be a string")
        return value

    if origin is dict:
        if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
            raise ParamsError(f"Parameter '{key}' must be a table of strings")
        return dict(value)

    raise ParamsError(f"Unsupported type for parameter '{key}'")


def require_http_url(key: str, url: str) -> str:
    """Reject anything but an absolute http(s) URL."""
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ParamsError(f"Parameter '{key}' must be an absolute http(s) URL, got {url!r}")
    return url


@dataclass(frozen=True)
class ParamVariables:
    """Values the host may splice into a parameter block."""

    github_oauth_token: str = ""

    def lookup(self, name: str) -> str:
        known = {f.name for f in fields(self)}
        value = getattr(self, name) if name in known else ""
        if not value:
            raise ParamsError(f"Unknown or unset variable '{name}'")
        return value


def variables_preprocessor(variables: ParamVariables) -> Callable[[str], str]:
    """Build a preprocess step replacing ``{{ name }}`` placeholders."""

    def preprocess(params: str) -> str:
        return VARIABLE_PATTERN.sub(lambda m: variables.lookup(m.group(1)), params)

    return preprocess
