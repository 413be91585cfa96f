"""``/color`` commands: swatches and gradients."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from coloraide import Color

from collected.commands.base import Command, ParamsError, UnknownCommandError, register_family
from collected.commands.results import CommandResult, HTMLCommandResult

if TYPE_CHECKING:
    from collected.commands.context import ExecutionContext

logger = logging.getLogger(__name__)

HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(input: str) -> Color:
    """Parse ``#rgb`` or ``#rrggbb`` (the ``#`` is optional)."""
    match = HEX_PATTERN.match(input.strip())
    if match is None:
        raise ParamsError(f"Invalid hex color {input!r}")
    return Color("#" + match.group(1))


def rgb255(color: Color) -> tuple[int, int, int]:
    srgb = color.convert("srgb")
    red, green, blue = (int(min(max(srgb[i], 0.0), 1.0) * 255 + 0.5) for i in range(3))
    return red, green, blue


def hex_string(color: Color) -> str:
    return "#%02x%02x%02x" % rgb255(color)


def lab(color: Color) -> tuple[float, float, float]:
    """CIE Lab as CSS ``lab()`` defines it: D50 white point, L from 0 to 100.

    This is not the D65, 0..1 lightness Lab that some color libraries
    report, so values differ slightly from those (red is ``54.29 80.80 69.89``
    here, about ``53.24 80.09 67.20`` under D65).
    """
    converted = color.convert("lab")
    return converted[0], converted[1], converted[2]


def _lab_component(value: float) -> str:
    # avoid rendering "-0.00"
    return f"{round(value, 2) + 0.0:.2f}"


@dataclass(frozen=True)
class ColorCommand(Command):
    """``/color #rrggbb``"""

    path = ("color",)

    input: str
    color: Color = field(compare=False, repr=False)

    @classmethod
    def parse(cls, input: str) -> ColorCommand:
        return cls(input=input, color=parse_hex_color(input))

    def subcommands(self) -> list[str] | None:
        return [self.input]

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        hex_value = hex_string(self.color)
        red, green, blue = rgb255(self.color)
        lightness, a, b = (_lab_component(v) for v in lab(self.color))

        html = (
            f'<div style="width: 12em; height: 12em; background-color: {hex_value}"></div>'
            '<dl class="mt-4">'
            f'<dt class="mt-2 font-bold">Hex</dt><dd>{hex_value}</dd>'
            f'<dt class="mt-2 font-bold">sRGB</dt><dd>rgb({red}, {green}, {blue})</dd>'
            f'<dt class="mt-2 font-bold">Lab</dt><dd>lab({lightness} {a} {b})</dd>'
            "</dl>"
        )
        return HTMLCommandResult.dangerous_from_safe(html, plain_text=hex_value)


@dataclass(frozen=True)
class ColorGradientCommand(Command):
    """``/color gradient`` with one hex color per line."""

    path = ("color", "gradient")

    inputs: tuple[str, ...]
    colors: tuple[Color, ...] = field(compare=False, repr=False)

    @classmethod
    def parse(cls, params: str) -> ColorGradientCommand:
        inputs = tuple(line.strip() for line in params.split("\n") if line.strip())
        if not inputs:
            raise ParamsError("A gradient needs at least one color, one per line")
        return cls(inputs=inputs, colors=tuple(parse_hex_color(i) for i in inputs))

    def stops(self) -> list[str]:
        return [hex_string(color) for color in self.colors]

    def css(self) -> str:
        return f"linear-gradient({','.join(self.stops())})"

    async def run(self, ctx: ExecutionContext) -> CommandResult:
        css = self.css()
        html = (
            f'<div style="width: 12em; height: 12em; background: {css}"></div>'
            '<dl class="mt-4">'
            f'<dt class="mt-2 font-bold">Hex</dt><dd>{", ".join(self.stops())}</dd>'
            f'<dt class="mt-2 font-bold">CSS</dt><dd><code>{css}</code></dd>'
            "</dl>"
        )
        return HTMLCommandResult.dangerous_from_safe(html, plain_text=css)


@register_family(
    "color",
    requires_subcommand=True,
    description="Preview a color or a gradient",
    usage=["/color #ff8800", "/color gradient\n#fff\n#000"],
)
def parse_color_command(subcommands: Sequence[str], params: str) -> Command:
    if len(subcommands) == 1:
        if subcommands[0] == "gradient":
            return ColorGradientCommand.parse(params)
        return ColorCommand.parse(subcommands[0])

    raise UnknownCommandError(f"Unknown color subcommand(s) {list(subcommands)}")
