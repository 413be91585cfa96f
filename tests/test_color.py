"""Tests for /color commands."""

from __future__ import annotations

import re

import pytest

from collected.commands import ColorGradientCommand, ParamsError, parse_command_input

LAB_PATTERN = re.compile(r"lab\((-?[\d.]+) (-?[\d.]+) (-?[\d.]+)\)")


def lab_values(html: str) -> tuple[float, ...]:
    match = LAB_PATTERN.search(html)
    assert match is not None
    return tuple(float(v) for v in match.groups())


class TestColorCommand:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "input,hex_value,rgb",
        [
            ("#ff8800", "#ff8800", "rgb(255, 136, 0)"),
            ("#FF8800", "#ff8800", "rgb(255, 136, 0)"),
            ("#f80", "#ff8800", "rgb(255, 136, 0)"),
            ("336699", "#336699", "rgb(51, 102, 153)"),
        ],
    )
    async def test_hex_and_rgb(self, input, hex_value, rgb):
        cmd = parse_command_input(f"/color {input}")
        result = await cmd.run(None)
        assert f"<dd>{hex_value}</dd>" in result.unsafe_html
        assert rgb in result.unsafe_html
        assert result.plain_text == hex_value

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "input,expected",
        [
            ("#ffffff", (100.0, 0.0, 0.0)),
            ("#000000", (0.0, 0.0, 0.0)),
            ("#ff0000", (54.29, 80.8, 69.89)),
        ],
    )
    async def test_lab(self, input, expected):
        result = await parse_command_input(f"/color {input}").run(None)
        for actual, wanted in zip(lab_values(result.unsafe_html), expected):
            assert actual == pytest.approx(wanted, abs=0.5)

    @pytest.mark.asyncio
    async def test_result_is_safe(self):
        result = await parse_command_input("/color #123456").run(None)
        assert result.dangerous_html_is_safe
        assert not result.wants_full_width
        assert "background-color: #123456" in result.unsafe_html

    @pytest.mark.parametrize("input", ["#ff88", "#gggggg", "red", "#ff880000"])
    def test_invalid_hex(self, input):
        with pytest.raises(ParamsError, match="Invalid hex color"):
            parse_command_input(f"/color {input}")


class TestColorGradientCommand:
    @pytest.mark.asyncio
    async def test_stop_order_preserved(self):
        stops = ["#ff0000", "#00ff00", "#0000ff", "#ff0000"]
        cmd = parse_command_input("/color gradient\n" + "\n".join(stops))
        result = await cmd.run(None)
        assert f"linear-gradient({','.join(stops)})" in result.unsafe_html
        assert result.plain_text == f"linear-gradient({','.join(stops)})"

    @pytest.mark.asyncio
    async def test_listing(self):
        result = await parse_command_input("/color gradient\n#fff\n#000").run(None)
        assert "#ffffff, #000000" in result.unsafe_html
        assert result.dangerous_html_is_safe

    def test_blank_lines_skipped(self):
        cmd = ColorGradientCommand.parse("#fff\n\n#000\n")
        assert cmd.stops() == ["#ffffff", "#000000"]

    def test_invalid_stop_fails_whole_command(self):
        with pytest.raises(ParamsError):
            parse_command_input("/color gradient\n#fff\nnot-a-color\n#000")

    def test_empty_gradient(self):
        with pytest.raises(ParamsError, match="at least one color"):
            parse_command_input("/color gradient")
