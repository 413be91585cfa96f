"""CLI entry point using typer."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from collected import __version__
from collected.commands import ParamVariables, iter_families
from collected.config import (
    CONFIG_FILE,
    LOG_FILE,
    AppConfig,
    AWSConfig,
    HTTPConfig,
    LoggingConfig,
    VariablesConfig,
    load_config,
    save_config,
)
from collected.services.runner import CommandRunner
from collected.utils.formatting import format_duration
from collected.utils.system import check_aws_credentials

app = typer.Typer(
    name="collected",
    help="Run Collected slash commands and render their HTML.",
    add_completion=False,
)
console = Console()


def _setup_logging(config: AppConfig, interactive: bool = False) -> None:
    log_path = Path(config.logging.file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(str(log_path)),
            *([logging.StreamHandler()] if interactive else []),
        ],
    )


@app.command()
def init() -> None:
    """Interactive setup wizard."""
    console.print(f"\n[bold]Collected v{__version__}[/bold]")
    console.print("Interactive Setup\n")

    # 1. Outbound HTTP
    console.print("[bold]Step 1:[/bold] Outbound HTTP")
    timeout = typer.prompt("  Request timeout (seconds)", default=30, type=int)
    deadline = typer.prompt("  Command deadline (seconds, 0 for none)", default=60, type=int)
    proxy = typer.prompt("  Proxy URL (empty for direct)", default="", show_default=False)

    # 2. AWS
    console.print("\n[bold]Step 2:[/bold] AWS")
    found, info = check_aws_credentials()
    if found:
        console.print(f"  Credentials: [green]{info}[/green]")
    else:
        console.print(f"  [yellow]Warning: {info}[/yellow]")
    endpoint_url = typer.prompt("  S3 endpoint URL (empty for AWS)", default="", show_default=False)

    # 3. Variables
    console.print("\n[bold]Step 3:[/bold] Parameter variables")
    console.print("  Used for {{ github_oauth_token }} placeholders in command parameters.")
    token = typer.prompt("  GitHub OAuth token", default="", show_default=False, hide_input=True)

    config = AppConfig(
        http=HTTPConfig(timeout=timeout, deadline=deadline, proxy=proxy),
        aws=AWSConfig(endpoint_url=endpoint_url),
        variables=VariablesConfig(github_oauth_token=token),
        logging=LoggingConfig(),
    )
    save_config(config)

    console.print(f"\n[green]Configuration saved to {CONFIG_FILE}[/green]")
    console.print("\nNext steps:")
    console.print("  [bold]collected commands[/bold]            List available commands")
    console.print("  [bold]collected run --text '/color #f80'[/bold]\n")


@app.command()
def run(
    source: str = typer.Argument(None, help="File holding the command, or - for stdin"),
    text: str = typer.Option(None, "--text", "-t", help="Command text"),
    raw: bool = typer.Option(False, "--raw", help="Print only the HTML"),
    github_token: str = typer.Option(None, "--github-token", help="Value for {{ github_oauth_token }}"),
) -> None:
    """Parse, run and sanitize one slash command."""
    if text is None:
        if source is None:
            console.print("[red]Pass a file, - for stdin, or --text.[/red]")
            raise typer.Exit(1)
        if source == "-":
            text = sys.stdin.read()
        else:
            try:
                text = Path(source).read_text()
            except OSError as e:
                console.print(f"[red]Cannot read {escape(source)}: {escape(str(e))}[/red]")
                raise typer.Exit(1)

    config = load_config()
    _setup_logging(config, interactive=not raw)

    runner = CommandRunner(config)
    variables = None
    if github_token is not None:
        variables = ParamVariables(github_oauth_token=github_token)

    rendered = asyncio.run(runner.execute(text, variables=variables))

    if not rendered.ok:
        if raw:
            typer.echo(rendered.embed_html())
        console.print(f"[red]Error:[/red] {escape(rendered.error)}")
        raise typer.Exit(1)

    if raw:
        typer.echo(rendered.html)
        return

    title = "/" + " ".join(rendered.path)
    subtitle = format_duration(rendered.execution_time_ms)
    if rendered.wants_full_width:
        subtitle += " | full width"
    console.print(
        Panel(
            Syntax(rendered.html.strip(), "html", word_wrap=True),
            title=title,
            subtitle=subtitle,
        )
    )


@app.command()
def commands() -> None:
    """List available command families."""
    table = Table(title="Commands")
    table.add_column("Family", style="cyan", no_wrap=True)
    table.add_column("Subcommand", style="magenta")
    table.add_column("Description")
    table.add_column("Usage", style="green")

    for family in iter_families():
        table.add_row(
            family.name,
            "required" if family.requires_subcommand else "none",
            family.description,
            "\n\n".join(family.usage),
        )

    console.print(table)


@app.command()
def config(
    key: str = typer.Argument(None, help="Config key (e.g., http.timeout)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    if not CONFIG_FILE.exists():
        console.print("[red]Not configured. Run 'collected init'.[/red]")
        raise typer.Exit(1)

    cfg = load_config()

    if key is None:
        # Show all config
        token = cfg.variables.github_oauth_token
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("http.timeout", str(cfg.http.timeout))
        table.add_row("http.deadline", str(cfg.http.deadline))
        table.add_row("http.proxy", cfg.http.proxy or "(direct)")
        table.add_row("http.user_agent", cfg.http.user_agent)
        table.add_row("aws.endpoint_url", cfg.aws.endpoint_url or "(default)")
        table.add_row("variables.github_oauth_token", token[:4] + "..." if token else "(not set)")
        table.add_row("logging.level", cfg.logging.level)
        table.add_row("logging.file", cfg.logging.file)

        console.print(table)
        return

    if value is None:
        console.print("[red]Usage: collected config <key> <value>[/red]")
        raise typer.Exit(1)

    # Set config value
    parts = key.split(".")
    if len(parts) != 2:
        console.print("[red]Key format: section.key (e.g., http.timeout)[/red]")
        raise typer.Exit(1)

    section, attr = parts
    section_map = {"http": cfg.http, "aws": cfg.aws, "variables": cfg.variables, "logging": cfg.logging}

    if section not in section_map:
        console.print(f"[red]Unknown section: {section}[/red]")
        raise typer.Exit(1)

    obj = section_map[section]
    if not hasattr(obj, attr):
        console.print(f"[red]Unknown key: {key}[/red]")
        raise typer.Exit(1)

    # Type coercion
    current = getattr(obj, attr)
    try:
        typed_value: int | str = int(value) if isinstance(current, int) else value
    except ValueError:
        console.print(f"[red]Invalid value type for {key}[/red]")
        raise typer.Exit(1)

    setattr(obj, attr, typed_value)
    save_config(cfg)
    console.print(f"[green]{key} = {typed_value}[/green]")


@app.command()
def logs(
    lines: int = typer.Option(50, "--lines", "-n", help="Number of lines"),
) -> None:
    """View command logs."""
    log_path = Path(LOG_FILE).expanduser().resolve()
    if not log_path.exists():
        console.print("[dim]No log file found.[/dim]")
        return

    content = log_path.read_text()
    log_lines = content.strip().split("\n")
    for line in log_lines[-lines:]:
        console.print(line, markup=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"collected v{__version__}")

    found, info = check_aws_credentials()
    if found:
        console.print(f"AWS credentials: {info}")
    else:
        console.print("AWS credentials: [yellow]not found[/yellow]")

    console.print(f"Python: {sys.version.split()[0]}")
    console.print(f"Config: {CONFIG_FILE}")


if __name__ == "__main__":
    app()
