"""CLI entry point for studio2md."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from studio2md.config import Studio2MdConfig, load_config
from studio2md.config.loader import DEFAULT_CONFIG_TEMPLATE
from studio2md.converter import ConversationConverter, ConversionOptions
from studio2md.errors import ConversionError
from studio2md.logs import configure_logging
from studio2md.output import MarkdownWriter
from studio2md.parser import ParseResult, ParsingEngine

app = typer.Typer(
    name="studio2md",
    help="Turn AI Studio 'Get Code' Python exports into markdown transcripts.",
)

config_app = typer.Typer(help="Manage studio2md configuration.")
app.add_typer(config_app, name="config")

# Status output goes to stderr; stdout carries only the markdown
console = Console(stderr=True)

# Global state
_config: Studio2MdConfig | None = None

_PREVIEW_CHARS = 60


def _get_config() -> Studio2MdConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to studio2md.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _read_source(file: str) -> str:
    """Read source text from a path, or stdin when the path is '-'."""
    if file == "-":
        return sys.stdin.read()
    path = Path(file)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file}")
    return path.read_text(encoding="utf-8")


def _preview(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) <= _PREVIEW_CHARS:
        return flat
    return flat[: _PREVIEW_CHARS - 1] + "…"


def _display_parse_result(result: ParseResult) -> None:
    table = Table(title=f"Messages ({len(result.messages)})")
    table.add_column("#", justify="right")
    table.add_column("Role", style="cyan")
    table.add_column("Parts", justify="right")
    table.add_column("Preview", style="green")
    for i, message in enumerate(result.messages, start=1):
        table.add_row(
            str(i),
            message.role.value,
            str(len(message.parts)),
            escape(_preview(message.parts[0])),
        )
    console.print(table)

    if result.system_instruction:
        console.print(
            Panel(
                escape(result.system_instruction),
                title="System Instruction",
                border_style="blue",
            )
        )


@app.command()
def convert(
    file: str = typer.Argument("-", help="Path to exported Python code, or '-' for stdin"),
    thinking: bool | None = typer.Option(
        None, "--thinking/--no-thinking", help="Render model thinking parts"
    ),
    claude: bool | None = typer.Option(
        None, "--claude/--no-claude", help="Use Human:/Assistant: labels"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Write markdown to file"),
    save: bool = typer.Option(
        False, "--save", help="Write to <name>-<timestamp>.md in the output directory"
    ),
    name: str | None = typer.Option(None, "--name", help="Conversation name for --save"),
) -> None:
    """Convert an exported conversation to markdown."""
    cfg = _get_config()

    try:
        source = _read_source(file)
    except (FileNotFoundError, PermissionError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    options = ConversionOptions(
        include_thinking=cfg.conversion.include_thinking if thinking is None else thinking,
        claude_mode=cfg.conversion.claude_mode if claude is None else claude,
    )
    converter = ConversationConverter(
        engine=ParsingEngine(),
        engine_config=cfg.engine,
        conversion_config=cfg.conversion,
    )
    result = converter.convert(source, options)

    if not result.success:
        console.print(f"[red]Error:[/red] {escape(result.error)}")
        raise typer.Exit(1)

    writer = MarkdownWriter(cfg.output)
    if output or save:
        filename = output or str(writer.base_dir / writer.default_filename(name))
        dest = writer.write(result.markdown, filename)
        console.print(f"[green]Written to[/green] {dest}")
    else:
        typer.echo(result.markdown)

    console.print(
        Panel(
            f"[dim]Messages:[/dim]     {result.message_count}\n"
            f"[dim]Dialect:[/dim]      {'claude' if options.claude_mode else 'markdown'}\n"
            f"[dim]Thinking:[/dim]     {options.include_thinking}\n"
            f"[dim]Instruction:[/dim]  {'yes' if result.system_instruction else 'no'}",
            title="Conversion Result",
            border_style="green",
        )
    )


@app.command()
def parse(
    file: str = typer.Argument("-", help="Path to exported Python code, or '-' for stdin"),
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table or json")
    ] = "table",
) -> None:
    """Show the messages extracted from an export without rendering them."""
    cfg = _get_config()

    try:
        source = _read_source(file)
    except (FileNotFoundError, PermissionError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    engine = ParsingEngine()
    try:
        result = engine.parse(
            source,
            wait=cfg.engine.wait_for_ready,
            timeout=cfg.engine.init_timeout,
        )
    except ConversionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "json":
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _display_parse_result(result)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    Console().print(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default studio2md.yaml in current directory."""
    target = Path("studio2md.yaml")
    if target.exists() and not force:
        console.print("[yellow]studio2md.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    console.print(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
