"""Main CLI entry point for UX-Kit."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from .config import OUTPUT_FORMATS, Config, ConfigError
from .project import initialize_project
from .slash import CommandResponse, IDECommandRequest, ResponseFormatter, SlashCommandHandler, create_handler

console = Console()
logger = logging.getLogger("uxkit.cli")

app = typer.Typer(
    name="uxkit",
    help="UX-Kit - slash commands for UX research workflows",
    no_args_is_help=True,
)


def _load_config(project_root: Optional[Path] = None) -> Config:
    try:
        return Config(project_root)
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _resolve_format(config: Config, output_format: Optional[str]) -> str:
    if output_format is None:
        try:
            return config.get_output_format()
        except ConfigError as e:
            console.print(f"[red]Configuration error: {e}[/red]")
            raise typer.Exit(1)
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Output format must be one of: {', '.join(OUTPUT_FORMATS)}[/red]")
        raise typer.Exit(1)
    return output_format


def render_response(response: CommandResponse, output_format: str = "display",
                    formatter: Optional[ResponseFormatter] = None) -> None:
    """Print a command response in the requested format."""
    formatter = formatter or ResponseFormatter()

    if output_format == "json":
        console.print_json(formatter.format_as_json(response))
    elif output_format == "markdown":
        console.print(Markdown(formatter.format_as_markdown(response)))
    else:
        border_style = "green" if response.success else "red"
        console.print(Panel(
            Text(formatter.format_for_display(response)),
            title=formatter.get_response_summary(response),
            border_style=border_style,
        ))


def _finish(response: CommandResponse, output_format: str) -> None:
    render_response(response, output_format)
    if not response.success:
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """
    UX-Kit: slash commands for UX research workflows.

    Run a command such as `uxkit run '/study:list'`, or start an interactive
    session with `uxkit shell`.
    """
    if version:
        from . import __version__
        console.print(f"UX-Kit version {__version__}")
        raise typer.Exit()

    config = _load_config()
    try:
        _configure_logging(config.get_log_level())
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def init(
    ai_agent: str = typer.Option("cursor", "--ai-agent", "-a", help="AI agent provider (cursor, codex, custom)"),
    project_root: Path = typer.Option(Path("."), "--project-root", "-p", help="Project root directory"),
) -> None:
    """Initialize UX-Kit in the project directory."""
    try:
        result = initialize_project(project_root, ai_agent)
    except (ValueError, OSError) as e:
        console.print(f"[red]Failed to initialize UX-Kit: {e}[/red]")
        raise typer.Exit(1)

    if result.already_initialized:
        console.print("[yellow]UX-Kit already initialized in this project[/yellow]")
        return

    for path in result.created:
        console.print(f"[dim]Created {path}[/dim]")
    console.print("[green]✅ UX-Kit initialized successfully![/green]")


@app.command()
def run(
    command: str = typer.Argument(..., help="Slash command, e.g. '/study:list --format=table'"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="display, json or markdown"),
) -> None:
    """Run a slash command."""
    config = _load_config()
    output_format = _resolve_format(config, output_format)
    response = asyncio.run(create_handler().handle_command(command))
    _finish(response, output_format)


@app.command()
def ide(
    command: str = typer.Argument(..., help="Command sent by the IDE host"),
    workspace: Optional[str] = typer.Option(None, "--workspace", help="Workspace path"),
    file: Optional[str] = typer.Option(None, "--file", help="Active file"),
    line: Optional[int] = typer.Option(None, "--line", help="Cursor line"),
    column: Optional[int] = typer.Option(None, "--column", help="Cursor column"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="display, json or markdown"),
) -> None:
    """Execute a command the way an IDE host would."""
    config = _load_config()
    output_format = _resolve_format(config, output_format)

    context = {
        key: value
        for key, value in (("workspace", workspace), ("file", file), ("line", line), ("column", column))
        if value is not None
    }
    request = IDECommandRequest(command=command, context=context or None)
    response = asyncio.run(create_handler().handle_ide_command(request))
    _finish(response, output_format)


@app.command()
def commands(
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="display, json or markdown"),
) -> None:
    """List available slash commands."""
    config = _load_config()
    output_format = _resolve_format(config, output_format)
    _finish(asyncio.run(create_handler().list_commands()), output_format)


@app.command("help")
def help_command(
    command: Optional[str] = typer.Argument(None, help="Command to describe"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="display, json or markdown"),
) -> None:
    """Show help for one slash command, or list them all."""
    config = _load_config()
    output_format = _resolve_format(config, output_format)
    response = asyncio.run(create_handler().get_help(command))
    if response.success and output_format == "display":
        console.print(Markdown(response.response or ""))
        return
    _finish(response, output_format)


@app.command()
def register(
    names: List[str] = typer.Argument(..., help="Command names to register"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="display, json or markdown"),
) -> None:
    """Register slash commands with the IDE integration."""
    config = _load_config()
    output_format = _resolve_format(config, output_format)
    _finish(asyncio.run(create_handler().register_commands(names)), output_format)


@app.command()
def shell() -> None:
    """Start an interactive slash-command session."""
    config = _load_config()
    output_format = _resolve_format(config, None)
    handler = create_handler()

    console.print(Panel(
        "[bold cyan]UX-Kit[/bold cyan] - slash commands for UX research\n\n"
        "• [cyan]/commands[/cyan] - List available commands\n"
        "• [cyan]/help [command][/cyan] - Show help\n"
        "• [cyan]exit[/cyan] - Quit",
        border_style="blue",
        padding=(1, 2),
    ))

    _shell_loop(handler, output_format)


def _shell_loop(handler: SlashCommandHandler, output_format: str) -> None:
    while True:
        try:
            user_input = Prompt.ask("\n[bold cyan]uxkit>[/bold cyan]").strip()
        except (KeyboardInterrupt, EOFError):
            console.print("\n[yellow]Goodbye![/yellow]")
            break

        if user_input.lower() in ("exit", "quit"):
            console.print("[yellow]Goodbye![/yellow]")
            break
        if not user_input:
            continue

        response = asyncio.run(dispatch_shell_input(handler, user_input))
        render_response(response, output_format, handler.formatter)


async def dispatch_shell_input(handler: SlashCommandHandler, user_input: str) -> CommandResponse:
    """Route one line of shell input to help, listing or command execution."""
    parts = user_input.split()
    if parts[0] == "/help":
        return await handler.get_help(parts[1] if len(parts) > 1 else None)
    if parts[0] == "/commands":
        return await handler.list_commands()
    return await handler.handle_command(user_input)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    config = _load_config()
    try:
        values = config.as_dict()
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    panel_content = Text()
    panel_content.append("Current Configuration:\n\n", style="bold")
    panel_content.append(f"Project root: {values['project_root']}\n", style="blue")
    panel_content.append(f"Output format: {values['output_format']}\n", style="blue")
    panel_content.append(f"Log level: {values['log_level']}\n", style="blue")
    panel_content.append(f"AI agent: {values['ai_agent']}\n", style="blue")

    user_config = "✅ Exists" if config.user_config_path().exists() else "❌ Not found"
    project_config = "✅ Exists" if config.project_config_path().exists() else "❌ Not found"
    panel_content.append(f"\nUser config (~/.uxkitrc): {user_config}\n", style="magenta")
    panel_content.append(f"Project config (.uxkit/config.yaml): {project_config}\n", style="magenta")

    console.print(Panel(panel_content, title="UX-Kit Configuration", border_style="blue"))


@app.command()
def setup() -> None:
    """Create a default ~/.uxkitrc."""
    config = _load_config()

    console.print("[bold cyan]UX-Kit Setup[/bold cyan]\n")

    try:
        config_path = config.create_default_config()
    except OSError as e:
        console.print(f"[red]Failed to write {config.user_config_path()}: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"✅ Created default config file at {config_path}")

    console.print("\n[yellow]Next steps:[/yellow]")
    console.print("1. Run [cyan]uxkit init[/cyan] in your project")
    console.print("2. Try [cyan]uxkit run '/study:list'[/cyan]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
