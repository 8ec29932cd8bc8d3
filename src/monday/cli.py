"""CLI interface for monday."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from monday import __version__
from monday.config import CONFIG_FILE, MondayConfig
from monday.logging_setup import setup_logging
from monday.session import Session
from monday.storage import Storage
from monday.ui import Ui

console = Console()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="monday")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory for the task file")
@click.option("--file", "file_name", help="Task file name inside the data directory")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    data_dir: str | None,
    file_name: str | None,
    verbose: bool,
) -> None:
    """monday - a grumpy task tracker.

    Reluctantly keeps track of your todos, deadlines and events.

    \b
    Usage:
      monday                       # Chat interactively
      monday run "todo read book"  # Run commands and exit
      monday run list
      monday init                  # Save settings to .monday/config.json
    """
    config = MondayConfig.load(config_path)
    if data_dir:
        config.storage.data_dir = data_dir
    if file_name:
        config.storage.file_name = file_name

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path or CONFIG_FILE

    # No subcommand: start chatting
    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


def _open_session(config: MondayConfig, ui: Ui) -> Session:
    storage = Storage(
        config.storage.data_dir,
        config.storage.file_name,
        config.storage.corrupted_suffix,
    )
    session = Session(storage, quotes_path=config.quotes_path)
    result = session.start()
    if result.has_corruption:
        ui.show_corruption(result.corrupted_count, storage.corrupted_path.name)
    return session


@main.command()
@click.pass_context
def chat(ctx: click.Context) -> None:
    """Chat with Monday until you say bye."""
    config: MondayConfig = ctx.obj["config"]
    ui = Ui(console)

    ui.show_greeting()
    session = _open_session(config, ui)

    while session.is_running:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            # End of input or Ctrl-C counts as saying bye
            console.print()
            line = "bye"
        ui.show_outcome(session.handle(line))


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Save the current settings to the config file.

    Storage options given to monday itself are included, so
    `monday --data-dir tasks init` makes that directory the default.
    """
    config: MondayConfig = ctx.obj["config"]
    path: Path = ctx.obj["config_path"]

    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite it.")
        return

    config.save(path)
    console.print(f"[green]Config saved:[/green] [cyan]{path}[/cyan]")


@main.command("run")
@click.argument("lines", nargs=-1, required=True)
@click.pass_context
def run_command(ctx: click.Context, lines: tuple[str, ...]) -> None:
    """Run each LINE as a command, then exit.

    \b
    Examples:
      monday run "deadline return book /by 2019-12-02 1800"
      monday run "mark 1" list
    """
    config: MondayConfig = ctx.obj["config"]
    ui = Ui(console)
    session = _open_session(config, ui)

    failed = False
    for line in lines:
        outcome = session.handle(line)
        ui.show_outcome(outcome)
        failed = failed or not outcome.ok
        if not session.is_running:
            break
    else:
        # Rewrite the file without corrupted lines even if nothing changed
        if session.corrupted_on_load:
            session.save()

    if failed:
        ctx.exit(1)


if __name__ == "__main__":
    main()
