"""Command-line interface for Taskbot CLI."""

import logging
from pathlib import Path
from typing import Optional

import click

from .config import ConfigModel, load_config
from .exceptions import InputError, StorageError
from .logging_setup import setup_logging
from .parser import CommandParser
from .storage import Storage
from .ui import Ui

logger = logging.getLogger(__name__)


def build_parser(config: ConfigModel, ui: Optional[Ui] = None) -> CommandParser:
    """Load the saved tasks and wire up a parser for them."""
    ui = ui or Ui(no_color=config.no_color)
    storage = Storage.from_config(config)
    try:
        tasks = storage.load()
    except StorageError as e:
        raise click.ClickException(str(e))
    return CommandParser(tasks, storage, ui, config)


def run_loop(parser: CommandParser) -> None:
    """Read commands until ``bye`` or end of input."""
    ui = parser.ui
    ui.show_welcome()

    while not parser.is_exit:
        try:
            line = ui.console.input("> ")
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, leaving interactive loop")
            break

        if not line.strip():
            continue

        try:
            parser.process_input(line)
        except InputError as e:
            ui.show_error(e)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Save file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config_path, data_file, verbose):
    """Taskbot - a personal task tracking assistant."""
    ctx.ensure_object(dict)

    config = load_config(Path(config_path) if config_path else None)
    if data_file:
        data_path = Path(data_file).resolve()
        config.save_file = str(data_path)
        config.backup_dir = str(data_path.parent / "backups")

    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)
    ctx.obj["config"] = config

    # If no command provided, start the interactive session
    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


@main.command()
@click.pass_context
def chat(ctx):
    """Start an interactive session."""
    parser = build_parser(ctx.obj["config"])
    run_loop(parser)


@main.command()
@click.argument("command", nargs=-1, required=True)
@click.pass_context
def run(ctx, command):
    """Run a single COMMAND, e.g. taskbot run todo read book."""
    parser = build_parser(ctx.obj["config"])
    try:
        parser.process_input(" ".join(command))
    except InputError as e:
        parser.ui.show_error(e)
        ctx.exit(1)


@main.command()
@click.pass_context
def backup(ctx):
    """Back up the save file."""
    storage = Storage.from_config(ctx.obj["config"])
    backup_path = storage.backup()
    if backup_path is None:
        raise click.ClickException(f"Nothing to back up at {storage.save_path}")
    click.echo(f"Backed up to {backup_path}")


if __name__ == "__main__":
    main()
