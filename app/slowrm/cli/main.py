"""Main CLI application entry point.

Defines the Typer application: parses the command line into a
RemovalConfig and hands it to the removal executor.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from slowrm import __version__
from slowrm.core.config import DEFAULT_CHUNK_MB, DEFAULT_PAUSE_SECONDS, RemovalConfig
from slowrm.core.errors import ConfigurationError
from slowrm.core.executor import EXIT_FAILURE, execute_removal
from slowrm.core.reporter import ConsoleReporter
from slowrm.utils.formatting import err_console, print_error

# Same status click uses for usage errors
EXIT_USAGE = 2

app = typer.Typer(
    name="slowrm",
    help="Remove files and directory trees while pacing the deletion I/O.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"slowrm version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send debug logging to stderr when --verbose is given."""
    if not verbose:
        return
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    if any(isinstance(h, RichHandler) for h in root_logger.handlers):
        return
    handler = RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(handler)


@app.command()
def main(
    paths: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="PATH [PATH ...]",
            help="Files or directories to remove.",
            show_default=False,
        ),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Dive into directories recursively."),
    ] = False,
    chunk: Annotated[
        int,
        typer.Option(
            "--chunk",
            "-c",
            min=0,
            metavar="SIZE_MB",
            help="Chunk size in megabytes.",
        ),
    ] = DEFAULT_CHUNK_MB,
    sleep: Annotated[
        float,
        typer.Option(
            "--sleep",
            "-s",
            min=0.0,
            metavar="SECONDS",
            help="Sleep time between chunks.",
        ),
    ] = DEFAULT_PAUSE_SECONDS,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Continue on errors (by default bail on everything)."),
    ] = False,
    one_file_system: Annotated[
        bool,
        typer.Option("--one-file-system", "-x", help="Only operate on one file system."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every entry, pause and truncation."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove PATHs, truncating large files in chunks and pausing between bursts."""
    _configure_logging(verbose)

    if not paths:
        print_error("Please provide at least one path.")
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        config = RemovalConfig.from_options(
            paths,
            recursive=recursive,
            chunk_mb=chunk,
            pause_seconds=sleep,
            force=force,
            one_file_system=one_file_system,
        )
    except ConfigurationError as e:
        print_error(e.message)
        raise typer.Exit(code=EXIT_USAGE) from e

    exit_code = execute_removal(config, ConsoleReporter())
    if exit_code:
        raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
