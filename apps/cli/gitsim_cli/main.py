"""GitSim CLI entry point.

Orchestrator for the GitSim command-line interface. Registers all
command modules and provides the main entry point.

Execution Context:
    CLI application - run via `python -m gitsim_cli.main` or `gitsim` command

Dependencies:
    - click: CLI framework
    - rich: Log formatting
    - gitsim_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import logging
import sys

import click
from rich.logging import RichHandler

from gitsim_cli import __version__
from gitsim_cli.commands.run import run
from gitsim_cli.commands.shell import shell
from gitsim_core.config import get_config


def configure_logging(
        verbose: bool,
) -> None:
    """Route log records to stderr through rich.

    Args:
        verbose: Show debug records from the simulator.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="gitsim")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON config file (defaults to GITSIM_* environment variables).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log simulator state transitions.",
)
@click.pass_context
def cli(
        ctx: click.Context,
        config_path: str | None,
        verbose: bool,
) -> None:
    """GitSim - an in-memory git terminal simulator.

    Practice init, add, commit, branch, switch, and merge without a real
    repository. Every session starts from an empty project.
    """
    configure_logging(verbose)
    try:
        ctx.obj = get_config(config_path)
    except RuntimeError as config_error:
        raise click.ClickException(str(config_error)) from config_error


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(shell)
cli.add_command(run)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for GitSim CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
