"""GitSim run command.

Runs a scripted sequence of commands against a fresh simulated
repository and prints each result, optionally followed by the final
repository state.

Execution Context:
    CLI command - invoked via `gitsim run "git init" "touch a.txt"`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitsim_core: Command processing

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from gitsim_core.commands import CommandProcessor
from gitsim_core.config import SimulatorConfig

from .utils import render_result
from .utils import render_state

console = Console()


def read_script(
        script: Path,
) -> list[str]:
    """Read command lines from a script file.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        script: Path to the script.

    Returns:
        Command lines in file order.
    """
    lines = []
    for raw_line in script.read_text().splitlines():
        line = raw_line.strip()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


# ---- Run Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commands",
    nargs=-1,
)
@click.option(
    "--script",
    "-s",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File with one command per line.",
)
@click.option(
    "--state",
    "show_state",
    is_flag=True,
    help="Show files, branches, and commits after the last command.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the final repository state as JSON instead of results.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with an error if any command fails.",
)
@click.pass_obj
def run(
        config: SimulatorConfig,
        commands: tuple[str, ...],
        script: Path | None,
        show_state: bool,
        as_json: bool,
        strict: bool,
) -> None:
    """Run a sequence of simulator commands.

    Each COMMANDS argument is one command line. Commands from --script
    run first, followed by any given on the command line.

    Examples:
        gitsim run "git init" "touch a.txt" "git add a.txt"
        gitsim run --script lesson.txt --state
    """
    lines = read_script(script) if script else []
    lines.extend(commands)

    if not lines:
        raise click.ClickException("No commands given")

    processor = CommandProcessor(config=config)
    failures = 0

    for line in lines:
        result = processor.process(line)
        if result.is_error:
            failures += 1
        if as_json:
            continue
        console.print(Text(f"{config.prompt}{line}", style="bold"))
        render_result(console, result)

    if as_json:
        click.echo(json.dumps(processor.snapshot(), indent=2))
    elif show_state:
        console.print()
        render_state(console, processor.state)

    if strict and failures:
        msg = f"{failures} command(s) failed"
        raise click.ClickException(msg)
