"""GitSim shell command.

Interactive terminal session against a fresh simulated repository.

Execution Context:
    CLI command - invoked via `gitsim shell`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitsim_core: Command processing

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import click
from rich.console import Console

from gitsim_core.commands import CommandProcessor
from gitsim_core.config import SimulatorConfig
from gitsim_core.models import ResultType

from .utils import render_result

console = Console()

EXIT_COMMANDS = {"exit", "quit"}


# ---- Shell Command ------------------------------------------------------------------------------------------


@click.command()
@click.pass_obj
def shell(
        config: SimulatorConfig,
) -> None:
    """Start an interactive git simulator session.

    Type git-like commands at the prompt. Use 'help' to list them and
    'exit' or Ctrl-D to leave. Nothing touches the real file system.

    Example:
        gitsim shell
    """
    processor = CommandProcessor(config=config)

    console.print("[bold]Git Terminal Simulator[/bold]")
    console.print("[dim]Type 'help' for available commands, 'exit' to quit.[/dim]")

    while True:
        try:
            line = console.input(config.prompt, markup=False)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if line.strip().lower() in EXIT_COMMANDS:
            break
        if not line.strip():
            continue

        result = processor.process(line)
        if result.type is ResultType.CLEAR:
            console.clear()
            continue
        render_result(console, result)
