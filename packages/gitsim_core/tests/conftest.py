"""Shared test configuration and fixtures for gitsim_core tests.

Provides processors in the states most tests start from: fresh,
initialized, and with one commit on main.
"""
from __future__ import annotations

import pytest

from gitsim_core.commands import CommandProcessor
from gitsim_core.config import SimulatorConfig


def run_all(
        processor: CommandProcessor,
        *command_lines: str,
):
    """Run command lines in order and return the last result."""
    result = None
    for line in command_lines:
        result = processor.process(line)
    return result


@pytest.fixture
def processor() -> CommandProcessor:
    """Processor with a fresh, uninitialized repository."""
    return CommandProcessor(config=SimulatorConfig())


@pytest.fixture
def initialized(processor: CommandProcessor) -> CommandProcessor:
    """Processor after ``git init``."""
    processor.process("git init")
    return processor


@pytest.fixture
def committed(initialized: CommandProcessor) -> CommandProcessor:
    """Processor with a.txt containing 'X' committed on main."""
    run_all(
        initialized,
        "touch a.txt",
        "edit a.txt X",
        "git add a.txt",
        'git commit -m "c1"',
    )
    return initialized


@pytest.fixture
def diverged(committed: CommandProcessor) -> CommandProcessor:
    """Processor where branch f changed a.txt to 'Y' and main is checked out."""
    run_all(
        committed,
        "git switch -c f",
        "edit a.txt Y",
        "git add a.txt",
        'git commit -m "c2"',
        "git switch main",
    )
    return committed
