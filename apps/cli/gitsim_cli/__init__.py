"""GitSim CLI Application.

Terminal front end for the GitSim git simulator.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - gitsim_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

__version__ = "0.1.0"
