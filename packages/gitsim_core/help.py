"""Help and usage texts for GitSim.

Execution Context:
    Library module - imported by the command processor

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations


HELP_TEXT = """\
===============================================================
                  GIT TERMINAL SIMULATOR
===============================================================

GIT COMMANDS:
---------------------------------------------------------------

Repository Operations:
  git init                      Initialize a new Git repository
  git status                    Show the working tree status
  git log                       Show commit logs
  git help                      Show this help information

Staging & Committing:
  git add <file>                Add file contents to the index
  git add .                     Add all files to the index
  git commit -m "message"       Record changes to the repository

Branch Management:
  git branch                    List all branches
  git branch <name>             Create a new branch
  git checkout <branch>         Switch to existing branch
  git checkout -b <name>        Create and switch to a new branch
  git switch <branch>           Switch to existing branch
  git switch -c <name>          Create and switch to a new branch
  git merge <branch>            Merge a branch into your current branch

OTHER COMMANDS:
---------------------------------------------------------------

Terminal Operations:
  help                          Show this help information
  clear                         Clear the terminal

File Operations:
  ls                            List files in the current directory
  touch <file>                  Create a new file
  edit <file> <content>         Edit file content
  cat <file>                    View file content"""


GIT_USAGE = """\
usage: git [--version] [--help] [-C <path>] [-c <name>=<value>]
           [--exec-path[=<path>]] [--html-path] [--man-path] [--info-path]
           [-p | --paginate | -P | --no-pager] [--no-replace-objects] [--bare]
           [--git-dir=<path>] [--work-tree=<path>] [--namespace=<name>]
           <command> [<args>]"""
