"""Main entry point for task-journal CLI.

Supports both direct invocation (`python -m task_journal`) and package entry point.
"""

from task_journal.cli import cli

if __name__ == "__main__":
    cli()
