"""Task journal CLI.

Commands:
- add: append a task
- done: remove a task by position
- list: show all tasks with their positions
"""

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape

from task_journal.config import (
    JOURNAL_FILE_ENVVAR,
    NO_LOCK_ENVVAR,
    resolve_journal_file,
)
from task_journal.errors import JournalError
from task_journal.models import Task
from task_journal.store import TaskStore, format_report

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


@dataclass
class JournalOptions:
    """Global options shared by all subcommands."""

    journal_file: Optional[Path]
    lock: bool

    def get_store(self) -> TaskStore:
        """Resolve the journal path and open a store on it."""
        return TaskStore(resolve_journal_file(self.journal_file), lock=self.lock)


def fail(error: Exception) -> NoReturn:
    """Report an error and exit with status 1."""
    logger.debug("Command failed", exc_info=error)
    err_console.print(f"[red]Error: {escape(str(error))}[/]", soft_wrap=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True)
@click.option(
    "-j",
    "--journal-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=JOURNAL_FILE_ENVVAR,
    help=f"Use a different journal file. Can also be set via {JOURNAL_FILE_ENVVAR} env var.",
)
@click.option(
    "--no-lock",
    is_flag=True,
    envvar=NO_LOCK_ENVVAR,
    help="Don't take the advisory lock next to the journal file.",
)
@click.pass_context
def cli(ctx, verbose, journal_file, no_lock):
    """A command line to-do journal."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level)

    ctx.obj = JournalOptions(journal_file=journal_file, lock=not no_lock)


@cli.command("add")
@click.argument("task")
@click.pass_obj
def add(options: JournalOptions, task: str):
    """Write a task to the journal file."""
    try:
        store = options.get_store()
        position = store.add(Task.new(task))
    except (JournalError, OSError) as e:
        fail(e)
    logger.debug("Added task %d to %s", position, store.path)


@cli.command("done")
@click.argument("position", type=int)
@click.pass_obj
def done(options: JournalOptions, position: int):
    """Remove an entry from the journal file by position."""
    try:
        store = options.get_store()
        removed = store.complete(position)
    except (JournalError, OSError) as e:
        fail(e)
    logger.debug("Removed task %d: %s", position, removed.text)


@cli.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_(options: JournalOptions, output_json: bool):
    """List all tasks in the journal file."""
    try:
        tasks = options.get_store().list_tasks()
    except (JournalError, OSError) as e:
        fail(e)

    if output_json:
        result = [
            {
                "position": i,
                "text": task.text,
                "created_at": task.created_at.isoformat(),
            }
            for i, task in enumerate(tasks, 1)
        ]
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return

    for line in format_report(tasks):
        click.echo(line)
