"""Journal file location.

Resolution order:
- explicit path (``--journal-file`` or the TASK_JOURNAL_FILE env var)
- ``~/.rusty-journal.json``
"""

import logging
from pathlib import Path
from typing import Optional, Union

from task_journal.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_JOURNAL_FILENAME = ".rusty-journal.json"
JOURNAL_FILE_ENVVAR = "TASK_JOURNAL_FILE"
NO_LOCK_ENVVAR = "TASK_JOURNAL_NO_LOCK"


def find_default_journal_file() -> Path:
    """Get the default journal file in the user's home directory.

    Raises:
        ConfigurationError: If the home directory cannot be determined
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigurationError(
            f"Failed to find journal file: cannot determine home directory ({e}). "
            f"Use --journal-file or set {JOURNAL_FILE_ENVVAR}."
        ) from e
    return home / DEFAULT_JOURNAL_FILENAME


def resolve_journal_file(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the journal file path to use.

    Args:
        explicit: Path given on the command line or via environment

    Returns:
        Concrete journal file path
    """
    if explicit:
        path = Path(explicit).expanduser()
    else:
        path = find_default_journal_file()
    logger.debug("Using journal file %s", path)
    return path
