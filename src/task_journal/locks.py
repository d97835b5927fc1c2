"""Advisory locking around one journal read-modify-write cycle.

The lock is taken on a sidecar file next to the journal rather than on the
journal itself, because the journal is replaced by rename on every write
and a lock held on the old inode would not exclude the next writer.

Lock file: {journal}.lock containing the PID of the last holder.
"""

import fcntl
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def get_lock_path(journal_path: Path) -> Path:
    """Get the lock file path for a journal file."""
    return journal_path.with_name(journal_path.name + ".lock")


@contextmanager
def journal_lock(journal_path: Path) -> Iterator[Path]:
    """Hold an exclusive flock for the duration of the context.

    Blocks until the lock is available. The lock file is created if
    needed and left in place afterwards.

    Args:
        journal_path: Path to the journal file being protected

    Yields:
        Path to the lock file
    """
    lock_path = get_lock_path(journal_path)

    fd = os.open(str(lock_path), os.O_RDWR | os.O_CREAT, 0o644)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX)
        logger.debug("Acquired lock %s", lock_path)

        os.ftruncate(fd, 0)
        os.write(fd, f"{os.getpid()}\n".encode())

        yield lock_path
    finally:
        # flock is also released on close, unlock explicitly anyway
        fcntl.flock(fd, fcntl.LOCK_UN)
        os.close(fd)
        logger.debug("Released lock %s", lock_path)
