"""task-journal - A small command-line task journal.

Tasks are appended, listed and removed by position, and persisted as a
JSON array in a single journal file (``~/.rusty-journal.json`` by default).

Installation:
    uv tool install .

    # From a checkout
    uv pip install -e .
"""

__version__ = "0.1.0"
