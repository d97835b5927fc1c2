"""Task record: construction, serialization and display rules."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

# Minimum width of the text column in a rendered task line
TEXT_WIDTH = 50
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class Task:
    """A single journal entry.

    Attributes:
        text: Free-form description, stored as given
        created_at: Timezone-aware creation time
    """

    text: str
    created_at: datetime

    @classmethod
    def new(cls, text: str) -> "Task":
        """Create a task stamped with the current time."""
        return cls(text=text, created_at=datetime.now(timezone.utc))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from its stored form.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        if "text" not in data or "created_at" not in data:
            raise ValueError("task is missing 'text' or 'created_at'")

        text = data["text"]
        created_at = data["created_at"]
        if not isinstance(text, str):
            raise ValueError(f"'text' must be a string, got {type(text).__name__}")
        # bool is an int subclass, but true/false is not a timestamp
        if isinstance(created_at, bool) or not isinstance(created_at, int):
            raise ValueError(
                f"'created_at' must be an integer, got {type(created_at).__name__}"
            )

        try:
            timestamp = datetime.fromtimestamp(created_at, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"'created_at' out of range: {created_at}") from e
        return cls(text=text, created_at=timestamp)

    @property
    def timestamp(self) -> int:
        """Creation time as whole UTC epoch seconds."""
        return math.floor(self.created_at.timestamp())

    def to_dict(self) -> Dict[str, Any]:
        """Stored form; sub-second precision is dropped."""
        return {"text": self.text, "created_at": self.timestamp}

    def __str__(self) -> str:
        """Return the display line, e.g. ``buy milk    [2024-03-01 09:15]``."""
        local = self.created_at.astimezone().strftime(DISPLAY_TIME_FORMAT)
        return f"{self.text:<{TEXT_WIDTH}} [{local}]"
