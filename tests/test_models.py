"""Tests for the Task record."""

from datetime import datetime, timedelta, timezone

import pytest

from task_journal.models import Task


CREATED = datetime(2024, 3, 1, 9, 15, 42, 500000, tzinfo=timezone.utc)


def local_stamp(dt: datetime) -> str:
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


class TestNew:
    """Test Task.new construction."""

    def test_captures_current_time(self):
        before = datetime.now(timezone.utc)
        task = Task.new("buy milk")
        after = datetime.now(timezone.utc)

        assert task.text == "buy milk"
        assert task.created_at.tzinfo is not None
        assert before <= task.created_at <= after

    def test_accepts_any_text(self):
        """Empty and very long text are not validated."""
        assert Task.new("").text == ""
        assert Task.new("x" * 500).text == "x" * 500

    def test_is_immutable(self):
        task = Task.new("buy milk")
        with pytest.raises(AttributeError):
            task.text = "walk dog"  # type: ignore[misc]


class TestSerialization:
    """Test the stored form of a task."""

    def test_to_dict_uses_epoch_seconds(self):
        task = Task("buy milk", CREATED)
        assert task.to_dict() == {"text": "buy milk", "created_at": 1709284542}

    def test_local_offset_stored_as_utc(self):
        """The same instant stores the same value whatever its offset."""
        local = CREATED.astimezone(timezone(timedelta(hours=-5)))
        assert Task("t", local).to_dict() == Task("t", CREATED).to_dict()

    def test_round_trip_drops_subseconds(self):
        task = Task("buy milk", CREATED)
        loaded = Task.from_dict(task.to_dict())

        assert loaded.text == task.text
        assert loaded.created_at == CREATED.replace(microsecond=0)
        assert loaded.created_at.tzinfo is not None

    def test_same_second_tasks_become_indistinguishable(self):
        first = Task("a", CREATED.replace(microsecond=1))
        second = Task("a", CREATED.replace(microsecond=999999))
        assert first != second
        assert Task.from_dict(first.to_dict()) == Task.from_dict(second.to_dict())

    @pytest.mark.parametrize(
        "data",
        [
            {"text": "no timestamp"},
            {"created_at": 1709284542},
            {"text": 42, "created_at": 1709284542},
            {"text": "float", "created_at": 1709284542.5},
            {"text": "string", "created_at": "1709284542"},
            {"text": "bool", "created_at": True},
            {"text": "huge", "created_at": 10**20},
            ["not", "an", "object"],
        ],
    )
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            Task.from_dict(data)


class TestDisplay:
    """Test the human-readable task line."""

    def test_pads_text_to_fifty_columns(self):
        line = str(Task("buy milk", CREATED))
        assert line == f"{'buy milk':<50} [{local_stamp(CREATED)}]"
        assert line.index("[") == 51

    def test_long_text_not_truncated(self):
        text = "a" * 80
        assert str(Task(text, CREATED)) == f"{text} [{local_stamp(CREATED)}]"
