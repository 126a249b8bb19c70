"""Unit tests for the persisted line format and Storage."""

import pytest
from datetime import date
from jett.models import Todo, Deadline, Event
from jett.storage import Storage, Parsed, Skipped, parse_line, serialize, deserialize
from jett.tasklist import TaskList


class TestParseLine:
    """Test parsing of single persisted lines."""

    def test_valid_lines(self):
        """Test every kind, open and done."""
        cases = [
            "[T][ ] test",
            "[T][X] test",
            "[D][ ] test (by: Sep 13 2025)",
            "[D][X] test (by: Sep 13 2025)",
            "[E][ ] test (from: Sep 13 2025 to: Sep 14 2025)",
            "[E][X] test (from: Sep 13 2025 to: Sep 14 2025)",
        ]
        for line in cases:
            result = parse_line(line)
            assert isinstance(result, Parsed)
            assert result.task.to_text() == line

    def test_done_state(self):
        assert parse_line("[T][X] test").task.done is True
        assert parse_line("[T][ ] test").task.done is False

    def test_description_with_parentheses(self):
        """Test that the last paren pair holds the date."""
        result = parse_line("[D][ ] fix (motor) (by: Sep 13 2025)")
        assert isinstance(result, Parsed)
        assert result.task.description == "fix (motor)"
        assert result.task.by == date(2025, 9, 13)

    @pytest.mark.parametrize("line", [
        # Corrupted data
        " ",
        "test",
        # Bracket shape
        "[T test",
        "[T] test",
        "[T][X test",
        "[T][x] test",
        # Unknown kinds
        "[ ][ ] test",
        "[A][ ] test",
        # Deadline parentheses
        "[D][ ] test (by: Sep 13 2025",
        "[D][ ] test by: Sep 13 2025)",
        "[D][ ] test )by: Sep 13 2025(",
        # Deadline markers
        "[D][ ] test (Sep 13 2025)",
        "[D][ ] test (by Sep 13 2025)",
        "[D][ ] test (to: 13 2025)",
        "[D][ ] test (from: Sep 13 2025)",
        # Event parentheses
        "[E][ ] test (from: Sep 13 2025 to: Sep 14 2025",
        "[E][ ] test from: Sep 13 2025 to: Sep 14 2025)",
        "[E][ ] test )from: Sep 13 2025 to: Sep 14 2025(",
        # Event markers
        "[E][ ] test (from: Sep 13 2025 to Sep 14 2025)",
        "[E][ ] test (from Sep 13 2025 to: Sep 14 2025)",
        "[E][ ] test (from: Sep 13 2025 Sep 14 2025)",
        "[E][ ] test (Sep 13 2025 to: Sep 14 2025)",
        "[E][ ] test (Sep 13 2025 Sep 14 2025)",
        # Content problems
        "[D][ ] test (by: someday)",
        "[E][ ] test (from: Sep 14 2025 to: Sep 13 2025)",
        "[T][ ]",
        "[D][ ] (by: Sep 13 2025)",
    ])
    def test_invalid_lines_are_skipped(self, line):
        result = parse_line(line)
        assert isinstance(result, Skipped)
        assert result.reason


class TestCodec:
    """Test whole-file serialize and deserialize."""

    def sample(self):
        deadline = Deadline(description="return book (library)", by="2025-09-06")
        deadline.mark()
        return [
            Todo(description="read book"),
            deadline,
            Event(description="camp", start="Sep 13 2025", end="Sep 14 2025"),
        ]

    def test_serialize(self):
        assert serialize(self.sample()) == (
            "[T][ ] read book\n"
            "[D][X] return book (library) (by: Sep 6 2025)\n"
            "[E][ ] camp (from: Sep 13 2025 to: Sep 14 2025)\n"
        )

    def test_serialize_empty(self):
        assert serialize([]) == ""

    def test_round_trip(self):
        """Test that a list survives being written and read back."""
        tasks = self.sample()
        restored = deserialize(serialize(tasks))
        assert restored == tasks
        assert serialize(restored) == serialize(tasks)

    def test_round_trip_unusual_whitespace(self):
        """Test that whitespace which is not a line break survives inside descriptions."""
        tasks = [
            Todo(description="tab\tinside"),
            Deadline(description="no\xa0break\xa0space", by="2025-09-06"),
            Event(description="ideographic\u3000space", start="2025-09-06", end="2025-09-07"),
        ]
        assert deserialize(serialize(tasks)) == tasks

    def test_one_line_per_task(self):
        """Test that every task occupies exactly one stored line."""
        tasks = self.sample()
        assert len(serialize(tasks).splitlines()) == len(tasks)

    def test_bad_lines_are_dropped(self):
        """Test that loading continues past corrupt lines."""
        text = "[T][ ] first\n\n   \ngarbage\n[D][ ] bad (by: nope)\n  [T][X] second  \n"
        tasks = deserialize(text)
        assert [t.to_text() for t in tasks] == ["[T][ ] first", "[T][X] second"]


class TestStorage:
    """Test Storage against the file system."""

    def test_missing_file(self, tmp_path):
        assert Storage(tmp_path / "nothing.txt").load() == []

    def test_save_and_load(self, tmp_path):
        """Test that save creates directories and load reads them back."""
        path = tmp_path / "data" / "jett.txt"
        tasks = TaskList([Todo(description="read book"), Deadline(description="report", by="2025-09-06")])

        assert Storage(path).save(tasks) is True
        assert path.read_text(encoding="utf-8") == "[T][ ] read book\n[D][ ] report (by: Sep 6 2025)\n"
        assert Storage(path).load() == list(tasks)

    def test_save_replaces_contents(self, tmp_path):
        path = tmp_path / "jett.txt"
        storage = Storage(path)
        storage.save(TaskList([Todo(description="one"), Todo(description="two")]))
        storage.save(TaskList([Todo(description="three")]))
        assert path.read_text(encoding="utf-8") == "[T][ ] three\n"
        assert [p.name for p in tmp_path.iterdir()] == ["jett.txt"]

    def test_unreadable_file(self, tmp_path):
        """Test that a path that cannot be read loads as empty."""
        path = tmp_path / "jett.txt"
        path.mkdir()
        assert Storage(path).load() == []

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "jett.txt"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert Storage(path).load() == []

    def test_save_failure_is_reported(self, tmp_path):
        """Test that a write failure comes back as False rather than raising."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        assert Storage(blocker / "jett.txt").save(TaskList([Todo(description="x")])) is False
