"""
Storage - line-oriented persistence for the task list.

Each task is written on its own line in the same form it is shown to the
user, e.g. ``[D][X] return book (by: Sep 6 2025)``. Loading is tolerant:
a line that cannot be understood is dropped and the rest of the file is
still loaded.
"""
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError as ModelValidationError

from .logs import get_logger
from .models import Deadline, Event, Task, Todo
from .recovery import FileOperationError, ValidationError
from .tasklist import TaskList

log = get_logger("storage")

DEFAULT_DATA_FILE = Path("data") / "jett.txt"

STATUS_DONE = "[X]"
STATUS_OPEN = "[ ]"

@dataclass(frozen=True)
class Parsed:
    task: Task

@dataclass(frozen=True)
class Skipped:
    reason: str

ParseResult = Union[Parsed, Skipped]

def serialize(tasks: Iterable[Task]) -> str:
    """Render tasks one per line, each line newline-terminated."""
    return "".join(f"{task.to_text()}\n" for task in tasks)

def _split_metadata(rest: str) -> Optional[Tuple[str, str]]:
    # Last paren pair, so descriptions may contain parentheses themselves
    open_at = rest.rfind("(")
    close_at = rest.rfind(")")
    if open_at == -1 or close_at == -1 or open_at > close_at:
        return None
    return rest[:open_at].strip(), rest[open_at + 1:close_at].strip()

def _after(marker: str, text: str) -> Optional[str]:
    at = text.find(marker)
    if at == -1:
        return None
    return text[at + len(marker):].strip()

def _build_deadline(rest: str) -> ParseResult:
    parts = _split_metadata(rest)
    if parts is None:
        return Skipped("missing or mismatched parentheses")
    description, metadata = parts
    by = _after("by:", metadata)
    if by is None:
        return Skipped("missing 'by:' marker")
    return Parsed(Deadline(description=description, by=by))

def _build_event(rest: str) -> ParseResult:
    parts = _split_metadata(rest)
    if parts is None:
        return Skipped("missing or mismatched parentheses")
    description, metadata = parts
    span = _after("from:", metadata)
    if span is None:
        return Skipped("missing 'from:' marker")
    to_at = span.find("to:")
    if to_at == -1:
        return Skipped("missing 'to:' marker")
    start = span[:to_at].strip()
    end = span[to_at + len("to:"):].strip()
    return Parsed(Event(description=description, start=start, end=end))

def parse_line(line: str) -> ParseResult:
    """
    Parse one persisted line.

    The line must open with a fixed ``[K][S]`` prefix where K is T, D or E
    and S is ``X`` or a space. Never raises; anything unusable comes back
    as Skipped.
    """
    line = line.strip()
    if len(line) < 6 or line[0] != "[" or line[2] != "]":
        return Skipped("missing kind token")

    kind = line[1]
    status = line[3:6]
    if status not in (STATUS_DONE, STATUS_OPEN):
        return Skipped("missing status token")
    rest = line[6:].strip()

    try:
        if kind == "T":
            result = Parsed(Todo(description=rest))
        elif kind == "D":
            result = _build_deadline(rest)
        elif kind == "E":
            result = _build_event(rest)
        else:
            return Skipped(f"unknown task kind {kind!r}")
    except (ValidationError, ModelValidationError) as e:
        return Skipped(str(e))

    if isinstance(result, Parsed) and status == STATUS_DONE:
        result.task.mark()
    return result

def deserialize(text: str) -> List[Task]:
    """Rebuild tasks from persisted text, dropping lines that fail to parse."""
    tasks = []
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        result = parse_line(line)
        if isinstance(result, Skipped):
            log.debug(f"Skipping line {number} ({result.reason}): {line!r}")
            continue
        tasks.append(result.task)
    return tasks

def atomic_write(file_path: Union[Path, str], text: str, create_dirs: bool = True) -> bool:
    """
    Write text to a file by replacing it in one step.

    Raises:
        FileOperationError: if the directory or file cannot be written.
    """
    file_path = Path(file_path)
    temp_path = None

    try:
        if create_dirs:
            file_path.parent.mkdir(parents=True, exist_ok=True)

        # Temporary file lives beside the target so os.replace stays on one filesystem
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=file_path.parent,
                                         prefix=f".{file_path.name}.", suffix='.tmp',
                                         delete=False) as temp_file:
            temp_path = temp_file.name
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except OSError as e:
        if temp_path is not None and os.path.exists(temp_path):
            try:
                os.unlink(temp_path)
            except OSError as cleanup_error:
                log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

class Storage:
    """Reads and writes the task list at a fixed path."""

    def __init__(self, file_path: Union[Path, str] = DEFAULT_DATA_FILE):
        self.file_path = Path(file_path)

    def load(self) -> List[Task]:
        """
        Load tasks from disk.

        Returns:
            The tasks that could be parsed; an empty list if the file is
            missing or cannot be read.
        """
        if not self.file_path.exists():
            log.info(f"No data file at {self.file_path}; starting empty")
            return []

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Could not load data from {self.file_path}: {e}")
            return []

        tasks = deserialize(text)
        log.info(f"Loaded {len(tasks)} task(s) from {self.file_path}")
        return tasks

    def save(self, task_list: TaskList) -> bool:
        """Persist the whole list. Failures are logged and reported via the return value."""
        try:
            return atomic_write(self.file_path, serialize(task_list))
        except FileOperationError as e:
            log.warning(f"Tasks were not saved: {e}")
            return False
