"""
The session's ordered task list and its read-only sorted views.

Insertion order is the display order and the basis for the 1-based task
numbers users type. Sorted views always work on a copy.
"""
from datetime import date
from typing import Iterable, Iterator, List, Optional

from .models import Task, TaskKind

KIND_RANK = {
    TaskKind.TODO: 0,
    TaskKind.DEADLINE: 1,
    TaskKind.EVENT: 2,
}

def alphabetical_key(task: Task):
    return task.description.lower()

def date_key(task: Task):
    is_dated = task.kind is not TaskKind.TODO
    # Undated tasks go after every dated one
    when = task.sort_date or date.max
    return (is_dated, when, KIND_RANK[task.kind], alphabetical_key(task))

def type_key(task: Task):
    return (KIND_RANK[task.kind], alphabetical_key(task))

class TaskList:
    """Ordered, index-addressable collection of tasks."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    def get(self, index: int) -> Task:
        """Return the task at a 0-based index."""
        return self._tasks[index]

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        return task

    def remove(self, index: int) -> Task:
        """Remove and return the task at a 0-based index; later tasks shift down."""
        return self._tasks.pop(index)

    def find(self, keyword: str) -> List[Task]:
        """Tasks whose description contains keyword, ignoring case, in list order."""
        needle = keyword.lower()
        return [t for t in self._tasks if needle in t.description.lower()]

    def sorted_alphabetically(self) -> List[Task]:
        return sorted(self._tasks, key=alphabetical_key)

    def sorted_by_date(self) -> List[Task]:
        return sorted(self._tasks, key=date_key)

    def sorted_by_type(self) -> List[Task]:
        return sorted(self._tasks, key=type_key)
