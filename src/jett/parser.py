"""
Command interpretation.

One line of user input is classified by its first word and executed
against a TaskList. Replies are plain strings; anything the user got
wrong is raised as ValidationError with a message meant for them.
"""
import re
from enum import Enum
from typing import List, Optional, Tuple

from .logs import get_logger
from .models import Deadline, Event, Task, Todo
from .recovery import InvalidDate, InvalidRange, ValidationError
from .tasklist import TaskList

log = get_logger("parser")

GREETING = "Hello! I'm Jett\nWhat can I do for you?"
FAREWELL = "Bye. Hope to see you again soon!"
EMPTY_LIST = "Your list is empty."
NO_MATCHES = "No matching tasks found."
DATE_FORMATS_HINT = "Use valid date format, e.g. 2025-09-06, 6/9/2025, Sep 6 2025"
DEADLINE_EXAMPLE = "(e.g. deadline complete report /by Sep 6 2025)"
EVENT_EXAMPLE = "(e.g. event camp /from Sep 6 2025 /to Sep 7 2025)"
USAGE = """This is not a valid command. Use one of the following:
1. list [/alphabetical|/date|/type]
2. todo <description>
3. deadline <description> /by <date>
4. event <description> /from <start date> /to <end date>
5. mark <task number>
6. unmark <task number>
7. delete <task number>
8. find <keyword>
9. bye"""

TASK_NUMBER_PATTERN = re.compile(r'^[0-9]+$')

class Command(Enum):
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    DELETE = "delete"
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"
    FIND = "find"
    BYE = "bye"
    INVALID = "invalid"

    @classmethod
    def from_input(cls, user_input: str) -> 'Command':
        """Classify a line by its first word, ignoring case."""
        words = user_input.split(maxsplit=1)
        if not words:
            return cls.INVALID
        try:
            return cls(words[0].lower())
        except ValueError:
            return cls.INVALID

    @property
    def is_mutating(self) -> bool:
        return self in MUTATING_COMMANDS

MUTATING_COMMANDS = frozenset({
    Command.MARK, Command.UNMARK, Command.DELETE,
    Command.TODO, Command.DEADLINE, Command.EVENT,
})

def get_greeting() -> str:
    return GREETING

def _arguments(user_input: str) -> str:
    """Everything after the command word, trimmed."""
    words = user_input.strip().split(maxsplit=1)
    return words[1].strip() if len(words) > 1 else ""

def _count_line(task_list: TaskList) -> str:
    size = len(task_list)
    noun = "task" if size == 1 else "tasks"
    return f"Now you have {size} {noun} in the list."

def _added(task: Task, task_list: TaskList) -> str:
    return f"Got it. I've added this task:\n  {task}\n{_count_line(task_list)}"

def _task_number(user_input: str, action: str, task_list: TaskList) -> int:
    """Read the 1-based task number following the command word; extra words are ignored."""
    parts = user_input.split()
    if len(parts) < 2:
        raise ValidationError(f"Specify a task number (e.g. {action} 2)")
    number = parts[1]
    if not TASK_NUMBER_PATTERN.match(number) or int(number) == 0:
        raise ValidationError(f"Key in a valid task number (e.g. {action} 2)")
    task_number = int(number)
    if task_number > len(task_list):
        raise ValidationError(f"I can't find task {task_number}. Use 'list' to see valid task numbers.")
    return task_number

def _numbered(tasks: List[Task]) -> str:
    return "\n".join(f"{n}. {task}" for n, task in enumerate(tasks, start=1))

def _bulleted(header: str, tasks: List[Task]) -> str:
    return "\n".join([header] + [f"- {task}" for task in tasks])

def _list(user_input: str, task_list: TaskList) -> str:
    modifiers = user_input.split()[1:]
    if len(modifiers) > 1:
        raise ValidationError("Use at most one of /alphabetical, /date or /type (e.g. list /date)")

    if not modifiers:
        if task_list.is_empty:
            return EMPTY_LIST
        return "Here are the tasks in your list:\n" + _numbered(list(task_list))

    modifier = modifiers[0].lower()
    if modifier == "/alphabetical":
        header, view = "Here are your tasks in alphabetical order:", task_list.sorted_alphabetically
    elif modifier == "/date":
        header, view = "Here are your tasks in date order:", task_list.sorted_by_date
    elif modifier == "/type":
        header, view = "Here are your tasks by type:", task_list.sorted_by_type
    else:
        raise ValidationError(f"I don't know how to sort by '{modifiers[0]}'. "
                              "Use list /alphabetical, list /date or list /type")

    if task_list.is_empty:
        return EMPTY_LIST
    return _bulleted(header, view())

def _mark(user_input: str, task_list: TaskList) -> str:
    task = task_list.get(_task_number(user_input, "mark", task_list) - 1)
    task.mark()
    return f"Nice! I've marked this task as done:\n  {task}"

def _unmark(user_input: str, task_list: TaskList) -> str:
    task = task_list.get(_task_number(user_input, "unmark", task_list) - 1)
    task.unmark()
    return f"OK, I've marked this task as not done yet:\n  {task}"

def _delete(user_input: str, task_list: TaskList) -> str:
    removed = task_list.remove(_task_number(user_input, "delete", task_list) - 1)
    return f"Noted. I've removed this task:\n  {removed}\n{_count_line(task_list)}"

def _todo(user_input: str, task_list: TaskList) -> str:
    description = _arguments(user_input)
    if not description:
        raise ValidationError("Fill in the description of your todo (e.g. todo read book)")
    return _added(task_list.add(Todo(description=description)), task_list)

def _split_on(text: str, delimiter: str) -> Optional[Tuple[str, str]]:
    before, found, after = text.partition(delimiter)
    if not found:
        return None
    return before.strip(), after.strip()

def _deadline(user_input: str, task_list: TaskList) -> str:
    arguments = _arguments(user_input)
    if not arguments:
        raise ValidationError(f"Fill in the description of your deadline {DEADLINE_EXAMPLE}")
    parts = _split_on(arguments, "/by")
    if parts is None:
        raise ValidationError(f"Missing '/by'. {DEADLINE_EXAMPLE}")
    description, by = parts
    if not description or not by:
        raise ValidationError(f"Fill in the description and date of your deadline {DEADLINE_EXAMPLE}")
    try:
        task = Deadline(description=description, by=by)
    except InvalidDate as e:
        raise ValidationError(DATE_FORMATS_HINT) from e
    return _added(task_list.add(task), task_list)

def _event(user_input: str, task_list: TaskList) -> str:
    arguments = _arguments(user_input)
    if not arguments:
        raise ValidationError(f"Fill in the description of your event {EVENT_EXAMPLE}")
    parts = _split_on(arguments, "/from")
    if parts is None:
        raise ValidationError(f"Missing '/from'. {EVENT_EXAMPLE}")
    description, span = parts
    dates = _split_on(span, "/to")
    if dates is None:
        raise ValidationError(f"Missing '/to'. {EVENT_EXAMPLE}")
    start, end = dates
    if not description or not start or not end:
        raise ValidationError(f"Fill in the description, start and end date {EVENT_EXAMPLE}")
    try:
        task = Event(description=description, start=start, end=end)
    except InvalidDate as e:
        raise ValidationError(DATE_FORMATS_HINT) from e
    except InvalidRange as e:
        raise ValidationError(f"The end date cannot be before the start date. {EVENT_EXAMPLE}") from e
    return _added(task_list.add(task), task_list)

def _find(user_input: str, task_list: TaskList) -> str:
    keyword = _arguments(user_input)
    if not keyword:
        raise ValidationError("Provide a keyword (e.g. find book)")
    matches = task_list.find(keyword)
    if not matches:
        return NO_MATCHES
    return "Here are the matching tasks in your list:\n" + _numbered(matches)

_HANDLERS = {
    Command.LIST: _list,
    Command.MARK: _mark,
    Command.UNMARK: _unmark,
    Command.DELETE: _delete,
    Command.TODO: _todo,
    Command.DEADLINE: _deadline,
    Command.EVENT: _event,
    Command.FIND: _find,
}

def respond_to_user(user_input: str, task_list: TaskList) -> str:
    """
    Execute one line of input against the task list.

    Args:
        user_input: The raw line as typed.
        task_list: The list to read or modify.

    Returns:
        The reply to show the user.

    Raises:
        ValidationError: if the input is blank, malformed, out of range or
            not a known command.
    """
    if not user_input or not user_input.strip():
        raise ValidationError("What can I do for you?")

    command = Command.from_input(user_input)
    log.debug(f"Classified {user_input!r} as {command.name}")

    if command is Command.BYE:
        return FAREWELL
    if command is Command.INVALID:
        raise ValidationError(USAGE)
    return _HANDLERS[command](user_input.strip(), task_list)
