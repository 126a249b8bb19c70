"""
Jett - a personal task tracker driven by short text commands.

Tasks are to-dos, deadlines and date-ranged events, kept in a plain text
file with one task per line.
"""

from .version import VERSION
from .models import TaskKind, Task, Todo, Deadline, Event
from .tasklist import TaskList
from .storage import Storage
from .parser import Command, get_greeting, respond_to_user
from .app import Jett

__version__ = VERSION

__all__ = [
    "VERSION",
    "TaskKind",
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "TaskList",
    "Storage",
    "Command",
    "get_greeting",
    "respond_to_user",
    "Jett",
]
