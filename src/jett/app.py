"""
Jett - the chat session tying the command parser to persistent storage.
"""
from pathlib import Path
from typing import Union

from .logs import get_logger
from .parser import Command, get_greeting, respond_to_user
from .recovery import ValidationError
from .storage import DEFAULT_DATA_FILE, Storage
from .tasklist import TaskList

log = get_logger("app")

GENERIC_ERROR = "Try again."

class Jett:
    """A single chat session over one data file."""

    def __init__(self, file_path: Union[Path, str] = DEFAULT_DATA_FILE):
        self.storage = Storage(file_path)
        self.tasks = TaskList(self.storage.load())

    def get_greeting(self) -> str:
        return get_greeting()

    def get_response(self, user_input: str) -> str:
        """
        Reply to one line of input, saving the list after any successful change.

        Never raises: input mistakes come back as their message and anything
        unexpected as a generic retry prompt.
        """
        try:
            response = respond_to_user(user_input, self.tasks)
        except ValidationError as e:
            return str(e)
        except Exception:
            log.exception(f"Unexpected failure handling {user_input!r}")
            return GENERIC_ERROR

        if Command.from_input(user_input).is_mutating:
            self.storage.save(self.tasks)
        return response

    def is_exit(self, user_input: str) -> bool:
        return Command.from_input(user_input) is Command.BYE
