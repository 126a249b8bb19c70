from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from enum import Enum
from typing import ClassVar, Literal, Optional

from .dates import format_date, parse_date
from .recovery import InvalidRange, ValidationError

class TaskKind(Enum):
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"

def _coerce_date(v):
    if isinstance(v, str):
        return parse_date(v)
    return v

class Task(BaseModel):
    """Fields and behaviour shared by every task kind."""

    TAG: ClassVar[str] = ""

    description: str = Field(frozen=True, description="What needs doing; never blank")
    done: bool = Field(default=False, description="Whether the task has been completed")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        v = v.strip()
        if not v:
            raise ValidationError("Description cannot be blank.")
        # Each task is stored as one line
        if len(v.splitlines()) > 1:
            raise ValidationError("Description must fit on a single line.")
        return v

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    @property
    def sort_date(self) -> Optional[date]:
        return None

    def mark(self):
        self.done = True

    def unmark(self):
        self.done = False

    def details(self) -> str:
        """Trailing metadata appended after the description, if any."""
        return ""

    def to_text(self) -> str:
        text = f"[{self.TAG}][{self.status_icon}] {self.description}"
        details = self.details()
        if details:
            text += f" ({details})"
        return text

    def __str__(self) -> str:
        return self.to_text()

class Todo(Task):
    TAG: ClassVar[str] = "T"

    kind: Literal[TaskKind.TODO] = Field(default=TaskKind.TODO, frozen=True)

class Deadline(Task):
    TAG: ClassVar[str] = "D"

    kind: Literal[TaskKind.DEADLINE] = Field(default=TaskKind.DEADLINE, frozen=True)
    by: date = Field(description="Date the task is due")

    @field_validator('by', mode='before')
    @classmethod
    def parse_by(cls, v):
        return _coerce_date(v)

    @property
    def sort_date(self) -> Optional[date]:
        return self.by

    def details(self) -> str:
        return f"by: {format_date(self.by)}"

class Event(Task):
    TAG: ClassVar[str] = "E"

    kind: Literal[TaskKind.EVENT] = Field(default=TaskKind.EVENT, frozen=True)
    start: date = Field(description="First day of the event")
    end: date = Field(description="Last day of the event")

    @field_validator('start', 'end', mode='before')
    @classmethod
    def parse_dates(cls, v):
        return _coerce_date(v)

    @model_validator(mode='after')
    def validate_range(self):
        if self.end < self.start:
            raise InvalidRange("The end date cannot be before the start date.")
        return self

    @property
    def sort_date(self) -> Optional[date]:
        return self.start

    def details(self) -> str:
        return f"from: {format_date(self.start)} to: {format_date(self.end)}"
