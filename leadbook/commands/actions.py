"""
Typed commands and the dispatcher that applies them to a lead store.

Each command kind is a frozen dataclass; `Command` is the closed union of
them. `apply_command` is the only place that maps a command onto store and
lead operations, so a new kind needs a new dataclass, a new entry in
`Command` and a new branch here.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union, get_args

from leadbook.lib.names import CompanyName, InterviewName
from leadbook.store.leads import LeadStore
from leadbook.store.models import Lead, Todo, Wait


@dataclass(frozen=True)
class NewLead:
    company: CompanyName
    position: str
    source: str


@dataclass(frozen=True)
class CloseLead:
    company: CompanyName
    index: Optional[int]
    reason: str


@dataclass(frozen=True)
class AddStatus:
    company: CompanyName
    index: Optional[int]
    text: str


@dataclass(frozen=True)
class AddNote:
    company: CompanyName
    index: Optional[int]
    category: str
    text: str


@dataclass(frozen=True)
class AddDetail:
    """A detail like "Salary" or "Open to remote"."""
    company: CompanyName
    index: Optional[int]
    kind: str
    text: str


@dataclass(frozen=True)
class AddRedFlag:
    company: CompanyName
    index: Optional[int]
    text: str


@dataclass(frozen=True)
class PreInterview:
    company: CompanyName
    index: Optional[int]
    interview: InterviewName
    notes: str
    planned: Optional[datetime] = None
    new_entry: bool = False


@dataclass(frozen=True)
class PostInterview:
    company: CompanyName
    index: Optional[int]
    interview: InterviewName
    notes: str
    held_on: Optional[datetime] = None


@dataclass(frozen=True)
class AddTodo:
    company: CompanyName
    index: Optional[int]
    action: str
    deadline: datetime


@dataclass(frozen=True)
class CompleteTodo:
    company: CompanyName
    index: Optional[int]
    task: int


@dataclass(frozen=True)
class AddWait:
    company: CompanyName
    index: Optional[int]
    action: str
    expected: Optional[datetime] = None


@dataclass(frozen=True)
class CompleteWait:
    company: CompanyName
    index: Optional[int]
    task: int


Command = Union[
    NewLead,
    CloseLead,
    AddStatus,
    AddNote,
    AddDetail,
    AddRedFlag,
    PreInterview,
    PostInterview,
    AddTodo,
    CompleteTodo,
    AddWait,
    CompleteWait,
]

COMMAND_TYPES = get_args(Command)

# Result of apply_command: new index for NewLead, the detached lead for
# CloseLead, the removed task for Complete*, None otherwise.
Outcome = Union[int, Lead, Todo, Wait, None]


def apply_command(store: LeadStore, command: Command, time: datetime) -> Outcome:
    """
    Apply `command` to `store` at `time`.

    Raises:
        NotFound, Ambiguous, OutOfRange: from position or task resolution
        TypeError: if `command` is not one of the known kinds
    """
    if not isinstance(command, COMMAND_TYPES):
        raise TypeError(f"Unknown command: {type(command).__name__}")

    if isinstance(command, NewLead):
        return store.new_lead(command.company, command.position, command.source)

    if isinstance(command, CloseLead):
        return store.close_lead(time, command.company, command.index, command.reason)

    lead = store.resolve(command.company, command.index)

    if isinstance(command, AddStatus):
        lead.add_status(time, command.text)
    elif isinstance(command, AddNote):
        lead.add_note(command.category, command.text)
    elif isinstance(command, AddDetail):
        lead.add_detail(command.kind, command.text)
    elif isinstance(command, AddRedFlag):
        lead.add_red_flag(command.text)
    elif isinstance(command, PreInterview):
        lead.pre_interview(time, command.interview, command.notes,
                           planned=command.planned, new_entry=command.new_entry)
    elif isinstance(command, PostInterview):
        lead.post_interview(time, command.interview, command.notes, held_on=command.held_on)
    elif isinstance(command, AddTodo):
        lead.add_todo(time, command.action, command.deadline)
    elif isinstance(command, CompleteTodo):
        return lead.complete_todo(time, command.task)
    elif isinstance(command, AddWait):
        lead.add_wait(time, command.action, command.expected)
    elif isinstance(command, CompleteWait):
        return lead.complete_wait(time, command.task)

    return None
