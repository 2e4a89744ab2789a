"""
Data models for the lead store.

A Lead is one position at one company. It has no identity of its own: it is
addressed by (company, index) in whichever store currently holds it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from leadbook.lib.errors import NotFound
from leadbook.lib.names import InterviewName


@dataclass
class Interview:
    """Notes taken before and after one interview."""
    pre_notes: list[str] = field(default_factory=list)
    post_notes: list[str] = field(default_factory=list)


@dataclass
class Todo:
    """Something the candidate owes, with a deadline."""
    action: str
    deadline: datetime


@dataclass
class Wait:
    """Something the counterparty owes. `expected` may be unknown."""
    action: str
    expected: Optional[datetime] = None


@dataclass
class Lead:
    """One tracked job application.

    `position` and `source` are set at creation and never changed.
    `status_updates` is kept sorted by time (oldest first).
    """
    position: str
    source: str
    notes: dict[str, list[str]] = field(default_factory=dict)
    interviews: list[tuple[InterviewName, Interview]] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)
    status_updates: dict[datetime, str] = field(default_factory=dict)
    todo: list[Todo] = field(default_factory=list)
    wait: list[Wait] = field(default_factory=list)

    @classmethod
    def new(cls, position: str, source: str) -> "Lead":
        """Create a lead, seeding the timeline with "Created" at the current instant."""
        lead = cls(position=position, source=source)
        lead.add_status(datetime.now(timezone.utc), "Created")
        return lead

    def add_note(self, category: str, text: str) -> None:
        self.notes.setdefault(category, []).append(text)

    def add_detail(self, kind: str, text: str) -> None:
        """File a detail such as "Salary" or "Open to remote" as a note."""
        self.add_note(kind, text)

    def add_red_flag(self, text: str) -> None:
        self.red_flags.append(text)

    def add_status(self, time: datetime, text: str) -> None:
        """Record a timeline entry. An entry at the same instant is overwritten."""
        self.status_updates[time] = text
        self.status_updates = dict(sorted(self.status_updates.items()))

    def latest_status(self) -> Optional[tuple[datetime, str]]:
        if not self.status_updates:
            return None
        return next(reversed(self.status_updates.items()))

    def add_todo(self, time: datetime, action: str, deadline: datetime) -> None:
        self.add_status(time, f"TODO: {action}")
        self.todo.append(Todo(action=action, deadline=deadline))

    def complete_todo(self, time: datetime, index: int) -> Todo:
        """Remove todo `index` and log it as done.

        Raises:
            NotFound: if there is no todo at `index`
        """
        if index < 0 or index >= len(self.todo):
            raise NotFound(f"no todo #{index} ({len(self.todo)} pending)")
        done = self.todo.pop(index)
        self.add_status(time, f"DONE: {done.action}")
        return done

    def add_wait(self, time: datetime, action: str, expected: Optional[datetime] = None) -> None:
        self.add_status(time, f"WAITING: {action}")
        self.wait.append(Wait(action=action, expected=expected))

    def complete_wait(self, time: datetime, index: int) -> Wait:
        """Remove wait `index` and log it as received.

        Raises:
            NotFound: if there is no wait at `index`
        """
        if index < 0 or index >= len(self.wait):
            raise NotFound(f"no wait #{index} ({len(self.wait)} pending)")
        received = self.wait.pop(index)
        self.add_status(time, f"RECEIVED: {received.action}")
        return received

    def _interview(self, name: InterviewName, new_entry: bool = False) -> Interview:
        """Most recent interview called `name`, appended if missing or forced."""
        if not new_entry:
            for existing, interview in reversed(self.interviews):
                if existing == name:
                    return interview
        interview = Interview()
        self.interviews.append((name, interview))
        return interview

    def pre_interview(
        self,
        time: datetime,
        name: InterviewName,
        note: str,
        planned: Optional[datetime] = None,
        new_entry: bool = False,
    ) -> None:
        """Add preparation notes for an interview, optionally logging when it is planned."""
        self._interview(name, new_entry).pre_notes.append(note)
        if planned is not None:
            self.add_status(time, f"Interview planned: {name} ({planned.date().isoformat()})")

    def post_interview(
        self,
        time: datetime,
        name: InterviewName,
        note: str,
        held_on: Optional[datetime] = None,
    ) -> None:
        """Add debrief notes for an interview and log that it was held."""
        self._interview(name).post_notes.append(note)
        self.add_status(held_on if held_on is not None else time, f"Interview held: {name}")
