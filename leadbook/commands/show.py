"""
leads show - Show everything recorded for one lead.
"""

from datetime import datetime

from leadbook.lib.config import LeadbookConfig
from leadbook.lib.names import CompanyName
from leadbook.store.models import Lead
from leadbook.store.persistence import load_store


def _stamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def format_lead(company: CompanyName, index: int, lead: Lead) -> list[str]:
    """Render a lead as lines of text, timeline oldest first."""
    lines = [
        f"{company} #{index}: {lead.position}",
        f"Source: {lead.source}",
    ]

    if lead.status_updates:
        lines.append("")
        lines.append("Timeline")
        for time, text in lead.status_updates.items():
            lines.append(f"  {_stamp(time)}  {text}")

    if lead.todo:
        lines.append("")
        lines.append("Todo")
        for i, todo in enumerate(lead.todo):
            lines.append(f"  [{i}] {todo.action} (by {_stamp(todo.deadline)})")

    if lead.wait:
        lines.append("")
        lines.append("Waiting on")
        for i, wait in enumerate(lead.wait):
            expected = f" (expected {_stamp(wait.expected)})" if wait.expected else ""
            lines.append(f"  [{i}] {wait.action}{expected}")

    for name, interview in lead.interviews:
        lines.append("")
        lines.append(f"Interview: {name}")
        for note in interview.pre_notes:
            lines.append(f"  before: {note}")
        for note in interview.post_notes:
            lines.append(f"  after:  {note}")

    for category, entries in lead.notes.items():
        lines.append("")
        lines.append(f"{category}")
        for entry in entries:
            lines.append(f"  - {entry}")

    if lead.red_flags:
        lines.append("")
        lines.append("Red flags")
        for flag in lead.red_flags:
            lines.append(f"  ! {flag}")

    return lines


def cmd_show(args, config: LeadbookConfig) -> int:
    """Show one lead. Raises the usual resolution errors if ambiguous."""
    store = load_store(config.data_path)
    company = CompanyName(args.company)
    lead = store.resolve(company, args.position)
    index = 0 if args.position is None else args.position

    for line in format_lead(company, index, lead):
        print(line)

    return 0
