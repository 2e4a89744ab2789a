"""
Read-modify-write executor for mutating commands.

Loads the active store, applies one command, and writes the store back only
if the command succeeded. Closing also loads and writes the archive store:
archive first, then active, with no transaction across the two files.
"""

import logging
from datetime import datetime

from leadbook.commands.actions import (
    AddTodo,
    AddWait,
    CloseLead,
    Command,
    CompleteTodo,
    CompleteWait,
    NewLead,
    Outcome,
    apply_command,
)
from leadbook.lib.config import LeadbookConfig
from leadbook.store.archive import archive_lead
from leadbook.store.persistence import load_store, save_store

logger = logging.getLogger(__name__)


def describe(command: Command, outcome: Outcome) -> str:
    """One-line confirmation for a command that went through."""
    company = command.company
    if isinstance(command, NewLead):
        return f"Added '{command.position}' at {company} as position {outcome}"
    if isinstance(command, CloseLead):
        return f"Closed '{outcome.position}' at {company}: {command.reason}"
    if isinstance(command, CompleteTodo):
        return f"Done: {outcome.action}"
    if isinstance(command, CompleteWait):
        return f"Received: {outcome.action}"
    if isinstance(command, AddTodo):
        return f"Todo added for {company}: {command.action} (by {command.deadline.date().isoformat()})"
    if isinstance(command, AddWait):
        return f"Waiting on {company}: {command.action}"
    return f"Updated {company}"


def execute(command: Command, config: LeadbookConfig, when: datetime) -> str:
    """
    Run a mutating command against the stores named in `config`.

    Returns:
        Confirmation message for the user

    Raises:
        LeadError: nothing has been written when this is raised, except that
            a failed active-store write after a close leaves the archive
            already updated
    """
    active = load_store(config.data_path)
    archive = None
    if isinstance(command, CloseLead):
        # Load up front so a broken archive aborts before anything changes
        archive = load_store(config.archive_path)

    outcome = apply_command(active, command, when)

    if archive is not None:
        archive_lead(archive, command.company, outcome)
        save_store(archive, config.archive_path)

    save_store(active, config.data_path)
    logger.debug(f"{type(command).__name__} applied to {config.data_path}")
    return describe(command, outcome)
