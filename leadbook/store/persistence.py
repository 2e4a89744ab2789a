"""
Whole-document persistence for lead stores.

A store is one JSON object: company name -> list of leads. Loading a missing
file gives an empty store; saving overwrites the file in full. There is no
locking and no atomic replace: concurrent writers race and the last one wins.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from leadbook.lib.errors import PersistenceFailure
from leadbook.lib.names import CompanyName, InterviewName
from leadbook.lib.timeparse import parse_iso
from leadbook.lib.validate import ValidationError, validate_before_write, validate_file
from leadbook.store.leads import LeadStore
from leadbook.store.models import Interview, Lead, Todo, Wait

logger = logging.getLogger(__name__)

SCHEMA_NAME = "leads"


def _format_time(value: datetime) -> str:
    return value.isoformat()


def _parse_time(value: str) -> datetime:
    return parse_iso(value)


def lead_to_dict(lead: Lead) -> dict:
    """Serialize a lead, leaving out empty collections."""
    data = {"position": lead.position, "source": lead.source}
    if lead.notes:
        data["notes"] = {category: list(entries) for category, entries in lead.notes.items()}
    if lead.interviews:
        data["interviews"] = [
            [name.value, {"pre_notes": list(iv.pre_notes), "post_notes": list(iv.post_notes)}]
            for name, iv in lead.interviews
        ]
    if lead.red_flags:
        data["red_flags"] = list(lead.red_flags)
    if lead.status_updates:
        data["status_updates"] = {
            _format_time(time): text for time, text in sorted(lead.status_updates.items())
        }
    if lead.todo:
        data["todo"] = [
            {"action": t.action, "deadline": _format_time(t.deadline)} for t in lead.todo
        ]
    if lead.wait:
        data["wait"] = [
            {"action": w.action, "expected": _format_time(w.expected) if w.expected else None}
            for w in lead.wait
        ]
    return data


def lead_from_dict(data: dict) -> Lead:
    """Rebuild a lead from its document form.

    Raises:
        ValueError: if a timestamp can't be parsed
    """
    status_updates = {
        _parse_time(time): text for time, text in data.get("status_updates", {}).items()
    }
    return Lead(
        position=data["position"],
        source=data["source"],
        notes={category: list(entries) for category, entries in data.get("notes", {}).items()},
        interviews=[
            (
                InterviewName(name),
                Interview(
                    pre_notes=list(iv.get("pre_notes", [])),
                    post_notes=list(iv.get("post_notes", [])),
                ),
            )
            for name, iv in data.get("interviews", [])
        ],
        red_flags=list(data.get("red_flags", [])),
        status_updates=dict(sorted(status_updates.items())),
        todo=[
            Todo(action=t["action"], deadline=_parse_time(t["deadline"]))
            for t in data.get("todo", [])
        ],
        wait=[
            Wait(
                action=w["action"],
                expected=_parse_time(w["expected"]) if w.get("expected") else None,
            )
            for w in data.get("wait", [])
        ],
    )


def store_to_document(store: LeadStore) -> dict:
    return {
        company.value: [lead_to_dict(lead) for lead in positions]
        for company, positions in store
    }


def store_from_document(document: dict) -> LeadStore:
    return LeadStore({
        CompanyName(company): [lead_from_dict(lead) for lead in positions]
        for company, positions in document.items()
    })


def load_store(path: Path) -> LeadStore:
    """Load a store from `path`, or an empty one if the file doesn't exist.

    Raises:
        PersistenceFailure: if the file can't be read, isn't valid JSON,
            or doesn't match the store schema
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No store at {path}, starting empty")
        return LeadStore()

    try:
        document = validate_file(path, SCHEMA_NAME)
        store = store_from_document(document)
    except ValidationError as e:
        raise PersistenceFailure(path, e.reason) from e
    except ValueError as e:
        raise PersistenceFailure(path, f"malformed content: {e}") from e
    except OSError as e:
        raise PersistenceFailure(path, f"cannot read: {e}") from e

    logger.debug(f"Loaded {store.count()} lead(s) at {len(store)} company(s) from {path}")
    return store


def save_store(store: LeadStore, path: Path) -> None:
    """Overwrite `path` with the full contents of `store`.

    Raises:
        PersistenceFailure: if the document is invalid or can't be written
    """
    path = Path(path)
    document = store_to_document(store)

    try:
        validate_before_write(document, SCHEMA_NAME, path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except ValidationError as e:
        raise PersistenceFailure(path, e.reason) from e
    except OSError as e:
        raise PersistenceFailure(path, f"cannot write: {e}") from e

    logger.debug(f"Saved {store.count()} lead(s) to {path}")
