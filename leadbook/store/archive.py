"""
Close-and-archive transfer between the active and archive stores.

The two stores are separate documents. Callers write the archive first and
the active store second; there is no transaction across the two files, so an
interrupted close can leave the lead in both stores (or lose the close if
the archive write never happened).
"""

import logging
from datetime import datetime
from typing import Optional

from leadbook.lib.names import CompanyName
from leadbook.store.leads import LeadStore
from leadbook.store.models import Lead

logger = logging.getLogger(__name__)


def archive_lead(archive: LeadStore, company: CompanyName, lead: Lead) -> int:
    """Append a closed lead to the archive and return its archive index."""
    index = archive.insert_lead(company, lead)
    logger.info(f"Archived '{lead.position}' at {company} as archive #{index}")
    return index


def close_and_archive(
    active: LeadStore,
    archive: LeadStore,
    time: datetime,
    company: CompanyName,
    index: Optional[int],
    reason: str,
) -> tuple[Lead, int]:
    """Move (company, index) from `active` to `archive`, stamped "Closed: {reason}".

    Nothing changes in either store if the position can't be resolved.

    Returns: (closed lead, its index in the archive)
    """
    lead = active.close_lead(time, company, index, reason)
    return lead, archive_lead(archive, company, lead)
