"""
Lead store: company -> ordered positions.

A company key exists only while it has at least one position. Indices are
positions in the company's list and shift down when an earlier one is closed.
"""

import logging
from datetime import datetime
from typing import Iterator, Optional

from leadbook.lib.errors import Ambiguous, NotFound, OutOfRange
from leadbook.lib.names import CompanyName
from leadbook.store.models import Lead

logger = logging.getLogger(__name__)


class LeadStore:
    """In-memory collection of leads keyed by company.

    Backed by an insertion-ordered dict, so iteration follows the order in
    which companies were first added (or read from disk).
    """

    def __init__(self, leads: Optional[dict[CompanyName, list[Lead]]] = None):
        self.leads: dict[CompanyName, list[Lead]] = {}
        for company, positions in (leads or {}).items():
            if positions:
                self.leads[company] = list(positions)

    def __iter__(self) -> Iterator[tuple[CompanyName, list[Lead]]]:
        return iter(self.leads.items())

    def __len__(self) -> int:
        return len(self.leads)

    def __contains__(self, company: CompanyName) -> bool:
        return company in self.leads

    def companies(self) -> list[CompanyName]:
        return list(self.leads)

    def positions(self, company: CompanyName) -> list[Lead]:
        """Positions for `company`, empty if unknown. Returns a copy."""
        return list(self.leads.get(company, []))

    def count(self) -> int:
        """Total number of leads across all companies."""
        return sum(len(positions) for positions in self.leads.values())

    def new_lead(self, company: CompanyName, position: str, source: str) -> int:
        """Create a lead at `company` and return its index."""
        return self.insert_lead(company, Lead.new(position, source))

    def insert_lead(self, company: CompanyName, lead: Lead) -> int:
        """Append an existing lead to `company` and return its index."""
        positions = self.leads.setdefault(company, [])
        positions.append(lead)
        logger.debug(f"Added '{lead.position}' at {company} as #{len(positions) - 1}")
        return len(positions) - 1

    def _locate(self, company: CompanyName, index: Optional[int]) -> int:
        """Resolve an optional index to a concrete one.

        Raises:
            NotFound: if `company` is unknown
            Ambiguous: if `index` is None and the company has several positions
            OutOfRange: if `index` is past the end
        """
        positions = self.leads.get(company)
        if not positions:
            raise NotFound(f"no such company: '{company}'")

        count = len(positions)
        if index is None:
            if count == 1:
                return 0
            raise Ambiguous(company, count)

        if index < 0 or index >= count:
            raise OutOfRange(company, count, index)
        return index

    def resolve(self, company: CompanyName, index: Optional[int] = None) -> Lead:
        """Find the lead at (company, index). The lead is returned for in-place mutation."""
        resolved = self._locate(company, index)
        return self.leads[company][resolved]

    def close_lead(
        self,
        time: datetime,
        company: CompanyName,
        index: Optional[int],
        reason: str,
    ) -> Lead:
        """Detach a lead, stamp it "Closed: {reason}" and return it.

        The caller owns the returned lead; this store keeps no reference to it.
        The company key is dropped when its last position is closed.
        """
        resolved = self._locate(company, index)
        lead = self.leads[company].pop(resolved)
        lead.add_status(time, f"Closed: {reason}")

        if not self.leads[company]:
            del self.leads[company]

        logger.info(f"Closed '{lead.position}' at {company} (#{resolved}): {reason}")
        return lead
