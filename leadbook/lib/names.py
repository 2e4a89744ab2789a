"""
Identifier types for leadbook.

Company and interview names are kept apart from free-text fields so they
can't be mixed up by accident. No normalization: case and whitespace count.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class CompanyName:
    """Name of a company, used as the key of a lead store."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class InterviewName:
    """Name or stage of an interview, scoped to one lead."""
    value: str

    def __str__(self) -> str:
        return self.value
