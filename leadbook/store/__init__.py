"""
Lead store core for leadbook.

Entity model, company -> positions indexing, status timeline, todo/wait
lifecycle and the close-and-archive transfer between two stores.
"""

from leadbook.store.models import Interview, Lead, Todo, Wait
from leadbook.store.leads import LeadStore
from leadbook.store.persistence import load_store, save_store
from leadbook.store.archive import archive_lead, close_and_archive

__all__ = [
    "Interview",
    "Lead",
    "Todo",
    "Wait",
    "LeadStore",
    "load_store",
    "save_store",
    "archive_lead",
    "close_and_archive",
]
