"""
Filter engine for the ticket list.

A ticket is visible when it passes all three predicates:

- **category**: the selector is ``"All"`` or equals the ticket category.
- **escalate-only**: the flag is off, or the category escalates.
- **query**: empty, or a case-insensitive substring of the summary, the
  requester name or the subject.

There is no ranking.  The result keeps the input order and the function is
pure, so applying it twice with the same arguments changes nothing.
"""

from typing import Iterable, List

from ..classification import requires_escalation
from ..core.config import ALL_CATEGORIES
from ..models.data_models import DerivedTicket


def _matches_category(ticket: DerivedTicket, selected_category: str) -> bool:
    return selected_category == ALL_CATEGORIES or ticket.category == selected_category


def _matches_query(ticket: DerivedTicket, query: str) -> bool:
    if not query:
        return True
    q = query.lower()
    return (
        q in ticket.summary.lower()
        or q in (ticket.requester_name or '').lower()
        or q in (ticket.subject or '').lower()
    )


def filter_tickets(tickets: Iterable[DerivedTicket],
                   selected_category: str = ALL_CATEGORIES,
                   escalate_only: bool = False,
                   query: str = "") -> List[DerivedTicket]:
    """Return the tickets matching every active filter, in input order."""
    result = []
    for ticket in tickets:
        if not _matches_category(ticket, selected_category):
            continue
        if escalate_only and not requires_escalation(ticket.category):
            continue
        if not _matches_query(ticket, query):
            continue
        result.append(ticket)
    return result
