"""
Data models for support ticket triage.

This module defines the **schema layer** of the dashboard.  Everything that
flows between the loader, the classifier, the filter engine and the export is
one of the dataclasses below.

Dataclass hierarchy
-------------------
::

    Ticket
        One raw support ticket as loaded from the JSON document.  Immutable.

    DerivedTicket
        A Ticket plus the computed ``category``, ``summary`` and
        ``created_date``.  Built by the classifier, never mutated.

    CategoryRule
        One entry of the ordered classification table: label, compiled
        pattern, and whether the category escalates to engineering.

    FilterConfig
        The current UI selections (category, escalate-only, query) as an
        explicit immutable value passed to the filter engine.

    DashboardData
        Everything the dashboard renders for one ticket list: derived
        tickets, category counts, selector options and headline numbers.

Normalisation conventions
-------------------------
Ticket text fields are always ``str``.  Absent, ``None`` or non-string values
become ``""`` so downstream code never has to guard against missing data.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional


def _text(value: Any) -> str:
    """Return ``value`` if it is a string, else an empty string."""
    return value if isinstance(value, str) else ""


def _section(value: Any) -> Mapping:
    """Return a nested JSON object, or an empty mapping when it is absent."""
    return value if isinstance(value, Mapping) else {}


# ============================================================================
# TICKET DATA MODEL
# ============================================================================

@dataclass(frozen=True)
class Ticket:
    """A single support ticket with the fields the dashboard uses.

    ``raw`` keeps the original mapping so the UI can show fields this model
    does not know about.  It is excluded from comparisons.
    """
    id: Optional[Any] = None
    subject: str = ""
    body: str = ""
    requester_name: str = ""
    requester_email: str = ""
    created_at: str = ""
    raw: Mapping = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Ticket":
        """Build a Ticket from the JSON shape used by the ticket source.

        Expected keys: ``id``, ``subject``, ``comment.body``,
        ``requester.name``, ``requester.email``, ``created_at``.  Every key
        is optional.
        """
        data = _section(data)
        comment = _section(data.get("comment"))
        requester = _section(data.get("requester"))
        return cls(
            id=data.get("id"),
            subject=_text(data.get("subject")),
            body=_text(comment.get("body")),
            requester_name=_text(requester.get("name")),
            requester_email=_text(requester.get("email")),
            created_at=_text(data.get("created_at")),
            raw=data,
        )


def as_ticket(obj: Any) -> Ticket:
    """Accept either a Ticket or a raw ticket mapping."""
    if isinstance(obj, Ticket):
        return obj
    return Ticket.from_dict(obj)


@dataclass(frozen=True)
class DerivedTicket:
    """A ticket augmented with its computed category, summary and date."""
    ticket: Ticket
    category: str
    summary: str
    created_date: str = ""

    @property
    def id(self):
        return self.ticket.id

    @property
    def subject(self) -> str:
        return self.ticket.subject

    @property
    def requester_name(self) -> str:
        return self.ticket.requester_name

    @property
    def requester_email(self) -> str:
        return self.ticket.requester_email


# ============================================================================
# CLASSIFICATION RULE
# ============================================================================

@dataclass(frozen=True)
class CategoryRule:
    """One ordered classification rule.

    The escalation flag is carried by the rule itself so the set of
    escalated categories is always derived from the rule table.
    """
    name: str
    pattern: re.Pattern
    escalate: bool = False

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


# ============================================================================
# FILTER CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class FilterConfig:
    """Current filter selections.

    ``category`` uses ``"All"`` as the no-filter sentinel (see
    ``core.config.ALL_CATEGORIES``).  ``query`` is matched as a
    case-insensitive substring; an empty query matches everything.
    """
    category: str = "All"
    escalate_only: bool = False
    query: str = ""

    def with_changes(self, **changes) -> "FilterConfig":
        return replace(self, **changes)

    def apply(self, tickets: List[DerivedTicket]) -> List[DerivedTicket]:
        from ..analysis.filtering import filter_tickets
        return filter_tickets(tickets, self.category, self.escalate_only, self.query)


# ============================================================================
# DASHBOARD DATA CONTAINER
# ============================================================================

@dataclass
class DashboardData:
    """Container for everything derived from one loaded ticket list.

    Attributes:
        tickets: Derived tickets in source order.
        counts: Category label -> ticket count (discovery order).
        categories: Selector options, ``"All"`` first then by descending count.
        total: Number of tickets.
        escalate_count: Number of tickets whose category escalates.
    """
    tickets: List[DerivedTicket] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    categories: List[str] = field(default_factory=list)
    total: int = 0
    escalate_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total == 0
