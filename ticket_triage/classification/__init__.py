"""
Rule-based classification engine for support tickets.

Every ticket is assigned exactly one category by evaluating the ordered rule
table in ``core.config.CATEGORY_RULES`` against the ticket summary:

::

    ticket
        |
        v
    summarize()            subject + body, whitespace collapsed
        |
        v
    lower-case
        |
        v
    pattern_classify()     rule 1 .. rule 6, first match wins
        | no match
        v
    FALLBACK_CATEGORY      "Support & Usage"

Rule order encodes priority.  A ticket mentioning both an API and an error
is classified as "Integrations & API" because that rule precedes
"Bugs & Errors".  There is no scoring, no confidence and no runtime
configuration: the same text always yields the same label.

The escalation policy lives here as well.  Each ``CategoryRule`` carries its
own ``escalate`` flag and ``ESCALATION_CATEGORIES`` is derived from the rule
table, so the two can never disagree.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional

from tqdm import tqdm

from ..core.config import CATEGORY_RULES, ESCALATION_CATEGORIES, FALLBACK_CATEGORY
from ..core.utils import created_date, summarize
from ..models.data_models import DerivedTicket, as_ticket

logger = logging.getLogger(__name__)


def pattern_classify(text: str) -> Optional[str]:
    """Return the label of the first rule whose pattern matches ``text``.

    Args:
        text: Ticket text.  It is lower-cased before matching.

    Returns:
        The matching category name, or ``None`` when no rule matches.
    """
    if not text:
        return None

    text_lower = str(text).lower()
    for rule in CATEGORY_RULES:
        if rule.matches(text_lower):
            return rule.name

    return None


def classify(ticket) -> str:
    """Assign a single category to a ticket.

    Args:
        ticket: A ``Ticket`` or a raw ticket mapping.

    Returns:
        One of ``core.config.CATEGORY_NAMES``; never empty.
    """
    return pattern_classify(summarize(ticket)) or FALLBACK_CATEGORY


def requires_escalation(category: str) -> bool:
    """True if tickets in ``category`` must be escalated to engineering."""
    return category in ESCALATION_CATEGORIES


def derive_ticket(ticket) -> DerivedTicket:
    """Compute the summary, category and creation date for one ticket."""
    ticket = as_ticket(ticket)
    summary = summarize(ticket)
    return DerivedTicket(
        ticket=ticket,
        category=pattern_classify(summary) or FALLBACK_CATEGORY,
        summary=summary,
        created_date=created_date(ticket.created_at),
    )


def classify_tickets(tickets: Iterable, show_progress: bool = False) -> List[DerivedTicket]:
    """Derive every ticket in a collection, preserving order.

    Args:
        tickets: ``Ticket`` objects or raw ticket mappings.
        show_progress: Whether to render a tqdm progress bar.

    Returns:
        A new list of ``DerivedTicket``; the input is left untouched.
    """
    tickets = list(tickets)
    logger.info(f"Classifying {len(tickets)} tickets...")

    derived = [
        derive_ticket(t)
        for t in tqdm(tickets, desc="  Classifying tickets", unit="ticket",
                      disable=not show_progress, ncols=80)
    ]

    distribution = Counter(d.category for d in derived)
    logger.info(f"Category distribution: {dict(distribution)}")

    return derived


__all__ = [
    'pattern_classify',
    'classify',
    'requires_escalation',
    'derive_ticket',
    'classify_tickets',
]
