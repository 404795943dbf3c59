"""
Category aggregation over derived tickets.

Produces the per-category counts behind the bar chart, the ordered option
list for the category selector, and the headline numbers shown in the KPI
header.
"""

import logging
from typing import Dict, Iterable, List

from ..classification import requires_escalation
from ..core.config import ALL_CATEGORIES
from ..models.data_models import DerivedTicket

logger = logging.getLogger(__name__)


def aggregate(tickets: Iterable[DerivedTicket]) -> Dict[str, int]:
    """Count tickets per category.

    Keys appear in discovery order and are exactly the categories present,
    so the values always sum to the number of tickets.
    """
    counts: Dict[str, int] = {}
    for ticket in tickets:
        counts[ticket.category] = counts.get(ticket.category, 0) + 1
    return counts


def category_options(counts: Dict[str, int]) -> List[str]:
    """Selector options: ``"All"`` then categories by descending count.

    ``sorted`` is stable, so categories with equal counts keep their
    discovery order.
    """
    ordered = sorted(counts, key=lambda cat: -counts[cat])
    return [ALL_CATEGORIES] + ordered


def summary_stats(tickets: Iterable[DerivedTicket]) -> Dict[str, int]:
    """Headline numbers for the dashboard header."""
    tickets = list(tickets)
    counts = aggregate(tickets)
    escalate_count = sum(n for cat, n in counts.items() if requires_escalation(cat))
    return {
        'total': len(tickets),
        'escalate_count': escalate_count,
        'category_count': len(counts),
    }
