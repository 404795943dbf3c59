"""
Analysis module for Ticket Triage.

Aggregation of category counts and the filter engine behind the ticket list.
"""

from .aggregation import aggregate, category_options, summary_stats
from .filtering import filter_tickets

__all__ = [
    'aggregate',
    'category_options',
    'summary_stats',
    'filter_tickets',
]
