"""
Utility functions for ticket text processing.
"""

import re
import logging

from ..models.data_models import as_ticket

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r'\s+')


def clean_text(text):
    """Collapse whitespace runs (newlines included) to one space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(' ', str(text)).strip()


def summarize(ticket):
    """Single-line excerpt of a ticket: subject and body joined, then cleaned.

    Accepts a ``Ticket`` or the raw ticket mapping.  Missing subject or body
    count as empty strings.
    """
    ticket = as_ticket(ticket)
    return clean_text(ticket.subject + "\n" + ticket.body)


def created_date(created_at):
    """Date portion of an ISO-8601 timestamp (text before ``T``), or ''."""
    if not created_at or not isinstance(created_at, str):
        return ""
    return created_at.split('T', 1)[0]
