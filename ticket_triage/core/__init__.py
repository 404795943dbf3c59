"""
Core module for Ticket Triage.

Contains configuration and text utilities.
"""

from ticket_triage.core.config import *
from ticket_triage.core.utils import clean_text, summarize, created_date

__all__ = [
    # Config
    'CATEGORY_RULES',
    'CATEGORY_NAMES',
    'FALLBACK_CATEGORY',
    'ESCALATION_CATEGORIES',
    'ALL_CATEGORIES',
    # Utils
    'clean_text',
    'summarize',
    'created_date',
]
