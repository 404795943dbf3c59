"""
Models module for Ticket Triage.

Contains the ticket, derived ticket, rule and filter data models.
"""

from .data_models import (
    Ticket,
    DerivedTicket,
    CategoryRule,
    FilterConfig,
    DashboardData,
    as_ticket,
)

__all__ = [
    'Ticket',
    'DerivedTicket',
    'CategoryRule',
    'FilterConfig',
    'DashboardData',
    'as_ticket',
]
