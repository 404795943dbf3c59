"""
Pipeline module for Ticket Triage.

Contains the ticket source loader and the load -> classify -> aggregate
orchestration.
"""

from .loader import load_tickets, parse_tickets
from .orchestrator import TicketPipeline, build_dashboard_data

__all__ = [
    'TicketPipeline',
    'build_dashboard_data',
    'load_tickets',
    'parse_tickets',
]
