"""
Reports module for Ticket Triage.

Contains the CSV export of the filtered ticket list.
"""

from .csv_export import to_csv, write_csv, ticket_row

__all__ = ['to_csv', 'write_csv', 'ticket_row']
