"""
Pipeline Orchestrator - load, classify and aggregate support tickets.

The pipeline is a short sequence of pure steps over an immutable ticket list:

::

    [JSON document]
         |
         v
    load()      --> self.tickets   (list of Ticket, loaded once)
         |
         v
    run()       --> DashboardData  (derived tickets, counts, selector options)
         |
         v
    filter()    --> visible subset for the current FilterConfig

``run()`` is a pure function of ``self.tickets``; calling it again after a
reload recomputes everything.  ``filter()`` never mutates the pipeline.
"""

import logging
from typing import List, Optional

from ..analysis import aggregate, category_options, filter_tickets, summary_stats
from ..classification import classify_tickets
from ..models.data_models import DashboardData, DerivedTicket, FilterConfig, Ticket
from .loader import load_tickets

logger = logging.getLogger(__name__)


def build_dashboard_data(tickets, show_progress: bool = False) -> DashboardData:
    """Derive, aggregate and summarise a ticket list."""
    derived = classify_tickets(tickets, show_progress=show_progress)
    counts = aggregate(derived)
    stats = summary_stats(derived)
    return DashboardData(
        tickets=derived,
        counts=counts,
        categories=category_options(counts),
        total=stats['total'],
        escalate_count=stats['escalate_count'],
    )


class TicketPipeline:
    """
    Coordinates loading and deriving the ticket data for one session.

    Typical usage
    -------------
    ::

        pipe = TicketPipeline("tickets.json")
        pipe.load()
        data = pipe.run()
        visible = pipe.filter(FilterConfig(escalate_only=True))
    """

    def __init__(self, source: Optional[str] = None, show_progress: bool = False):
        self.source = source
        self.show_progress = show_progress
        self.tickets: List[Ticket] = []
        self.data: Optional[DashboardData] = None

    def load(self) -> List[Ticket]:
        """Load the ticket list; an empty list if the source is unavailable."""
        self.tickets = load_tickets(self.source)
        self.data = None
        return self.tickets

    def run(self) -> DashboardData:
        """Classify and aggregate the loaded tickets."""
        self.data = build_dashboard_data(self.tickets, show_progress=self.show_progress)
        logger.info(
            f"Pipeline complete: {self.data.total} tickets, "
            f"{len(self.data.counts)} categories, {self.data.escalate_count} to escalate"
        )
        return self.data

    def filter(self, config: Optional[FilterConfig] = None) -> List[DerivedTicket]:
        """Tickets visible under ``config`` (all tickets if omitted)."""
        if self.data is None:
            self.run()
        config = config or FilterConfig()
        return filter_tickets(self.data.tickets, config.category, config.escalate_only, config.query)

    def get_results(self) -> Optional[DashboardData]:
        return self.data
