"""
Ticket Triage - rule-based support ticket classification dashboard.

This package provides:
- Ordered regex classification of support tickets into seven categories
- Escalation policy for categories that need engineering attention
- Category aggregation and a conjunctive filter engine
- CSV export of the filtered ticket list
- A Streamlit dashboard with Plotly charts
"""

__version__ = "1.0.0"
__author__ = "Ticket Triage Team"

# Core imports
from .core.config import *
from .core.utils import clean_text, summarize, created_date

# Models
from .models import Ticket, DerivedTicket, CategoryRule, FilterConfig, DashboardData, as_ticket

# Classification
from .classification import (
    pattern_classify,
    classify,
    requires_escalation,
    derive_ticket,
    classify_tickets,
)

# Analysis
from .analysis import aggregate, category_options, summary_stats, filter_tickets

# Reports
from .reports import to_csv, write_csv

# Pipeline
from .pipeline import TicketPipeline, build_dashboard_data, load_tickets

__all__ = [
    # Core
    'clean_text',
    'summarize',
    'created_date',

    # Models
    'Ticket',
    'DerivedTicket',
    'CategoryRule',
    'FilterConfig',
    'DashboardData',
    'as_ticket',

    # Classification
    'pattern_classify',
    'classify',
    'requires_escalation',
    'derive_ticket',
    'classify_tickets',

    # Analysis
    'aggregate',
    'category_options',
    'summary_stats',
    'filter_tickets',

    # Reports
    'to_csv',
    'write_csv',

    # Pipeline
    'TicketPipeline',
    'build_dashboard_data',
    'load_tickets',

    # Metadata
    '__version__',
]
