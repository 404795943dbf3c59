"""
Ticket Triage Dashboard - Streamlit Web Interface.

- Category distribution and escalation share charts
- Search, category and escalate-only filters
- Ticket list with copy-summary and mock actions
- CSV export of the filtered view
"""

from .app import dashboard_env, get_dashboard_path, build_streamlit_command

__all__ = ['dashboard_env', 'get_dashboard_path', 'build_streamlit_command']
