"""
Ticket Triage - Support Tickets Dashboard

Streamlit page with:
- KPI header (total tickets, tickets to escalate, categories)
- Category distribution bar chart and escalation share donut
- Search box, category selector and "escalated only" toggle
- Ticket list with copy-summary and mock resolve / note actions
- CSV export of the filtered view

Run with:
    streamlit run ticket_triage/dashboard/streamlit_app.py
"""

import streamlit as st
from pathlib import Path
import sys
import logging

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ticket_triage.analysis import filter_tickets
from ticket_triage.classification import requires_escalation
from ticket_triage.core.config import (
    ALL_CATEGORIES, DASHBOARD_TITLE, EXPORT_FILENAME, EXPORT_MIME, TICKETS_SOURCE,
)
from ticket_triage.dashboard.actions import add_internal_note, copy_to_clipboard, mark_resolved
from ticket_triage.dashboard.charts import chart_category_bar, chart_escalation_pie
from ticket_triage.models.data_models import DashboardData, FilterConfig
from ticket_triage.pipeline import build_dashboard_data, load_tickets
from ticket_triage.reports import to_csv

logger = logging.getLogger(__name__)


# ============================================================================
# PAGE CONFIGURATION
# ============================================================================

def configure_page():
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title=DASHBOARD_TITLE,
        page_icon="🎫",
        layout="wide",
        initial_sidebar_state="collapsed",
    )


def load_custom_css():
    """Styles for the escalation badge and the header."""
    st.markdown("""
    <style>
    .main-header {
        font-size: 2rem;
        font-weight: 700;
        margin-bottom: 0.25rem;
    }
    .sub-header {
        color: #6C757D;
        font-size: 0.95rem;
        margin-bottom: 1.5rem;
    }
    .alert-badge {
        display: inline-block;
        padding: 2px 10px;
        border-radius: 20px;
        font-size: 0.75rem;
        font-weight: 600;
        background: #DC3545;
        color: white;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


# ============================================================================
# DATA
# ============================================================================

@st.cache_data(show_spinner=False)
def get_dashboard_data(source: str) -> DashboardData:
    """Load and derive the ticket list once per source."""
    return build_dashboard_data(load_tickets(source))


# ============================================================================
# SECTIONS
# ============================================================================

def render_header(data: DashboardData, visible):
    col1, col2 = st.columns([5, 1])

    with col1:
        st.markdown(f'<p class="main-header">{DASHBOARD_TITLE}</p>', unsafe_allow_html=True)
        st.markdown(f'<p class="sub-header">{data.total} tickets by category and the ones '
                    'that must be escalated to engineering</p>', unsafe_allow_html=True)

    with col2:
        st.download_button(
            label="⬇️ Export CSV",
            data=to_csv(visible).encode('utf-8'),
            file_name=EXPORT_FILENAME,
            mime=EXPORT_MIME,
            key="download_csv",
        )


def render_kpis(data: DashboardData):
    col1, col2, col3 = st.columns(3)
    col1.metric("Tickets", data.total)
    col2.metric("To escalate", data.escalate_count)
    col3.metric("Categories", len(data.counts))


def render_filters(data: DashboardData) -> FilterConfig:
    """Draw the filter widgets and return the selections as a FilterConfig."""
    st.markdown("### Quick Filter")

    query = st.text_input("Search", placeholder="Search by subject, name or keyword...",
                          key="query", label_visibility="collapsed")

    col1, col2 = st.columns([3, 1])
    with col1:
        category = st.selectbox(
            "Category",
            data.categories,
            format_func=lambda c: c if c == ALL_CATEGORIES else f"{c} ({data.counts.get(c, 0)})",
            key="category",
            label_visibility="collapsed",
        )
    with col2:
        escalate_only = st.checkbox("Escalated only", key="escalate_only")

    return FilterConfig(category=category or ALL_CATEGORIES,
                        escalate_only=escalate_only,
                        query=query or "")


def render_ticket(idx: int, ticket):
    escalate = requires_escalation(ticket.category)
    name = ticket.requester_name or '—'
    label = f"{'🔴 ' if escalate else ''}{ticket.subject or '(no subject)'}  ·  {name} • {ticket.created_date} • *{ticket.category}*"

    with st.expander(label):
        if escalate:
            st.markdown('<span class="alert-badge">ESCALATE</span>', unsafe_allow_html=True)

        st.write(ticket.summary)

        col1, col2 = st.columns(2)
        col1.markdown(f"Requester: **{name}**")
        col2.markdown(f"Email: **{ticket.requester_email or '—'}**")

        b1, b2, b3 = st.columns(3)
        if b1.button("📋 Copy summary", key=f"copy_{idx}"):
            copy_to_clipboard(ticket.summary, key=f"clip_{idx}")
        if b2.button("✅ Mark resolved", key=f"resolve_{idx}"):
            st.toast(mark_resolved(ticket), icon="ℹ️")
        if b3.button("📝 Internal note", key=f"note_{idx}"):
            st.toast(add_internal_note(ticket), icon="ℹ️")


def render_ticket_list(config: FilterConfig, visible):
    col1, col2 = st.columns([1, 1])
    col1.markdown(f"### Tickets ({len(visible)})")
    showing = "all categories" if config.category == ALL_CATEGORIES else config.category
    col2.markdown(f"*Showing {showing}*")

    if not visible:
        st.info("No tickets match the filters")
        return

    for idx, ticket in enumerate(visible):
        render_ticket(idx, ticket)


# ============================================================================
# MAIN
# ============================================================================

def main():
    configure_page()
    load_custom_css()

    with st.spinner("Loading tickets..."):
        data = get_dashboard_data(TICKETS_SOURCE)

    # The header is drawn last (the export needs the filtered view) but sits on top.
    header = st.container()
    render_kpis(data)

    chart_col, pie_col, filter_col = st.columns([3, 2, 2])
    with filter_col:
        config = render_filters(data)
    visible = filter_tickets(data.tickets, config.category, config.escalate_only, config.query)

    with chart_col:
        st.plotly_chart(chart_category_bar(data.counts), use_container_width=True)
    with pie_col:
        st.plotly_chart(chart_escalation_pie(data.counts), use_container_width=True)

    with header:
        render_header(data, visible)

    st.markdown("---")
    render_ticket_list(config, visible)

    if data.is_empty:
        st.caption(f"No tickets loaded from {TICKETS_SOURCE}")


if __name__ == "__main__":
    main()
