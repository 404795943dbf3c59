"""
Plotly charts for the ticket dashboard.

- Category distribution bar chart
- Escalation share donut
"""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Dict

from ..classification import requires_escalation
from ..core.config import CHART_COLORS, ESCALATE_COLOR, NORMAL_COLOR


def create_plotly_theme():
    """Get consistent Plotly theme settings."""
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color='#E0E0E0'),
        margin=dict(l=40, r=40, t=50, b=40),
    )


def _empty_figure() -> go.Figure:
    fig = go.Figure().add_annotation(text="No data available", x=0.5, y=0.5,
                                     showarrow=False)
    fig.update_layout(**create_plotly_theme())
    return fig


def counts_frame(counts: Dict[str, int]) -> pd.DataFrame:
    """Category counts as a two-column frame, in discovery order."""
    return pd.DataFrame({
        'Category': list(counts.keys()),
        'Tickets': list(counts.values()),
    })


# =============================================================================
# CATEGORY DISTRIBUTION
# =============================================================================

def chart_category_bar(counts: Dict[str, int]) -> go.Figure:
    """Bar chart of tickets per category; bar colors cycle through CHART_COLORS."""
    if not counts:
        return _empty_figure()

    df = counts_frame(counts)
    colors = [CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(df))]

    fig = px.bar(df, x='Category', y='Tickets', text='Tickets')
    fig.update_traces(marker_color=colors, textposition='outside')
    fig.update_layout(
        **create_plotly_theme(),
        title='Tickets by Category',
        showlegend=False,
        xaxis_title=None,
        yaxis_title='Number of tickets',
    )
    return fig


# =============================================================================
# ESCALATION SHARE
# =============================================================================

def chart_escalation_pie(counts: Dict[str, int]) -> go.Figure:
    """Donut of tickets to escalate vs. tickets support can handle."""
    if not counts:
        return _empty_figure()

    escalate = sum(n for cat, n in counts.items() if requires_escalation(cat))
    other = sum(counts.values()) - escalate

    fig = go.Figure(go.Pie(
        labels=['Escalate to engineering', 'Handled by support'],
        values=[escalate, other],
        hole=0.55,
        marker=dict(colors=[ESCALATE_COLOR, NORMAL_COLOR]),
        sort=False,
    ))
    fig.update_layout(**create_plotly_theme(), title='Escalation Share')
    return fig
