"""
Central Configuration Module for Ticket Triage.

=== PURPOSE ===
This module is the single source of truth for every constant used across the
dashboard: the ordered classification rule table, the fallback category, the
escalation flags, the CSV export layout, and the location of the ticket data.
Every other module imports from here rather than defining its own literals.

=== DATA FLOW ===
  1. CATEGORY_RULES drives the classifier (ticket_triage.classification):
     rules are evaluated top to bottom and the first match wins.
  2. ESCALATION_CATEGORIES is derived from the same rule table, so renaming a
     category can never silently desync the escalation policy.
  3. TICKETS_SOURCE / TICKETS_FETCH_TIMEOUT configure the loader
     (ticket_triage.pipeline.loader).
  4. CSV_HEADERS / ESCALATE_YES / ESCALATE_NO / EXPORT_* feed the CSV export.

Values that operators may want to change without editing code are read from
environment variables.
"""

import os
import re
import logging
from pathlib import Path

from ..models.data_models import CategoryRule

logger = logging.getLogger(__name__)


def _env_number(name, default, cast):
    """Numeric environment override; the default when unset or malformed."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a valid {cast.__name__}, using {default}")
        return default


# ==========================================
# CLASSIFICATION TAXONOMY
# ==========================================
# Order matters: a ticket matching several rules gets the FIRST one.
# "API error" therefore lands in Integrations & API, not Bugs & Errors.
CATEGORY_RULES = (
    CategoryRule(
        name="Access & Authentication",
        pattern=re.compile(
            r"(locked|lock(ed)?|cannot log|can't log|can't login|login failed|"
            r"too many attempts|locked out|2fa|two[- ]fa|two factor|mfa|authenticat)",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        name="Billing & Payment",
        pattern=re.compile(
            r"(payment|billing|invoice|charge|paid|card|subscription|fatura|cobranç|boleto)",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        name="Performance & Latency",
        pattern=re.compile(
            r"(slow|lag|timeout|latency|performance|lento|demora|carregando)",
            re.IGNORECASE,
        ),
        escalate=True,
    ),
    CategoryRule(
        name="Integrations & API",
        pattern=re.compile(
            r"(api|integration|integrat|webhook|sdk|endpoint|oauth|token|callback)",
            re.IGNORECASE,
        ),
        escalate=True,
    ),
    CategoryRule(
        name="Bugs & Errors",
        pattern=re.compile(
            r"(error|bug|exception|stack trace|crash|falha|não funciona|erro)",
            re.IGNORECASE,
        ),
        escalate=True,
    ),
    CategoryRule(
        name="Feature Request",
        pattern=re.compile(
            r"(feature request|request feature|would be nice|improvement|melhoria|recurso)",
            re.IGNORECASE,
        ),
    ),
)

# Assigned when no rule matches. Never escalated.
FALLBACK_CATEGORY = "Support & Usage"

# Every label the classifier can return, in rule order with the fallback last.
CATEGORY_NAMES = tuple(rule.name for rule in CATEGORY_RULES) + (FALLBACK_CATEGORY,)

# Categories that must be escalated to engineering.
ESCALATION_CATEGORIES = frozenset(rule.name for rule in CATEGORY_RULES if rule.escalate)

# ==========================================
# FILTERING
# ==========================================
# Pseudo-category at the top of the selector meaning "no category filter".
ALL_CATEGORIES = "All"

# ==========================================
# TICKET SOURCE
# ==========================================
# Bundled sample document, shaped as {"tickets": [...]}.
DEFAULT_TICKETS_PATH = Path(__file__).resolve().parent.parent / "data" / "support_tickets.json"

# Either an http(s) URL or a filesystem path.
TICKETS_SOURCE = os.environ.get("TICKETS_SOURCE", str(DEFAULT_TICKETS_PATH))

# Seconds before a network fetch of the ticket document is abandoned.
TICKETS_FETCH_TIMEOUT = _env_number("TICKETS_FETCH_TIMEOUT", 10.0, float)

# ==========================================
# CSV EXPORT
# ==========================================
CSV_HEADERS = ('category', 'subject', 'requester', 'email', 'date', 'summary', 'escalate_to_eng')
ESCALATE_YES = "YES"
ESCALATE_NO = "NO"
EXPORT_FILENAME = "tickets_filtered.csv"
EXPORT_MIME = "text/csv"
EXPORT_ENCODING = "utf-8"

# ==========================================
# DASHBOARD
# ==========================================
DASHBOARD_PORT = _env_number("DASHBOARD_PORT", 8501, int)
DASHBOARD_TITLE = "Support Tickets Dashboard"

# Bar colors cycle through this palette.
CHART_COLORS = ['#4CAF50', '#2196F3', '#FFC107', '#F44336']
ESCALATE_COLOR = '#DC3545'
NORMAL_COLOR = '#0066CC'
