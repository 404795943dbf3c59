"""
Per-ticket actions offered in the ticket list.

"Mark resolved" and "Internal note" are placeholders: they acknowledge the
click and change nothing, since there is no backend to write to.  "Copy
summary" writes to the browser clipboard on a best-effort basis.
"""

import json
import logging

logger = logging.getLogger(__name__)

RESOLVE_ACK = "Mark as resolved (mock) - backend not implemented"
NOTE_ACK = "Add internal note (mock) - backend not implemented"


def mark_resolved(ticket) -> str:
    """Acknowledge a resolve request without changing any state."""
    logger.info(f"Mock resolve requested for ticket {ticket.id}")
    return RESOLVE_ACK


def add_internal_note(ticket) -> str:
    """Acknowledge an internal-note request without changing any state."""
    logger.info(f"Mock internal note requested for ticket {ticket.id}")
    return NOTE_ACK


def copy_summary_script(summary: str) -> str:
    """JavaScript expression copying ``summary`` to the clipboard.

    The text is JSON-encoded so quotes and backslashes survive.  Browsers
    without the async clipboard API evaluate to nothing instead of throwing.
    """
    return f"navigator.clipboard && navigator.clipboard.writeText({json.dumps(summary or '')})"


def copy_to_clipboard(summary: str, key: str) -> bool:
    """Copy ``summary`` to the browser clipboard.

    Returns:
        True if the script was dispatched, False if the browser bridge is
        unavailable.  Failures are never shown to the user.
    """
    try:
        from streamlit_js_eval import streamlit_js_eval
        streamlit_js_eval(js_expressions=copy_summary_script(summary), key=key)
        return True
    except Exception as e:
        logger.debug(f"Clipboard copy unavailable: {e}")
        return False
