"""
CSV export of the filtered ticket list.

The export mirrors what the user currently sees: the filtered subset, not the
full data set.  Column layout (``core.config.CSV_HEADERS``)::

    category, subject, requester, email, date, summary, escalate_to_eng

Quoting rules
-------------
- ``subject`` and ``summary`` are always wrapped in double quotes.
- Any other field is quoted only when it contains a double quote, a comma
  or a line break, so the column count of every row equals the header's.
- Double quotes inside a quoted field are doubled (``"`` -> ``""``).

Rows are joined with ``\\n`` and the text has no trailing newline.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from ..classification import requires_escalation
from ..core.config import CSV_HEADERS, ESCALATE_NO, ESCALATE_YES, EXPORT_ENCODING
from ..models.data_models import DerivedTicket

logger = logging.getLogger(__name__)

_SPECIAL_CHARS = ('"', ',', '\n', '\r')


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _field(value, always_quote: bool = False) -> str:
    value = value if isinstance(value, str) else ('' if value is None else str(value))
    if always_quote or any(ch in value for ch in _SPECIAL_CHARS):
        return _quote(value)
    return value


def ticket_row(ticket: DerivedTicket) -> List[str]:
    """Encoded CSV fields for one ticket."""
    return [
        _field(ticket.category),
        _field(ticket.subject, always_quote=True),
        _field(ticket.requester_name),
        _field(ticket.requester_email),
        _field(ticket.created_date),
        _field(ticket.summary, always_quote=True),
        ESCALATE_YES if requires_escalation(ticket.category) else ESCALATE_NO,
    ]


def to_csv(tickets: Iterable[DerivedTicket]) -> str:
    """Serialize tickets to CSV text (header row first, no trailing newline)."""
    lines = [','.join(CSV_HEADERS)]
    lines.extend(','.join(ticket_row(t)) for t in tickets)
    return '\n'.join(lines)


def write_csv(tickets: Iterable[DerivedTicket], path) -> Path:
    """Write the CSV export to ``path`` as UTF-8 and return the path."""
    tickets = list(tickets)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv(tickets), encoding=EXPORT_ENCODING)
    logger.info(f"Exported {len(tickets)} tickets to {path}")
    return path
