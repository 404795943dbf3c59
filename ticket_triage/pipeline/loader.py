"""
Ticket Source Loader
====================

Reads the static ticket document, shaped as ``{"tickets": [...]}``, from
either an http(s) URL (fetched with ``requests``) or a local JSON file.

Failure policy
--------------
Nothing here is fatal.  A network error, an unreadable file, invalid JSON or
a document of the wrong shape is logged and produces an empty list, so the
dashboard still renders (empty) instead of crashing.  There is no retry.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import requests

from ..core.config import TICKETS_FETCH_TIMEOUT, TICKETS_SOURCE
from ..models.data_models import Ticket

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    """True if ``source`` looks like an http(s) URL rather than a path."""
    return str(source).lower().startswith(('http://', 'https://'))


def fetch_document(url: str, timeout: float = TICKETS_FETCH_TIMEOUT) -> Any:
    """GET ``url`` and decode the JSON body.

    Raises:
        requests.RequestException: On connection errors or non-2xx status.
        ValueError: If the body is not valid JSON.
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def read_document(path) -> Any:
    """Read and decode a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON.
    """
    with open(Path(path), 'r', encoding='utf-8') as fh:
        return json.load(fh)


def parse_tickets(document: Any) -> List[Ticket]:
    """Turn a decoded ``{"tickets": [...]}`` document into Ticket objects.

    Entries that are not JSON objects are skipped.
    """
    if not isinstance(document, dict):
        logger.warning(f"Ticket document is a {type(document).__name__}, expected an object")
        return []

    raw_tickets = document.get('tickets')
    if raw_tickets is None:
        logger.warning("Ticket document has no 'tickets' key")
        return []
    if not isinstance(raw_tickets, list):
        logger.warning("'tickets' is not a list")
        return []

    tickets = []
    for idx, entry in enumerate(raw_tickets):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping ticket #{idx}: not an object")
            continue
        tickets.append(Ticket.from_dict(entry))
    return tickets


def load_tickets(source: Optional[str] = None,
                 timeout: float = TICKETS_FETCH_TIMEOUT) -> List[Ticket]:
    """Load tickets from a URL or file; an empty list on any failure.

    Args:
        source: URL or path.  Defaults to ``core.config.TICKETS_SOURCE``.
        timeout: Network timeout in seconds (URLs only).

    Returns:
        Tickets in document order.
    """
    source = str(source or TICKETS_SOURCE)

    try:
        if is_url(source):
            document = fetch_document(source, timeout=timeout)
        else:
            document = read_document(source)
    except (requests.RequestException, OSError, ValueError) as e:
        logger.error(f"Failed to load tickets from {source}: {e}")
        return []

    tickets = parse_tickets(document)
    logger.info(f"Loaded {len(tickets)} tickets from {source}")
    return tickets
