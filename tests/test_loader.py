"""
Unit tests for the ticket source loader.
"""

import unittest
from unittest.mock import patch, MagicMock
import json
import shutil
import tempfile
from pathlib import Path
import sys

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from ticket_triage.core.config import DEFAULT_TICKETS_PATH
from ticket_triage.models.data_models import Ticket
from ticket_triage.pipeline.loader import is_url, load_tickets, parse_tickets
from tests.fixtures.sample_data import create_sample_document, create_sample_json_file


class TestParseTickets(unittest.TestCase):
    """Test suite for parse_tickets()."""

    def test_valid_document(self):
        tickets = parse_tickets(create_sample_document())

        self.assertEqual(len(tickets), 7)
        self.assertIsInstance(tickets[0], Ticket)
        self.assertEqual(tickets[0].id, 1)

    def test_not_an_object(self):
        self.assertEqual(parse_tickets([1, 2, 3]), [])

    def test_missing_tickets_key(self):
        self.assertEqual(parse_tickets({'items': []}), [])

    def test_tickets_not_a_list(self):
        self.assertEqual(parse_tickets({'tickets': 'nope'}), [])

    def test_skips_non_object_entries(self):
        tickets = parse_tickets({'tickets': [{'id': 1}, 'junk', None, {'id': 2}]})
        self.assertEqual([t.id for t in tickets], [1, 2])


class TestLoadTickets(unittest.TestCase):
    """Test suite for load_tickets() from files and URLs."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_is_url(self):
        self.assertTrue(is_url("https://example.com/tickets.json"))
        self.assertTrue(is_url("HTTP://example.com"))
        self.assertFalse(is_url("/tmp/tickets.json"))

    def test_load_from_file(self):
        path = create_sample_json_file(self.test_dir / "tickets.json")
        tickets = load_tickets(str(path))

        self.assertEqual(len(tickets), 7)

    def test_missing_file_returns_empty(self):
        self.assertEqual(load_tickets(str(self.test_dir / "missing.json")), [])

    def test_invalid_json_returns_empty(self):
        path = self.test_dir / "bad.json"
        path.write_text("{not json", encoding='utf-8')

        self.assertEqual(load_tickets(str(path)), [])

    def test_wrong_shape_returns_empty(self):
        path = self.test_dir / "list.json"
        path.write_text(json.dumps([{'id': 1}]), encoding='utf-8')

        self.assertEqual(load_tickets(str(path)), [])

    def test_bundled_sample_document(self):
        tickets = load_tickets(str(DEFAULT_TICKETS_PATH))

        self.assertEqual(len(tickets), 15)
        self.assertEqual(tickets[-1].subject, "")

    @patch('ticket_triage.pipeline.loader.requests.get')
    def test_load_from_url(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = create_sample_document()

        tickets = load_tickets("https://example.com/tickets.json", timeout=3)

        self.assertEqual(len(tickets), 7)
        mock_get.assert_called_once_with("https://example.com/tickets.json", timeout=3)

    @patch('ticket_triage.pipeline.loader.requests.get')
    def test_url_connection_error_returns_empty(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("Connection refused")

        self.assertEqual(load_tickets("https://example.com/tickets.json"), [])

    @patch('ticket_triage.pipeline.loader.requests.get')
    def test_url_http_error_returns_empty(self, mock_get):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404")
        mock_get.return_value = response

        self.assertEqual(load_tickets("https://example.com/tickets.json"), [])

    @patch('ticket_triage.pipeline.loader.requests.get')
    def test_url_bad_json_returns_empty(self, mock_get):
        response = MagicMock()
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        self.assertEqual(load_tickets("https://example.com/tickets.json"), [])


if __name__ == '__main__':
    unittest.main()
