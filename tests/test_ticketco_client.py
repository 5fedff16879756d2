"""Tests for the TicketCo client and the page loop."""
import unittest
from datetime import datetime, timezone

import requests

from fakes import EndlessSource, FailingSource, FakeResponse, FakeSession, ListSource
from ticketco.client import TicketCoClient
from ticketco.models import TransactionRecord
from ticketco.paginator import collect_records
from utils.exceptions import NetworkError, PayloadError

ROW = {
    "capacity_name": "Festival Tickets",
    "item_type_title": "Regular Festival Ticket (Friday-Sunday)",
    "item_type_id": 20610868,
    "transaction_datestamp": "2025-06-01T10:15:00+02:00",
    "gross": 1200,
}


def make_record(capacity_name="Sauna"):
    return TransactionRecord(capacity_name, "", None, datetime(2025, 6, 1, tzinfo=timezone.utc))


class TestTicketCoClient(unittest.TestCase):
    """Test TicketCoClient.fetch_page."""

    def _client(self, *responses):
        session = FakeSession(responses)
        client = TicketCoClient("secret-token", "668574", endpoint="https://example.test/item_grosses",
                                timeout=5, session=session)
        return client, session

    def test_fetch_page_parses_rows(self):
        client, session = self._client(FakeResponse(payload={"item_grosses": [ROW]}))

        page = client.fetch_page(3)

        self.assertFalse(page.is_last_page)
        self.assertEqual(page.number, 3)
        record = page.records[0]
        self.assertEqual(record.capacity_name, "Festival Tickets")
        self.assertEqual(record.item_type_id, 20610868)
        self.assertEqual(record.timestamp, datetime(2025, 6, 1, 8, 15, tzinfo=timezone.utc))

        method, url, params, timeout = session.calls[0]
        self.assertEqual(method, "GET")
        self.assertEqual(url, "https://example.test/item_grosses")
        self.assertEqual(params, {"token": "secret-token", "event_id": "668574", "page": "3", "pii": "false"})
        self.assertEqual(timeout, 5)

    def test_missing_labels_become_empty(self):
        row = {"item_type_id": None, "transaction_datestamp": "2025-06-01T10:15:00"}
        client, _ = self._client(FakeResponse(payload={"item_grosses": [row]}))

        record = client.fetch_page(1).records[0]
        self.assertEqual(record.capacity_name, "")
        self.assertEqual(record.item_type_title, "")
        self.assertIsNone(record.item_type_id)
        self.assertEqual(record.timestamp.tzinfo, timezone.utc)

    def test_empty_page_is_last(self):
        client, _ = self._client(FakeResponse(payload={"item_grosses": []}))
        page = client.fetch_page(1)
        self.assertTrue(page.is_last_page)
        self.assertEqual(page.records, [])

    def test_missing_key_is_last(self):
        client, _ = self._client(FakeResponse(payload={}))
        self.assertTrue(client.fetch_page(1).is_last_page)

    def test_http_error_hides_token(self):
        client, _ = self._client(FakeResponse(status_code=500))
        with self.assertRaises(NetworkError) as ctx:
            client.fetch_page(1)
        self.assertNotIn("secret-token", str(ctx.exception))
        self.assertNotIsInstance(ctx.exception, PayloadError)

    def test_transport_error(self):
        client, _ = self._client(requests.ConnectionError("boom"))
        with self.assertRaises(NetworkError):
            client.fetch_page(1)

    def test_invalid_json(self):
        client, _ = self._client(FakeResponse(payload=None))
        with self.assertRaises(PayloadError):
            client.fetch_page(1)

    def test_malformed_rows(self):
        row = dict(ROW, transaction_datestamp="not a date")
        client, _ = self._client(FakeResponse(payload={"item_grosses": [row]}))
        with self.assertRaises(PayloadError):
            client.fetch_page(1)

    def test_close(self):
        client, session = self._client()
        client.close()
        self.assertTrue(session.closed)


class TestCollectRecords(unittest.TestCase):
    """Test the page loop."""

    def test_reads_until_empty_page(self):
        source = ListSource([[make_record(), make_record()], [make_record()], []])

        records, pages = collect_records(source)

        self.assertEqual(len(records), 3)
        self.assertEqual(pages, 3)
        self.assertEqual(source.requested, [1, 2, 3])

    def test_page_ceiling_stops_endless_source(self):
        source = EndlessSource(make_record())

        records, pages = collect_records(source, max_pages=7)

        self.assertEqual(pages, 7)
        self.assertEqual(source.requested, 7)
        self.assertEqual(len(records), 7)

    def test_default_ceiling(self):
        source = EndlessSource(make_record())
        _, pages = collect_records(source)
        self.assertEqual(pages, 500)

    def test_fetch_error_propagates(self):
        with self.assertRaises(NetworkError):
            collect_records(FailingSource(NetworkError("down"), fail_on_page=2))


if __name__ == "__main__":
    unittest.main()
