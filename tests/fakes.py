"""Hand-written stand-ins for the network and storage collaborators."""
import requests

from ticketco.models import Page


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: https://secret", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records calls and returns queued responses (or raises queued exceptions)."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def _next(self):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, params=None, timeout=None):
        self.calls.append(("GET", url, params, timeout))
        return self._next()

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json, timeout))
        return self._next()

    def close(self):
        self.closed = True


class ListSource:
    """Serves pre-built pages of records; an empty page ends the feed."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def fetch_page(self, page_number):
        self.requested.append(page_number)
        if page_number > len(self.pages):
            return Page(number=page_number, records=[], is_last_page=True)
        records = self.pages[page_number - 1]
        return Page(number=page_number, records=list(records), is_last_page=not records)


class EndlessSource:
    """Never reports a last page."""

    def __init__(self, record):
        self.record = record
        self.requested = 0

    def fetch_page(self, page_number):
        self.requested += 1
        return Page(number=page_number, records=[self.record], is_last_page=False)


class FailingSource:
    def __init__(self, error, fail_on_page=1):
        self.error = error
        self.fail_on_page = fail_on_page

    def fetch_page(self, page_number):
        if page_number == self.fail_on_page:
            raise self.error
        return Page(number=page_number, records=[], is_last_page=False)


class RecordingStore:
    def __init__(self, error=None):
        self.error = error
        self.saved = []

    def save_snapshot(self, snapshot):
        if self.error:
            raise self.error
        self.saved.append(snapshot)
        return len(self.saved)


class RecordingNotifier:
    def __init__(self, error=None):
        self.error = error
        self.published = []

    def publish(self, payload):
        if self.error:
            raise self.error
        self.published.append(payload)
