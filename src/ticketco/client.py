"""TicketCo public API client for the item_grosses feed."""
from typing import Optional

import requests
from pydantic import ValidationError

from .models import ItemGrossesPage, Page, TransactionRecord
from utils.logger import get_logger
from utils.exceptions import NetworkError, PayloadError

logger = get_logger()

DEFAULT_ENDPOINT = "https://ticketco.events/api/public/v1/item_grosses"


class TicketCoClient:
    """Fetches pages of sold items for one event."""

    def __init__(
        self,
        api_key: str,
        event_id: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        include_pii: bool = False,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.event_id = event_id
        self.endpoint = endpoint
        self.timeout = timeout
        self.include_pii = include_pii
        self.session = session or requests.Session()

    def fetch_page(self, page_number: int) -> Page:
        """
        Fetch one page of the feed.

        Args:
            page_number: 1-based page number

        Returns:
            Page whose is_last_page is set once the feed runs dry

        Raises:
            NetworkError: transport failure or non-2xx response
            PayloadError: response body is not a valid item_grosses page
        """
        params = {
            "token": self.api_key,
            "event_id": self.event_id,
            "page": str(page_number),
            "pii": "true" if self.include_pii else "false"
        }

        try:
            response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            # The token travels in the query string, keep it out of the log
            raise NetworkError(f"Failed to fetch page {page_number}: {type(e).__name__}") from e

        try:
            payload = ItemGrossesPage.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise PayloadError(f"Malformed item_grosses page {page_number}: {e}") from e

        rows = payload.item_grosses or []
        records = [TransactionRecord.from_schema(row) for row in rows]
        logger.debug(f"Fetched page {page_number}: {len(records)} records")

        return Page(number=page_number, records=records, is_last_page=not records)

    def close(self) -> None:
        self.session.close()
