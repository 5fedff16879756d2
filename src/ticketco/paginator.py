"""Page loop over a paginated record source."""
from typing import List, Protocol, Tuple

from .models import Page, TransactionRecord
from utils.logger import get_logger

logger = get_logger()

DEFAULT_MAX_PAGES = 500


class PageSource(Protocol):
    def fetch_page(self, page_number: int) -> Page:
        ...


def collect_records(source: PageSource, max_pages: int = DEFAULT_MAX_PAGES) -> Tuple[List[TransactionRecord], int]:
    """
    Read pages 1, 2, 3, ... until the source reports its last page.

    The full all-time record set is fetched on every call. Fetch errors
    propagate; a partial record set is never returned.

    Args:
        source: Anything with fetch_page(page_number) -> Page
        max_pages: Hard ceiling on the number of pages requested

    Returns:
        (records, pages_fetched)
    """
    records: List[TransactionRecord] = []
    pages_fetched = 0

    for page_number in range(1, max_pages + 1):
        page = source.fetch_page(page_number)
        pages_fetched += 1
        records.extend(page.records)

        if page.is_last_page:
            break
    else:
        logger.warning(f"Stopped after {max_pages} pages without reaching the last page")

    logger.info(f"Collected {len(records)} records from {pages_fetched} pages")
    return records, pages_fetched
