"""TicketCo integration module."""
from .models import TransactionRecord, Page
from .client import TicketCoClient
from .paginator import collect_records

__all__ = ["TransactionRecord", "Page", "TicketCoClient", "collect_records"]
