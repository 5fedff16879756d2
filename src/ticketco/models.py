"""Data models for TicketCo item_grosses pages."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ItemGrossSchema(BaseModel):
    """One row of the item_grosses feed. Unlisted fields are ignored."""
    model_config = ConfigDict(extra="ignore")

    capacity_name: Optional[str] = Field(default=None, description="Capacity (category) label")
    item_type_title: Optional[str] = Field(default=None, description="Product label")
    item_type_id: Optional[int] = Field(default=None, description="Numeric product type id")
    transaction_datestamp: datetime = Field(description="When the transaction happened")


class ItemGrossesPage(BaseModel):
    """Payload of one item_grosses page."""
    model_config = ConfigDict(extra="ignore")

    item_grosses: Optional[List[ItemGrossSchema]] = None


@dataclass(frozen=True)
class TransactionRecord:
    """A single sold item, as reported by TicketCo."""
    capacity_name: str
    item_type_title: str
    item_type_id: Optional[int]
    timestamp: datetime

    @classmethod
    def from_schema(cls, row: ItemGrossSchema) -> "TransactionRecord":
        timestamp = row.transaction_datestamp
        # Naive datestamps are taken as UTC
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            capacity_name=row.capacity_name or "",
            item_type_title=row.item_type_title or "",
            item_type_id=row.item_type_id,
            timestamp=timestamp
        )


@dataclass
class Page:
    """Records of one fetched page."""
    number: int
    records: List[TransactionRecord] = field(default_factory=list)
    is_last_page: bool = False
